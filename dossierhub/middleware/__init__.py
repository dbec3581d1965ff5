"""HTTP middleware applied in dossierhub.main (last added = outermost)."""

from dossierhub.middleware.request_size_limit import RequestSizeLimitMiddleware

__all__ = ["RequestSizeLimitMiddleware"]
