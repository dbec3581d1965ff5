"""Domain value objects."""

from dossierhub.domain.value_objects.core import AcceptedFormats, FileRef, QuantityRange

__all__ = ["AcceptedFormats", "FileRef", "QuantityRange"]
