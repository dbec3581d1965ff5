"""Dossierhub: client document collection, review and archival for accounting firms."""
