"""Prune old image manifests from a Google Container Registry repository."""

__version__ = "0.1.0"
