"""Conversion backends and the backend registry."""

from .base import ConversionBackend
from .registry import BackendRegistry, create_default_registry

__all__ = ["ConversionBackend", "BackendRegistry", "create_default_registry"]
