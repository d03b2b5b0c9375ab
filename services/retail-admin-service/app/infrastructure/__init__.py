"""Functions API client and wire mapping."""

from .functions_client import FunctionsApiClient

__all__ = ["FunctionsApiClient"]
