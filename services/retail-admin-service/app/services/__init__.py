"""Access-layer services: resilient client, fallback adapter, notifications."""

from .fallback import LocalFallbackAdapter
from .notifications import NotificationEmitter
from .pipeline import FallbackPipeline, OnError, is_unreachable
from .resilient_client import ResilientClient

__all__ = [
    "FallbackPipeline",
    "LocalFallbackAdapter",
    "NotificationEmitter",
    "OnError",
    "ResilientClient",
    "is_unreachable",
]
