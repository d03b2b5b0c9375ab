"""
Shared dependencies for the application.

Provides dependency injection functions used across routers.
"""

from typing import TYPE_CHECKING, Optional

from fastapi import Header

if TYPE_CHECKING:
    from .services.resilient_client import ResilientClient

# Global client instance (set by main app)
_resilient_client: Optional["ResilientClient"] = None


def set_resilient_client(client: Optional["ResilientClient"]) -> None:
    """
    Set the global resilient client instance.

    Called by main app during startup and shutdown.
    """
    global _resilient_client
    _resilient_client = client


async def get_resilient_client() -> "ResilientClient":
    """Resilient client for dependency injection."""
    if _resilient_client is None:
        raise RuntimeError("Resilient client not initialized")
    return _resilient_client


async def get_actor(x_actor: Optional[str] = Header(default=None)) -> Optional[str]:
    """Identity of the caller, taken from the ``X-Actor`` header."""
    if x_actor is None or not x_actor.strip():
        return None
    return x_actor.strip()
