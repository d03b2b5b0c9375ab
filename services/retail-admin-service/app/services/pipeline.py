"""
Remote-first execution with storage fallback.

Every access-layer operation runs through ``FallbackPipeline.run``: one
attempt against the Functions API, then a decision based on how it failed.

- success: return the remote result
- unreachable: run the storage fallback, publish a notification if the
  operation defines one, return the fallback result
- anything else: degrade reads to an empty or absent result, re-raise writes
"""

import errno
import socket
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

import httpx

from ..domain.entities import EntityKind
from ..domain.events import NotificationEvent
from ..logging_config import get_logger
from ..metrics import track_fallback, track_remote_call
from .notifications import NotificationEmitter

logger = get_logger(__name__)

T = TypeVar("T")

_UNREACHABLE_ERRNOS = {errno.ECONNREFUSED, errno.EHOSTUNREACH, errno.ENETUNREACH}


class OnError(str, Enum):
    """What an operation returns when the remote call fails for another reason."""

    EMPTY = "empty"
    ABSENT = "absent"
    RAISE = "raise"


def is_unreachable(error: BaseException) -> bool:
    """
    Decide whether a failure means the Functions API could not be reached.

    Only two situations qualify: the transport never got a connection to the
    host (``httpx.ConnectError``, ``httpx.ConnectTimeout``), or the socket
    layer refused or could not route the connection. Status-code errors,
    read timeouts and every other exception are application errors.
    """
    if isinstance(error, (httpx.ConnectError, httpx.ConnectTimeout)):
        return True
    if isinstance(error, (ConnectionRefusedError, socket.gaierror)):
        return True
    if isinstance(error, OSError) and error.errno in _UNREACHABLE_ERRNOS:
        return True
    return False


class FallbackPipeline:
    """Runs operations remote-first with a storage fallback."""

    def __init__(self, emitter: NotificationEmitter) -> None:
        self.emitter = emitter

    async def run(
        self,
        kind: EntityKind,
        operation: str,
        remote: Callable[[], Awaitable[T]],
        fallback: Callable[[], Awaitable[T]],
        on_error: OnError,
        notify: Optional[Callable[[T], NotificationEvent]] = None,
    ) -> T:
        """
        Execute one operation.

        Args:
            kind: Entity kind the operation works on
            operation: Operation name for logs and metrics
            remote: Coroutine factory calling the Functions API
            fallback: Coroutine factory doing the same against storage
            on_error: Result policy for non-unreachable failures
            notify: Builds the notification for a fallback result, if any

        Returns:
            The remote result, the fallback result, or the degraded result

        Raises:
            Exception: Application errors of write operations, and any
                failure of the fallback or the notification publish
        """
        try:
            result = await remote()
        except Exception as error:
            if is_unreachable(error):
                track_remote_call(kind.value, operation, "unreachable")
                return await self._dispatch_fallback(kind, operation, error, fallback, notify)

            track_remote_call(kind.value, operation, "error")
            fields = {
                "kind": kind.value,
                "operation": operation,
                "error_type": type(error).__name__,
                "error_message": str(error)[:200],
            }
            if on_error is OnError.RAISE:
                logger.error(
                    f"Functions API {operation} failed",
                    extra={"extra_fields": fields},
                    exc_info=True,
                )
                raise
            logger.error(
                f"Functions API {operation} failed, returning {on_error.value} result",
                extra={"extra_fields": fields},
                exc_info=True,
            )
            return [] if on_error is OnError.EMPTY else None

        track_remote_call(kind.value, operation, "success")
        return result

    async def _dispatch_fallback(
        self,
        kind: EntityKind,
        operation: str,
        error: Exception,
        fallback: Callable[[], Awaitable[T]],
        notify: Optional[Callable[[T], NotificationEvent]],
    ) -> T:
        logger.warning(
            f"Functions API unreachable; running {operation} directly against storage",
            extra={
                "extra_fields": {
                    "kind": kind.value,
                    "operation": operation,
                    "error_type": type(error).__name__,
                }
            },
        )
        track_fallback(kind.value, operation)
        result = await fallback()
        if notify is not None:
            await self.emitter.publish(notify(result))
        return result
