"""
HTTP client for the Functions API.

Async client for the remote business-logic service that owns customers,
products, orders and uploads. Returns decoded JSON bodies and raises on
failure; it never falls back or retries. Transport errors (``httpx``
exceptions) propagate untouched so callers can tell an unreachable host
from an application error, which is raised as ``RemoteServiceError``.
"""

import time
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from ..domain.exceptions import RemoteServiceError
from ..logging_config import get_logger, get_request_id
from .mapping import UploadResult

logger = get_logger(__name__)


class FunctionsApiClient:
    """
    Client for the Functions API.

    Uses a persistent ``httpx.AsyncClient`` with connection pooling, created
    on first use. Every call carries an explicit deadline.

    Attributes:
        base_url: Base URL of the Functions API
        timeout: Overall request timeout in seconds
        connect_timeout: Connection establishment timeout in seconds
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the Functions API client.

        Args:
            base_url: Base URL of the API (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            connect_timeout: Connect timeout in seconds (defaults to settings)
            transport: Optional custom transport, used by tests
        """
        self.base_url = (base_url or settings.FUNCTIONS_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.REQUEST_TIMEOUT
        self.connect_timeout = connect_timeout or settings.CONNECT_TIMEOUT
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            f"Initialized FunctionsApiClient: base_url={self.base_url}, "
            f"timeout={self.timeout}s, connect_timeout={self.connect_timeout}s"
        )

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
                limits=httpx.Limits(
                    max_keepalive_connections=20,
                    max_connections=100,
                    keepalive_expiry=30.0,
                ),
                transport=self._transport,
            )
            logger.debug("Created new HTTP client with connection pooling")
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
            logger.debug("Closed HTTP client")

    def _get_request_headers(self, actor: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "User-Agent": "ABCRetailers-Admin/1.0",
            "Accept": "application/json",
        }

        request_id = get_request_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        if actor:
            headers["X-Actor"] = actor

        return headers

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        *,
        actor: Optional[str] = None,
        json: Optional[Any] = None,
        data: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, Any]] = None,
        allow_not_found: bool = False,
    ) -> Optional[httpx.Response]:
        """
        Send one request and check its status.

        Returns:
            The response, or None when ``allow_not_found`` is set and the
            API answered 404

        Raises:
            RemoteServiceError: On any other non-success status
            httpx.RequestError: On transport failures
        """
        client = await self._get_client()
        url = f"{self.base_url}{path}"
        start_time = time.perf_counter()

        response = await client.request(
            method,
            url,
            json=json,
            data=data,
            files=files,
            headers=self._get_request_headers(actor),
        )

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            "Received response from Functions API",
            extra={
                "extra_fields": {
                    "operation": operation,
                    "method": method,
                    "url": url,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                }
            },
        )

        if allow_not_found and response.status_code == 404:
            return None
        if not response.is_success:
            raise RemoteServiceError(operation, response.status_code, response.text)
        return response

    @staticmethod
    def _json_body(response: httpx.Response) -> Optional[Any]:
        if not response.content or not response.content.strip():
            return None
        return response.json()

    async def list(self, resource: str) -> List[Dict[str, Any]]:
        """``GET /{resource}``."""
        response = await self._request("GET", f"/{resource}", f"list_{resource}")
        return self._json_body(response) or []

    async def get(self, resource: str, entity_id: str) -> Optional[Dict[str, Any]]:
        """``GET /{resource}/{id}``; None when the API answers 404."""
        response = await self._request(
            "GET", f"/{resource}/{entity_id}", f"get_{resource}", allow_not_found=True
        )
        if response is None:
            return None
        return self._json_body(response)

    async def create(
        self, resource: str, payload: Dict[str, Any], actor: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """``POST /{resource}``; returns the created entity body, if any."""
        response = await self._request(
            "POST", f"/{resource}", f"create_{resource}", actor=actor, json=payload
        )
        return self._json_body(response)

    async def update(
        self,
        resource: str,
        entity_id: str,
        payload: Dict[str, Any],
        actor: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """``PUT /{resource}/{id}``; returns the updated entity body, if any."""
        response = await self._request(
            "PUT",
            f"/{resource}/{entity_id}",
            f"update_{resource}",
            actor=actor,
            json=payload,
        )
        return self._json_body(response)

    async def delete(self, resource: str, entity_id: str, actor: Optional[str] = None) -> None:
        """``DELETE /{resource}/{id}``."""
        await self._request(
            "DELETE", f"/{resource}/{entity_id}", f"delete_{resource}", actor=actor
        )

    async def update_order_status(
        self, order_id: str, payload: Dict[str, Any], actor: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """``PATCH /orders/{id}/status``."""
        response = await self._request(
            "PATCH",
            f"/orders/{order_id}/status",
            "update_order_status",
            actor=actor,
            json=payload,
        )
        return self._json_body(response)

    async def upload_file(
        self,
        file_name: str,
        content: bytes,
        container_name: str,
        content_type: str = "application/octet-stream",
        actor: Optional[str] = None,
    ) -> str:
        """
        Upload a file to a blob container through ``POST /uploads``.

        Returns:
            The stored file name reported by the API, or "" if absent
        """
        response = await self._request(
            "POST",
            "/uploads",
            "upload_file",
            actor=actor,
            data={"containerName": container_name},
            files={"file": (file_name, content, content_type)},
        )
        return UploadResult.model_validate(self._json_body(response) or {}).file_name

    async def upload_to_file_share(
        self,
        file_name: str,
        content: bytes,
        share_name: str,
        directory_name: str = "",
        content_type: str = "application/octet-stream",
        actor: Optional[str] = None,
    ) -> str:
        """
        Upload a file to a file share through ``POST /uploads/fileshare``.

        Returns:
            The stored file name reported by the API, or "" if absent
        """
        response = await self._request(
            "POST",
            "/uploads/fileshare",
            "upload_to_file_share",
            actor=actor,
            data={"shareName": share_name, "directoryName": directory_name},
            files={"file": (file_name, content, content_type)},
        )
        return UploadResult.model_validate(self._json_body(response) or {}).file_name

    async def health_check(self) -> bool:
        """
        Check whether the Functions API is up.

        Returns:
            True if ``GET /health`` answers 200, False otherwise
        """
        try:
            client = await self._get_client()
            response = await client.get(
                f"{self.base_url}/health",
                headers=self._get_request_headers(),
                timeout=2.0,
            )
            is_healthy = response.status_code == 200
            if not is_healthy:
                logger.warning(
                    "Functions API health check failed",
                    extra={
                        "extra_fields": {
                            "backend_url": self.base_url,
                            "status_code": response.status_code,
                        }
                    },
                )
            return is_healthy

        except httpx.HTTPError as error:
            logger.warning(
                "Functions API health check failed with exception",
                extra={
                    "extra_fields": {
                        "backend_url": self.base_url,
                        "error_type": type(error).__name__,
                        "error_message": str(error),
                    }
                },
            )
            return False
