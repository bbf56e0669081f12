"""HTTP client service with fixed timeout and connection retry policy."""

import json
from typing import Any

import httpx
import structlog

from .errors import DecodeError, HttpError, NetworkError, http_error_message

log = structlog.stdlib.get_logger()

REDACTED_PARAMS = frozenset({"key"})


def _loggable(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop secrets from query parameters before logging them."""
    if not params:
        return {}
    return {k: ("***" if k in REDACTED_PARAMS else v) for k, v in params.items()}


class HttpClientService:
    """Async HTTP client with the transport policy of the catalog client.

    Requests use a fixed connect/read timeout and are retried by the
    transport when the connection cannot be established. Failures are
    raised as ``NetworkError``, ``HttpError`` or ``DecodeError``; this
    layer never retries on HTTP status codes.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 50.0,
        connection_retries: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            base_url: Base URL that relative request paths are joined to
            timeout: Connect and read timeout in seconds
            connection_retries: Retries on connection failure (transport level)
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.connection_retries = connection_retries

        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout, connect=timeout, read=timeout),
            headers={
                "User-Agent": "GameHunt/0.1.0",
                "Accept": "application/json",
            },
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
            transport=transport or httpx.AsyncHTTPTransport(retries=connection_retries),
        )

        log.info(
            "HTTP client service initialized",
            base_url=base_url,
            timeout=timeout,
            connection_retries=connection_retries,
        )

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Make a GET request.

        Args:
            url: Absolute URL or path relative to the base URL
            params: Optional query parameters

        Returns:
            HTTP response object with a 2xx status

        Raises:
            NetworkError: If the server cannot be reached or times out
            HttpError: If the server answers with a non-2xx status
        """
        log.debug("Making HTTP GET request", url=url, params=_loggable(params))

        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            log.warning(
                "HTTP GET request rejected",
                url=url,
                status_code=status_code,
                error_type=type(e).__name__,
            )
            raise HttpError(
                message=http_error_message(status_code),
                status_code=status_code,
                original_error=e,
                url=url,
            ) from e
        except httpx.TimeoutException as e:
            log.warning("HTTP GET request timed out", url=url, error=str(e), error_type=type(e).__name__)
            raise NetworkError(
                message="The request timed out. The server may be slow or unavailable.",
                original_error=e,
                url=url,
            ) from e
        except httpx.RequestError as e:
            log.warning("HTTP GET request failed", url=url, error=str(e), error_type=type(e).__name__)
            raise NetworkError(
                message="Unable to connect to the server. Please check your internet connection.",
                original_error=e,
                url=url,
            ) from e

        log.info(
            "HTTP GET request successful",
            url=url,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return response

    async def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a GET request and decode the JSON body.

        Raises:
            NetworkError: If the server cannot be reached or times out
            HttpError: If the server answers with a non-2xx status
            DecodeError: If the body is not valid JSON
        """
        response = await self.get(url, params=params)
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            log.warning("Response body is not valid JSON", url=url, error=str(e))
            raise DecodeError(
                message="The server sent a response that could not be read.",
                original_error=e,
                url=url,
            ) from e

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.info("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
