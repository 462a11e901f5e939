"""HTTP transport for chat-completion requests.

Hides the HTTP client library, connection pooling and timeout policy, and
maps every transport-level failure onto the ``TransportError`` hierarchy.
"""

from typing import Any

import httpx

from .errors import (
    AuthenticationError,
    MalformedPayloadError,
    NetworkError,
    ProviderHTTPError,
    RequestTimeoutError,
)

DEFAULT_TIMEOUT = 60.0  # Seconds before an unanswered request fails


class ChatTransport:
    """POSTs JSON payloads over a shared ``httpx.AsyncClient``.

    Supports async context manager protocol for proper resource cleanup:
        async with ChatTransport(timeout=30) as transport:
            body = await transport.post_json(url, payload, headers)
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
        **client_kwargs: Any
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds
            client: Pre-built client (tests inject one with a MockTransport)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(max_connections=4, max_keepalive_connections=2),
            **client_kwargs
        )

    @property
    def timeout(self) -> float:
        return self._timeout

    async def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str]
    ) -> Any:
        """Send a JSON POST and return the decoded response body.

        Args:
            url: Endpoint URL
            payload: JSON-serializable request body
            headers: Request headers

        Returns:
            Decoded JSON body

        Raises:
            RequestTimeoutError: The request exceeded the timeout
            NetworkError: Connection could not be made or was dropped
            AuthenticationError: Provider answered 401 or 403
            ProviderHTTPError: Provider answered any other non-2xx status
            MalformedPayloadError: Body is not valid JSON
        """
        try:
            response = await self._client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request timed out after {self._timeout}s") from e
        except httpx.TransportError as e:
            raise NetworkError(str(e) or type(e).__name__) from e

        if response.status_code in (401, 403):
            raise AuthenticationError(response.status_code)
        if not response.is_success:
            raise ProviderHTTPError(response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedPayloadError(f"Response is not valid JSON: {e}") from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "ChatTransport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close the client, suppressing the harmless closed-loop race in httpx/anyio.

        See: https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
