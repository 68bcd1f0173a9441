"""httpx-based transport.

Performs every outbound request for the executors through one lazily
created ``httpx.AsyncClient``. The full response body is buffered before
returning; no streaming, no retries.
"""

import httpx

from data_query.errors import ExecutionError
from data_query.protocols import TransportRequest, TransportResponse


class HttpxTransport:
    """httpx implementation of the Transport protocol.

    This class satisfies the Transport protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        transport = HttpxTransport.create(timeout=10.0)
        response = await transport.request(
            TransportRequest(url="https://api.example.com/items", method="GET")
        )
        print(response.status, response.text)
        await transport.close()
        ```
    """

    def __init__(
        self,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds.
            client: Preconfigured client (e.g. one using httpx.MockTransport).
        """
        self._timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(cls, timeout: float = 30.0) -> "HttpxTransport":
        """Factory method to create HttpxTransport with defaults."""
        return cls(timeout=timeout)

    async def request(self, request: TransportRequest) -> TransportResponse:
        """Send one request and buffer the response.

        Raises:
            ExecutionError: If the request could not be completed
        """
        try:
            response = await self.client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body.encode("utf-8") if request.body is not None else None,
            )
        except httpx.HTTPError as e:
            raise ExecutionError(f"Request to {request.url} failed: {e}") from e

        return TransportResponse(
            status=response.status_code,
            headers={key.lower(): value for key, value in response.headers.items()},
            body=response.content,
        )

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
