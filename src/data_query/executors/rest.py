"""REST executor."""

from typing import Any

from data_query.entities import QueryProtocol, RequestDescriptor, StructuredPayload, TextPayload
from data_query.protocols import TransportRequest

from .base import JSON_CONTENT_TYPE, BaseExecutor, merge_headers, require_url


class RestExecutor(BaseExecutor):
    """Plain HTTP request with the descriptor's method (GET by default).

    Structured bodies are serialized to JSON and labelled as such unless the
    caller set a Content-Type; text bodies are sent verbatim. The response is
    decoded as JSON only when the server says it is JSON.
    """

    protocol = QueryProtocol.REST.value
    label = "REST"

    async def execute(self, descriptor: RequestDescriptor) -> Any:
        url = require_url(descriptor, self.label)
        headers = dict(descriptor.headers)
        body: str | None = None

        if isinstance(descriptor.body, StructuredPayload):
            body = descriptor.body.to_json()
            headers = merge_headers(headers, {"Content-Type": JSON_CONTENT_TYPE})
        elif isinstance(descriptor.body, TextPayload) and descriptor.body.text:
            body = descriptor.body.text

        response = await self.send(
            TransportRequest(
                url=url,
                method=descriptor.method or "GET",
                headers=headers,
                body=body,
            )
        )

        if JSON_CONTENT_TYPE in response.content_type:
            return self.decode_json(response)
        return response.text
