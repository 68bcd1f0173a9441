"""gRPC executor.

There is no native gRPC framing here: the request goes to an HTTP/JSON
gateway (grpc-gateway style proxy) that translates it to a gRPC call.
"""

from typing import Any

from data_query.entities import QueryProtocol, RequestDescriptor

from .base import BaseExecutor


class GrpcExecutor(BaseExecutor):
    """POSTs the body (or ``{}``) as JSON to a gRPC REST proxy."""

    protocol = QueryProtocol.GRPC.value
    label = "gRPC"

    async def execute(self, descriptor: RequestDescriptor) -> Any:
        body = descriptor.body.to_value()
        return await self.post_json(descriptor, "POST", body if body is not None else {})
