"""JSON-RPC 2.0 executor."""

from typing import Any

from data_query.entities import QueryProtocol, RequestDescriptor

from .base import BaseExecutor

JSONRPC_VERSION = "2.0"
DEFAULT_RPC_METHOD = "method"


class RpcExecutor(BaseExecutor):
    """Wraps the descriptor in a JSON-RPC envelope.

    ``query`` names the remote method and ``body`` supplies its params.
    The HTTP method defaults to POST but honours an explicit override.
    """

    protocol = QueryProtocol.RPC.value
    label = "RPC"

    async def execute(self, descriptor: RequestDescriptor) -> Any:
        params = descriptor.body.to_value()
        envelope = {
            "jsonrpc": JSONRPC_VERSION,
            "method": descriptor.query or DEFAULT_RPC_METHOD,
            "params": params if params is not None else {},
            "id": 1,
        }
        return await self.post_json(descriptor, descriptor.method or "POST", envelope)
