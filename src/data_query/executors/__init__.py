"""Protocol executors.

One executor per supported protocol. Each one shapes a RequestDescriptor
into a single transport call and decodes the response; failures are raised
as ExecutionError and turned into failed results by the Dispatcher.
"""

from data_query.protocols import QueryExecutor, Transport

from .base import BaseExecutor, merge_headers
from .graphql import GraphQLExecutor
from .grpc import GrpcExecutor
from .rest import RestExecutor
from .rpc import RpcExecutor

EXECUTOR_CLASSES: tuple[type[BaseExecutor], ...] = (
    RestExecutor,
    GraphQLExecutor,
    GrpcExecutor,
    RpcExecutor,
)


def default_executors(transport: Transport) -> dict[str, QueryExecutor]:
    """Build the protocol -> executor registry over one transport."""
    return {cls.protocol: cls.create(transport=transport) for cls in EXECUTOR_CLASSES}


__all__ = [
    "BaseExecutor",
    "GraphQLExecutor",
    "GrpcExecutor",
    "RestExecutor",
    "RpcExecutor",
    "default_executors",
    "merge_headers",
]
