"""Protocol executor interface.

An executor turns a RequestDescriptor into one transport call and decodes
the response. Executors raise on failure; the dispatcher is responsible
for converting failures into QueryResult errors.
"""

from typing import Any, Protocol, runtime_checkable

from data_query.entities import RequestDescriptor


@runtime_checkable
class QueryExecutor(Protocol):
    """Protocol for protocol-specific executors."""

    @property
    def protocol(self) -> str:
        """Protocol name this executor handles (e.g. "rest")."""
        ...

    async def execute(self, descriptor: RequestDescriptor) -> Any:
        """Send the request described by descriptor.

        Args:
            descriptor: The parsed request

        Returns:
            Decoded response data (JSON value or text)

        Raises:
            ExecutionError: On a missing required field, transport failure or
                undecodable response
        """
        ...
