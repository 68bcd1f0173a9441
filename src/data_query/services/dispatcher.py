"""Dispatcher service.

Routes a descriptor to the executor registered for its protocol and
always returns a QueryResult: failures become results with ``error`` set
so the caller can render a degraded but uniform outcome.
"""

import logging
from collections.abc import Mapping

from data_query.entities import QueryResult, RequestDescriptor
from data_query.errors import DataQueryError
from data_query.executors import default_executors
from data_query.protocols import QueryExecutor, Transport

logger = logging.getLogger(__name__)


class Dispatcher:
    """Select an executor by protocol and wrap its outcome in a QueryResult.

    Example:
        ```python
        dispatcher = Dispatcher.create(transport=HttpxTransport.create())
        result = await dispatcher.execute(descriptor)
        if result.is_error:
            print(result.error)
        ```
    """

    def __init__(self, executors: Mapping[str, QueryExecutor]) -> None:
        """Initialize the dispatcher.

        Args:
            executors: Registry mapping protocol names to executors
        """
        self._executors = dict(executors)

    @classmethod
    def create(cls, transport: Transport) -> "Dispatcher":
        """Factory method wiring the built-in executors over one transport."""
        return cls(executors=default_executors(transport))

    @property
    def protocols(self) -> list[str]:
        return sorted(self._executors)

    async def execute(self, descriptor: RequestDescriptor) -> QueryResult:
        """Execute one descriptor.

        Never raises for request failures; the result's ``error`` carries
        the message and ``timestamp`` the moment of failure.
        """
        executor = self._executors.get(descriptor.protocol)
        if executor is None:
            message = f"Unsupported query type: {descriptor.protocol}"
            logger.error("Query execution error for %s: %s", descriptor.url, message)
            return QueryResult.failure(message)

        try:
            data = await executor.execute(descriptor)
        except DataQueryError as e:
            logger.error("Query execution error for %s: %s", descriptor.url, e)
            return QueryResult.failure(str(e) or type(e).__name__)
        except Exception as e:
            logger.exception("Unexpected %s executor failure for %s", descriptor.protocol, descriptor.url)
            return QueryResult.failure(f"{type(e).__name__}: {e}")

        return QueryResult.success(data)
