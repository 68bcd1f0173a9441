"""Error types for the query resolution pipeline.

Propagation policy:
    - ParseError: raised before any network call, bubbles up to the caller.
    - ExecutionError: raised inside executors, always converted into a
      failure QueryResult by the Dispatcher.
    - CacheError: logged and swallowed by the cache service, except for
      clear_all where the caller needs to report "clear failed".
"""


class DataQueryError(Exception):
    """Base error for data-query operations."""


class ParseError(DataQueryError):
    """Raised when a query block cannot be turned into a RequestDescriptor."""


class ExecutionError(DataQueryError):
    """Raised by executors and transports while producing a result."""


class CacheError(DataQueryError):
    """Raised when the cache storage backend fails.

    Attributes:
        deleted: Entries removed before the failure (clear_all only)
        failed: Entries that could not be removed (clear_all only)
    """

    def __init__(self, message: str, deleted: int = 0, failed: int = 0) -> None:
        super().__init__(message)
        self.deleted = deleted
        self.failed = failed
