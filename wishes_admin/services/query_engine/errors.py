from __future__ import annotations


class QueryEngineError(Exception):
    """Base class for listing, stats and export failures."""


class InvalidFilter(QueryEngineError):
    """A filter value could not be parsed or is not allowed. Client error."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidPageRequest(QueryEngineError):
    """The sort field or sort order is not accepted for this collection."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class ExportTooLarge(QueryEngineError):
    def __init__(self, total: int, limit: int) -> None:
        self.total = total
        self.limit = limit
        super().__init__(f"export matches {total} rows, limit is {limit}")


class StoreUnavailable(QueryEngineError):
    """The underlying collection could not be read. Not retried here."""

    def __init__(self, collection: str, operation: str) -> None:
        self.collection = collection
        self.operation = operation
        super().__init__(f"{collection}.{operation} failed")
