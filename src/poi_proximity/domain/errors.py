"""Error hierarchy for proximity lookups."""


class ProximityError(Exception):
    """Base class for all proximity lookup errors."""


class InvalidRadius(ProximityError, ValueError):
    """Raised when a search radius is not a positive, finite number of kilometres."""

    def __init__(self, radius_km: float) -> None:
        self.radius_km = radius_km
        super().__init__(f"Search radius must be a positive number of kilometres, got {radius_km!r}")


class InvalidQueryParameter(ProximityError, ValueError):
    """Raised when a value cannot be embedded safely into query text."""


class SourceUnavailable(ProximityError):
    """Raised when the station graph could not be fetched or decoded."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Source '{source}' is unavailable: {reason}")


class QueryExecutionError(ProximityError):
    """Raised when a query could not be executed or its response parsed.

    Carries the identity of the source and the underlying cause so the
    resolver can report the failure without affecting sibling sources.
    """

    def __init__(self, source: str, cause: BaseException, status_code: int | None = None) -> None:
        self.source = source
        self.cause = cause
        self.status_code = status_code
        super().__init__(f"Query against '{source}' failed: {cause}")
