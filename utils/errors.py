"""
Econ Data Explorer — Errors
Exception types shared by the source adapters, aggregator and comparison engine.
"""


class DashboardError(Exception):
    """Base class for all errors raised by the data layer."""


class ValidationError(DashboardError):
    """A required selection (state, county, year, variable) is missing or invalid."""


class FetchError(DashboardError):
    """An upstream fetch failed. `kind` names the failure class."""

    kind = "fetch_error"

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class HttpError(FetchError):
    """Upstream returned a non-success status, or the request never completed."""

    kind = "http_error"


class ResponseShapeError(FetchError):
    """Upstream payload does not match the expected shape."""

    kind = "bad_response"


class NoDataError(FetchError):
    """Every requested year (or slot) failed."""

    kind = "no_data"


class PartialFetchError(DashboardError):
    """
    Some items failed while others succeeded.

    Not raised by the fetch loops; carried on the outcome so callers can
    surface it as a warning.
    """

    def __init__(self, messages: list[str]):
        super().__init__("\n".join(messages))
        self.messages = list(messages)


class DuplicateYearError(DashboardError, ValueError):
    """A year (or a variable within a year) appears more than once in a series."""
