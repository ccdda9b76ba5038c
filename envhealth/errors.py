"""Exception types shared by the fetch, parse and query layers."""


class EnvHealthError(Exception):
    """Base class for dashboard data errors."""


class NetworkFailure(EnvHealthError):
    """The request was rejected, timed out, or returned an unusable body."""

    def __init__(self, endpoint: str, message: str):
        super().__init__(f"{endpoint}: {message}")
        self.endpoint = endpoint


class ShapeMismatch(EnvHealthError):
    """The response arrived but is missing or mistyping expected fields."""

    def __init__(self, endpoint: str, message: str = "unexpected response shape"):
        super().__init__(f"{endpoint}: {message}")
        self.endpoint = endpoint


class InvalidTransition(EnvHealthError):
    """A query was asked to move between two states the table does not allow."""
