"""
Domain exceptions for the Jobly API.

Every error carries the HTTP status it maps to; the application registers a
single handler (see main.py) that turns them into JSON responses.
"""


class JoblyError(Exception):
    """Base exception for all Jobly errors."""

    status_code: int = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
        self.message = message


class BadRequestError(JoblyError):
    """The request was understood but its content is unusable."""

    status_code = 400

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(JoblyError):
    """Missing or insufficient credentials."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(JoblyError):
    """A requested record does not exist."""

    status_code = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


# SQL fragment builder errors


class InvalidArgument(BadRequestError):
    """A builder argument is missing or is not a mapping."""


class EmptyUpdate(BadRequestError):
    """An update payload has no fields."""


class NoValidCriteria(BadRequestError):
    """None of the supplied filter criteria are recognized."""
