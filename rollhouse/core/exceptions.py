"""
Order service errors.

Each error carries the HTTP status it maps to. Anything that is not an
OrderServiceError reaches the catch-all handler and becomes a 500.
"""


class OrderServiceError(Exception):
    """Base class for errors the API reports to the caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(OrderServiceError):
    """A required field is missing or malformed."""

    status_code = 400


class OrderNotFoundError(OrderServiceError):
    """The order does not exist, or no order store is configured."""

    status_code = 404
