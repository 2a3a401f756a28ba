"""
Error taxonomy for the order console.

Services raise these; the API layer maps each one to an HTTP status code.
"""


class OrderConsoleError(Exception):
    """Base exception for order console errors."""

    status_code = 400

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(OrderConsoleError):
    """Raised when an input is malformed: unknown status, negative or NaN fee, bad period."""
    status_code = 422


class InvalidTransition(OrderConsoleError):
    """Raised when a status change is not an edge of the order status graph."""

    status_code = 409

    def __init__(self, current_status, requested_status, message=None):
        self.current_status = current_status
        self.requested_status = requested_status
        if message is None:
            message = f"Cannot transition order from {current_status} to {requested_status}."
        super().__init__(
            message,
            details={"current_status": current_status, "requested_status": requested_status},
        )


class NotFound(OrderConsoleError):
    """Raised when an order or restaurant does not exist."""

    status_code = 404

    def __init__(self, entity, identifier, message=None):
        self.entity = entity
        self.identifier = identifier
        if message is None:
            message = f"{entity} not found"
        super().__init__(message, details={"entity": entity, "id": identifier})


class ConflictError(OrderConsoleError):
    """Raised when an order was modified after the caller read it."""
    status_code = 409


class UpstreamError(OrderConsoleError):
    """Raised when the database or another provider fails."""
    status_code = 502
