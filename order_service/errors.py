"""
errors.py — Business Errors of the Order Service

Every error raised by the controller carries the HTTP status code and the
client-facing message. The API layer turns them into `{"message": ...}`
responses; anything else ends up in the generic 500 handler.
"""


class OrderServiceError(Exception):
    """Base class for errors that are reported to the client as-is."""
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class TotalAmountMismatchError(OrderServiceError):
    """The client-supplied totalAmount differs from the sum of the line items."""
    status_code = 400
    message = "Total amount mismatch"


class UserNotFoundError(OrderServiceError):
    status_code = 404
    message = "User not found"


class OrderNotFoundError(OrderServiceError):
    status_code = 404
    message = "Order not found"


class PaymentInitializationError(OrderServiceError):
    """The payment gateway failed or did not return a checkout URL."""
    status_code = 502
    message = "Payment initialization failed"
