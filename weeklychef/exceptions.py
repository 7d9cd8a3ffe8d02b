"""Domain errors and the HTTP status each one maps to"""


class BookingServiceError(Exception):
    """Base class for errors rendered to API callers as {"error": message}"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingServiceError):
    """Missing or invalid request input"""

    status_code = 400


class UnrecognizedPlanError(ValidationError):
    """Plan input that is neither an index, a plan name, nor the custom tag"""

    def __init__(self, value):
        super().__init__(f"Unrecognized plan: {value!r}")
        self.value = value


class UnauthorizedError(BookingServiceError):
    status_code = 401


class NotFoundError(BookingServiceError):
    status_code = 404


class PersistenceError(BookingServiceError):
    """Store unavailable or constraint violated"""

    status_code = 500


class ProviderError(BookingServiceError):
    """Payment provider call failed"""

    status_code = 500


class WebhookSignatureError(BookingServiceError):
    """Raised when webhook signature verification fails"""

    status_code = 400


class NotificationError(Exception):
    """A single channel send failed; always recovered by the dispatcher"""

    pass
