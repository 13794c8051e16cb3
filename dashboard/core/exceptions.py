"""Domain errors. Each carries the HTTP status and client-safe message it maps to at the API boundary."""


class DashboardError(Exception):
    """Base class for errors surfaced to API clients as {"message": ...}."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class MissingToken(DashboardError):
    """No bearer token on a protected request."""

    status_code = 401
    default_message = "No token provided"

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class InvalidToken(DashboardError):
    """Token is malformed, expired, has a bad signature or an unusable payload."""

    status_code = 403
    default_message = "Invalid token"


class InvalidCredentials(DashboardError):
    """Login failed. Same message whether the user is unknown or the password is wrong."""

    status_code = 401
    default_message = "Invalid credentials"


class Forbidden(DashboardError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(DashboardError):
    status_code = 404
    default_message = "Not found"


class ValidationError(DashboardError):
    """Missing or malformed input, invalid role, duplicate username."""

    status_code = 400
    default_message = "Invalid request"


class StoreError(DashboardError):
    """Underlying storage failure. The original driver error is chained, never shown."""

    status_code = 500
    default_message = "Database error"
