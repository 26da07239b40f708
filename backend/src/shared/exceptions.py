class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Raised when a requested resource does not exist or is not visible."""

    def __init__(self, resource: str = "Resource", id: str = ""):
        super().__init__(f"{resource} not found: {id}" if id else f"{resource} not found")


class ValidationError(AppError):
    """Raised when user input is rejected before anything is sent to the backend."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message)


class AuthenticationError(AppError):
    """Raised when there is no usable session."""

    def __init__(self, message: str = "Not signed in"):
        super().__init__(message)


class AuthorizationError(AppError):
    """Raised when a user lacks permission for an action."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message)


class BackendError(AppError):
    """Raised when the hosted backend reports a failure."""

    def __init__(self, message: str = "Backend request failed", code: str | None = None):
        self.code = code
        super().__init__(message)
