class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str = "Resource", id: str = "", message: str | None = None):
        if message is None:
            message = f"{resource} not found: {id}" if id else f"{resource} not found"
        super().__init__(message)


class BadRequestError(AppError):
    """Raised when caller input is malformed or inconsistent with stored state."""

    def __init__(self, message: str = "Bad request"):
        super().__init__(message)


class DuplicateEntryError(BadRequestError):
    """Raised when an insert collides with a unique constraint."""

    def __init__(self, message: str = "Entry already exists"):
        super().__init__(message)


class ConflictError(AppError):
    """Raised when a uniquely named resource already exists."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)


class AuthenticationError(AppError):
    """Raised when credentials are invalid."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class AuthorizationError(AppError):
    """Raised when a user lacks permission for an action."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message)


class ServerError(AppError):
    """Raised when an in-memory instance no longer matches a stored row."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
