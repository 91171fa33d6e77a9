"""Custom application-wide exceptions."""


class ApplicationError(Exception):
    """Base class for application-specific errors."""

    def __init__(
        self, message: str = "An application error occurred", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original error: {self.original_exception})"
        return self.message


class ValidationError(ApplicationError):
    """Raised when a request breaks a catalog rule. No state is mutated."""

    def __init__(self, message: str = "Validation failed", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Validation Error: {message}"


class NotFoundError(ApplicationError):
    """Raised when an operation needs a product or shop that does not exist."""

    def __init__(self, entity: str, name: str) -> None:
        super().__init__(f"{entity} '{name}' not found")
        self.entity = entity
        self.name = name


class ParseError(ApplicationError):
    """Raised for a single persisted record that cannot be turned into an entity."""

    def __init__(self, message: str = "Record could not be parsed", record: dict | None = None) -> None:
        super().__init__(message)
        self.record = record
        self.message = f"Parse Error: {message}"


class StoreError(ApplicationError):
    """Base class for failures of the local or remote store."""

    def __init__(
        self,
        message: str = "Store operation failed",
        original_exception: Exception | None = None,
        operation: str | None = None,
        target: str | None = None,
    ) -> None:
        super().__init__(message, original_exception)
        self.operation = operation
        self.target = target
        self.message = f"Store Error: {message}"
        if operation or target:
            self.message += f" [{operation or '?'} {target or '?'}]"


class APIError(StoreError):
    """Exception raised for errors during remote store API calls."""

    def __init__(
        self,
        message: str = "API call failed",
        original_exception: Exception | None = None,
        status_code: int | None = None,
        operation: str | None = None,
        target: str | None = None,
    ) -> None:
        super().__init__(message, original_exception, operation, target)
        self.status_code = status_code
        self.message = f"API Error: {message}"
        if status_code:
            self.message += f" (Status Code: {status_code})"
        if operation or target:
            self.message += f" [{operation or '?'} {target or '?'}]"


class LocalStoreError(StoreError):
    """Exception raised for errors reading or writing the local JSON files."""

    def __init__(
        self,
        message: str = "Local store operation failed",
        original_exception: Exception | None = None,
        operation: str | None = None,
        target: str | None = None,
    ) -> None:
        super().__init__(message, original_exception, operation, target)
        self.message = f"Local Store Error: {message}"
        if operation or target:
            self.message += f" [{operation or '?'} {target or '?'}]"
