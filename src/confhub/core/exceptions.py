"""Domain exceptions for confhub.

Provides the error taxonomy used across the service:
- ConfhubError: Base class carrying an error code and structured context
- ValidationError: Malformed or missing input (HTTP 400)
- NotFoundError: Requested resource does not exist (HTTP 404)
- ConflictError: Resource collides with an existing one (HTTP 409)
- RepositoryError: Unexpected persistence failure (HTTP 500)
- ConfigurationError: Invalid environment configuration at startup

The HTTP mapping lives in confhub.api.errors; these classes know nothing
about transport.
"""


class ConfhubError(Exception):
    """Base exception for all confhub errors.

    Attributes:
        message: Human-readable error description.
        error_code: Stable machine-readable code (e.g. "NOT_FOUND").
        context: Extra key-value pairs for logging and debugging.
    """

    message: str
    error_code: str
    context: dict[str, object]

    def __init__(self, message: str, error_code: str, /, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context


class ValidationError(ConfhubError):
    """Raised when request input fails validation.

    Attributes:
        field_errors: Mapping of field name to a list of error messages.
    """

    field_errors: dict[str, list[str]]

    def __init__(
        self,
        message: str,
        /,
        *,
        field_errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message, "VALIDATION_ERROR")
        self.field_errors = field_errors or {}


class NotFoundError(ConfhubError):
    """Raised when a requested resource does not exist.

    Attributes:
        resource_type: Kind of resource that was looked up (e.g. "Setting").
        identifier: The id or key that was not found.
    """

    resource_type: str
    identifier: str

    def __init__(self, resource_type: str, identifier: object, /) -> None:
        super().__init__(
            f"{resource_type.lower()} not found",
            "NOT_FOUND",
            resource_type=resource_type,
            identifier=str(identifier),
        )
        self.resource_type = resource_type
        self.identifier = str(identifier)


class ConflictError(ConfhubError):
    """Raised when a resource collides with an existing one.

    Attributes:
        resource_type: Kind of resource involved in the conflict.
        identifier: The conflicting id or key.
    """

    resource_type: str
    identifier: str

    def __init__(
        self, message: str, /, *, resource_type: str, identifier: object
    ) -> None:
        super().__init__(
            message,
            "CONFLICT",
            resource_type=resource_type,
            identifier=str(identifier),
        )
        self.resource_type = resource_type
        self.identifier = str(identifier)


class RepositoryError(ConfhubError):
    """Raised when a database operation fails unexpectedly.

    Attributes:
        operation: Repository method that failed (e.g. "get_by_key").
        original: The underlying exception, if any.
    """

    operation: str
    original: BaseException | None

    def __init__(
        self,
        message: str,
        /,
        *,
        operation: str,
        original: BaseException | None = None,
    ) -> None:
        super().__init__(message, "REPOSITORY_ERROR", operation=operation)
        self.operation = operation
        self.original = original


class ConfigurationError(ConfhubError):
    """Raised when the environment does not describe a valid configuration."""

    def __init__(self, message: str, /) -> None:
        super().__init__(message, "CONFIGURATION_ERROR")
