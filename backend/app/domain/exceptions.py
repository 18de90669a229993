"""Domain-specific exceptions — framework-independent.

HTTP status codes and response envelopes are assigned at the presentation
boundary (``app.presentation.api.error_handlers``), never here.
"""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class ValidationFailedError(Exception):
    """Raised when a request payload breaks one or more field rules.

    Carries every violation found, not just the first.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Validation failed: {', '.join(self.errors)}")


class MalformedRequestError(Exception):
    """Raised when the request body cannot be parsed at all (e.g. invalid JSON)."""

    def __init__(self, message: str = "Request body contains invalid JSON"):
        self.message = message
        super().__init__(message)


class StorageError(Exception):
    """Wraps any failure of the underlying store, naming the failed operation."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(message)


class InconsistentStateError(Exception):
    """Raised when the store contradicts an existence check made moments earlier.

    Typically a concurrent delete between the check and the write.
    """

    def __init__(self, error: str, message: str):
        self.error = error
        self.message = message
        super().__init__(message)


class DatabaseUnavailableError(Exception):
    """Raised at startup when the database cannot be reached after all retries."""

    def __init__(self, attempts: int, last_error: Exception | None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Failed to connect to database after {attempts} attempts. "
            f"Last error: {last_error}"
        )


class SchemaVerificationError(Exception):
    """Raised at startup when required tables are still missing after schema init."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Database tables not found: {', '.join(missing)}")
