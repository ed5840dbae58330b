from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from botocore.exceptions import ClientError


class PagingError(Exception):
    """Base exception for all Pagantic errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class UnknownModeError(PagingError):
    """Raised when a page descriptor carries a mode the paginator does not know."""

    def __init__(self, mode: Any) -> None:
        super().__init__(f"Unknown pagination mode {mode!r}")
        self.mode = mode


class InvalidPageError(PagingError, ValueError):
    """Raised when a page descriptor is constructed with invalid values."""


class NotASequenceError(PagingError):
    """Raised when a destination is not a mutable, ordered collection of records."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Expected a mutable sequence of records, got {type(value).__name__}"
        )
        self.value = value


class DestinationNotEmptyError(PagingError):
    """Raised when a destination already holds records before a page is fetched."""

    def __init__(self, size: int) -> None:
        super().__init__(f"Destination must be empty, it already holds {size} record(s)")
        self.size = size


class UnknownFieldError(PagingError):
    """Raised when a record type does not expose the requested field."""

    def __init__(self, field_name: str, record_type: Any = None) -> None:
        type_name = getattr(record_type, "__name__", None) or type(record_type).__name__
        super().__init__(f"Field '{field_name}' does not exist on {type_name}")
        self.field_name = field_name
        self.record_type = record_type


class NullCursorError(PagingError):
    """Raised when the record a next cursor is read from has no value for the cursor field."""

    def __init__(self, field_name: str) -> None:
        super().__init__(
            f"Cursor field '{field_name}' is None on the last record of a page with more results"
        )
        self.field_name = field_name


class CapabilityExecutionError(PagingError):
    """Base class for failures raised by a query backend while fetching or counting."""


class TableNotFoundError(CapabilityExecutionError):
    """Raised when the DynamoDB table does not exist."""

    def __init__(self, table_name: str, original_error: Exception | None = None) -> None:
        super().__init__(f"Table '{table_name}' not found", original_error)
        self.table_name = table_name


class ThroughputExceededError(CapabilityExecutionError):
    """Raised when DynamoDB throttles requests."""

    def __init__(
        self, message: str = "Request rate exceeded", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class QueryValidationError(CapabilityExecutionError):
    """Raised when DynamoDB rejects a request as invalid (bad expression, bad value)."""


class RequestTimeoutError(CapabilityExecutionError):
    """Raised when a request to DynamoDB times out."""

    def __init__(
        self, message: str = "Request timed out", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class SerializationError(CapabilityExecutionError):
    """Raised when a value cannot be converted to DynamoDB format (e.g. unsupported type)."""


@contextmanager
def handle_dynamo_errors(table_name: str | None = None) -> Generator[None, None, None]:
    """
    Context manager that catches botocore.exceptions.ClientError
    and raises the appropriate CapabilityExecutionError subclass.

    Args:
        table_name: Optional table name for better error messages

    Usage:
        with handle_dynamo_errors(table_name="projects"):
            client.scan(...)
    """
    try:
        yield
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        error_message = e.response.get("Error", {}).get("Message", str(e))

        if error_code == "ResourceNotFoundException":
            raise TableNotFoundError(table_name=table_name or "unknown", original_error=e) from e

        if error_code in (
            "ProvisionedThroughputExceededException",
            "ThrottlingException",
            "RequestLimitExceeded",
        ):
            raise ThroughputExceededError(message=error_message, original_error=e) from e

        if error_code in ("ValidationException", "SerializationException"):
            raise QueryValidationError(error_message, original_error=e) from e

        if error_code in ("RequestTimeout", "RequestTimeoutException"):
            raise RequestTimeoutError(message=error_message, original_error=e) from e

        # Unknown error: wrap in the generic backend error
        raise CapabilityExecutionError(
            f"DynamoDB error ({error_code}): {error_message}", original_error=e
        ) from e
