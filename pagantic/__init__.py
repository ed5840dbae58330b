from .capability import DISABLED, FILTER_OPERATORS, CapabilityFactory, QueryCapability
from .config import TableOptions
from .dynamo import DynamoCapability
from .exceptions import (
    CapabilityExecutionError,
    DestinationNotEmptyError,
    InvalidPageError,
    NotASequenceError,
    NullCursorError,
    PagingError,
    QueryValidationError,
    RequestTimeoutError,
    SerializationError,
    TableNotFoundError,
    ThroughputExceededError,
    UnknownFieldError,
    UnknownModeError,
)
from .memory import MemoryCapability
from .page import Cursor, Page, PageMode
from .paginator import Paginator, paginate

__all__ = [
    "paginate",
    "Paginator",
    "Page",
    "PageMode",
    "Cursor",
    # Capabilities
    "QueryCapability",
    "CapabilityFactory",
    "DISABLED",
    "FILTER_OPERATORS",
    "MemoryCapability",
    "DynamoCapability",
    "TableOptions",
    # Exceptions
    "PagingError",
    "UnknownModeError",
    "InvalidPageError",
    "NotASequenceError",
    "DestinationNotEmptyError",
    "UnknownFieldError",
    "NullCursorError",
    "CapabilityExecutionError",
    "TableNotFoundError",
    "ThroughputExceededError",
    "QueryValidationError",
    "RequestTimeoutError",
    "SerializationError",
]
