import hashlib
import logging
from typing import Any

# Create the library logger
logger = logging.getLogger("pagantic")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def redact_value(value: Any) -> str | None:
    """
    Redacts a cursor or filter value for logging.
    Hashes the value to allow correlation between page fetches without
    revealing the raw seek value.
    """
    if value is None:
        return None
    try:
        return hashlib.sha256(str(value).encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"
