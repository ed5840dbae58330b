from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, cast
from uuid import UUID

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from .exceptions import SerializationError


class DynamoSerializer:
    """
    Converts between Python values and DynamoDB Low-Level format.

    Architectural Note:
    -------------------
    Filter values (cursor values included) must be serialized the same way the
    records were written, otherwise a seek predicate compares a string with a
    number. Datetimes become ISO 8601 strings, which DynamoDB compares
    lexicographically in the same order as the datetimes themselves as long as
    every value shares one timezone. Numbers travel as Decimal.
    """

    def __init__(self) -> None:
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    def to_dynamo_value(self, value: Any) -> dict[str, Any]:
        """
        Serializes a single scalar value to DynamoDB format.
        Used for ExpressionAttributeValues in filters and key conditions.
        E.g.: 10.5 -> {'N': '10.5'}
        """
        clean_value = self._prepare_for_dynamo(value)
        try:
            result = cast(dict[str, Any], self._serializer.serialize(clean_value))
        except TypeError as e:
            raise SerializationError(
                f"Failed to serialize value '{value}'. error={e!s}", original_error=e
            ) from e
        return result

    def from_dynamo(self, item: dict[str, Any]) -> dict[str, Any]:
        """Converts a DynamoDB JSON item back to a standard Python dict."""
        python_data = {k: self._deserializer.deserialize(v) for k, v in item.items()}
        result = self._restore_to_python(python_data)
        assert isinstance(result, dict)
        return result

    def _prepare_for_dynamo(self, value: Any) -> Any:
        """
        Recursively prepares Python values for Boto3 TypeSerializer.

        Converts:
        - float -> Decimal (boto3 requirement)
        - datetime/date -> ISO 8601 string
        - UUID -> string
        - Enum -> value
        """
        if isinstance(value, float):
            # Convert to string first to avoid float precision artifacts during Decimal creation
            return Decimal(str(value))
        if isinstance(value, datetime):
            # Pydantic uses 'Z' for UTC instead of '+00:00'
            utc_offset = value.utcoffset()
            if utc_offset is not None and utc_offset.total_seconds() == 0:
                return value.replace(tzinfo=None).isoformat() + "Z"
            return value.isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, UUID):
            return str(value)
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, list):
            return [self._prepare_for_dynamo(v) for v in value]
        if isinstance(value, dict):
            return {k: self._prepare_for_dynamo(v) for k, v in value.items()}
        return value

    def _restore_to_python(self, value: Any) -> Any:
        """
        Recursively restores DynamoDB values to Python-friendly types.

        Converts:
        - Decimal -> int (if whole number) or float
        """
        if isinstance(value, Decimal):
            if value % 1 == 0:
                return int(value)
            return float(value)
        if isinstance(value, list):
            return [self._restore_to_python(v) for v in value]
        if isinstance(value, dict):
            return {k: self._restore_to_python(v) for k, v in value.items()}
        return value
