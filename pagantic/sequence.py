"""
Generic helpers over page destinations.

The paginator is written once for any record type, so it never indexes the
destination directly: it asks this module for the length, for a named field of
the last record, and to drop the last record. A destination is any mutable
sequence (usually a plain list) of uniform records; a record is a Pydantic
model, a mapping, or an object exposing the field as an attribute.
"""

from collections.abc import Mapping, MutableSequence
from typing import Any, TypeVar

from pydantic import BaseModel

from .exceptions import DestinationNotEmptyError, NotASequenceError, UnknownFieldError

T = TypeVar("T")


def _ensure_sequence(seq: Any) -> MutableSequence[Any]:
    if not isinstance(seq, MutableSequence):
        raise NotASequenceError(seq)
    return seq


def _model_field_name(model_cls: type[BaseModel], field_name: str) -> str | None:
    """Resolves a field name or alias to the attribute name declared on the model."""
    fields = model_cls.model_fields
    if field_name in fields:
        return field_name
    for name, info in fields.items():
        if info.alias == field_name:
            return name
    return None


def read_field(record: Any, field_name: str) -> Any:
    """
    Reads a named field off a single record.

    Raises:
        UnknownFieldError: If the record does not expose the field
    """
    if isinstance(record, BaseModel):
        name = _model_field_name(type(record), field_name)
        if name is None:
            raise UnknownFieldError(field_name, type(record))
        return getattr(record, name)

    if isinstance(record, Mapping):
        try:
            return record[field_name]
        except KeyError as e:
            raise UnknownFieldError(field_name, type(record)) from e

    try:
        return getattr(record, field_name)
    except AttributeError as e:
        raise UnknownFieldError(field_name, type(record)) from e


def length(seq: MutableSequence[T]) -> int:
    """Returns the number of records in a destination."""
    return len(_ensure_sequence(seq))


def last_field_value(seq: MutableSequence[T], field_name: str) -> Any | None:
    """
    Returns the value of `field_name` on the last record, or None if empty.

    Raises:
        NotASequenceError: If `seq` is not a mutable sequence
        UnknownFieldError: If the last record does not expose the field
    """
    records = _ensure_sequence(seq)
    if not records:
        return None
    return read_field(records[-1], field_name)


def pop_last(seq: MutableSequence[T]) -> T | None:
    """
    Removes and returns the last record, or returns None if empty.

    The sequence is truncated in place, so every holder of the same list
    observes the shortened destination.
    """
    records = _ensure_sequence(seq)
    if not records:
        return None
    return records.pop()


def validate_destination(seq: Any) -> None:
    """
    Checks up front that a destination can receive a page of records.

    The paginator reads has_next and the next cursor off the destination
    itself, so records already present would be taken for fetched ones.

    Raises:
        NotASequenceError: If `seq` is not a mutable sequence
        DestinationNotEmptyError: If `seq` already holds records
    """
    records = _ensure_sequence(seq)
    if records:
        raise DestinationNotEmptyError(len(records))


def validate_field(record_type: type[Any] | None, field_name: str) -> None:
    """
    Checks up front that `record_type` declares `field_name`.

    Only Pydantic models declare their fields ahead of time; for any other
    record type the check happens when the field is read.
    """
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        if _model_field_name(record_type, field_name) is None:
            raise UnknownFieldError(field_name, record_type)
