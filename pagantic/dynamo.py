"""
DynamoDB QueryCapability built on boto3.

DynamoDB can filter server-side but cannot order a Scan by an arbitrary
attribute nor skip N items, so this capability:

1. sends the accumulated filters as a FilterExpression (Scan, or Query when
   the options name a partition),
2. drains every response page through the boto3 paginator,
3. orders and slices the validated models client-side.

Counting uses Select="COUNT" with the same filters, so no items travel back.
"""

from collections.abc import MutableSequence
from typing import Any, Generic, TypeVar

import boto3
from boto3.dynamodb.conditions import Attr, ConditionBase, ConditionExpressionBuilder
from pydantic import BaseModel

from ._logging import logger
from .capability import DISABLED, CapabilityFactory, check_operator
from .config import TableOptions
from .exceptions import handle_dynamo_errors
from .sequence import read_field, validate_field
from .serializer import DynamoSerializer

T = TypeVar("T", bound=BaseModel)


_CONDITION_METHODS = {"=": "eq", "!=": "ne", "<": "lt", "<=": "lte", ">": "gt", ">=": "gte"}


def build_condition(field: str, op: str, value: Any) -> ConditionBase:
    """Translates a (field, operator, value) filter into a boto3 condition."""
    check_operator(op)
    return getattr(Attr(field), _CONDITION_METHODS[op])(value)


def compile_filter(condition: ConditionBase, serializer: DynamoSerializer) -> dict[str, Any]:
    """
    Compiles a boto3 condition into low-level request parameters.

    Returns:
        Dict with FilterExpression, ExpressionAttributeNames and
        ExpressionAttributeValues (serialized to DynamoDB JSON)
    """
    # boto3's builder handles reserved keywords and placeholder generation
    builder = ConditionExpressionBuilder()
    expression = builder.build_expression(condition, is_key_condition=False)

    return {
        "FilterExpression": expression.condition_expression,
        "ExpressionAttributeNames": dict(expression.attribute_name_placeholders),
        "ExpressionAttributeValues": {
            placeholder: serializer.to_dynamo_value(value)
            for placeholder, value in expression.attribute_value_placeholders.items()
        },
    }


class DynamoCapability(Generic[T]):
    """
    Implements the QueryCapability contract against a DynamoDB table.

    Usage:
        options = TableOptions(table_name="projects")
        paginator = Paginator(DynamoCapability.factory(Project, options))
        items, next_page = paginator.paginate(Page.cursor_page("id", limit=20))
    """

    def __init__(self, model_cls: type[T], options: TableOptions, client: Any = None) -> None:
        self.model_cls = model_cls
        self.record_type = model_cls
        self.options = options
        self.client = client or boto3.client("dynamodb", region_name=options.region)
        self.serializer = DynamoSerializer()

        # Internal state of the pending request
        self.condition: ConditionBase | None = None
        self.order_field: str | None = None
        self.descending = False
        self.limit_val: int | None = None
        self.offset_val: int | None = None

    @classmethod
    def factory(
        cls, model_cls: type[T], options: TableOptions, client: Any = None
    ) -> CapabilityFactory[T]:
        """Returns a factory building one fresh capability per pagination call."""
        shared_client = client or boto3.client("dynamodb", region_name=options.region)

        def build() -> "DynamoCapability[T]":
            return cls(model_cls, options, client=shared_client)

        return build

    # --- Builder Interface ---

    def add_filter(self, field: str, op: str, value: Any) -> None:
        validate_field(self.model_cls, field)
        new_condition = build_condition(field, op, value)

        # Combine with existing filters (AND)
        if self.condition is not None:
            self.condition = self.condition & new_condition
        else:
            self.condition = new_condition

    def set_order(self, field: str, descending: bool = False) -> None:
        validate_field(self.model_cls, field)
        self.order_field = field
        self.descending = descending

    def set_limit(self, limit: int) -> None:
        self.limit_val = None if limit == DISABLED else limit

    def set_offset(self, offset: int) -> None:
        self.offset_val = None if offset == DISABLED else offset

    # --- Execution ---

    def _operation(self) -> str:
        return "query" if self.options.uses_query else "scan"

    def _request_kwargs(self) -> dict[str, Any]:
        """Builds the boto3 arguments shared by fetch() and count()."""
        kwargs: dict[str, Any] = {"TableName": self.options.table_name}
        names: dict[str, str] = {}
        values: dict[str, Any] = {}

        if self.options.index_name:
            kwargs["IndexName"] = self.options.index_name
        if self.options.consistent_read:
            kwargs["ConsistentRead"] = True

        if self.options.uses_query:
            kwargs["KeyConditionExpression"] = "#pk = :pk"
            names["#pk"] = str(self.options.partition_key)
            values[":pk"] = self.serializer.to_dynamo_value(self.options.partition_value)

        if self.condition is not None:
            compiled = compile_filter(self.condition, self.serializer)
            kwargs["FilterExpression"] = compiled["FilterExpression"]
            names.update(compiled["ExpressionAttributeNames"])
            values.update(compiled["ExpressionAttributeValues"])

        if names:
            kwargs["ExpressionAttributeNames"] = names
        if values:
            kwargs["ExpressionAttributeValues"] = values
        return kwargs

    def fetch(self, destination: MutableSequence[T]) -> None:
        kwargs = self._request_kwargs()

        logger.info(
            "Executing paged fetch",
            extra={
                "table": self.options.table_name,
                "index": self.options.index_name,
                "operation": self._operation(),
                "has_filter": self.condition is not None,
                "order_field": self.order_field,
                "limit": self.limit_val,
                "offset": self.offset_val,
            },
        )

        records: list[T] = []
        with handle_dynamo_errors(table_name=self.options.table_name):
            paginator = self.client.get_paginator(self._operation())
            for page in paginator.paginate(**kwargs):
                for item in page.get("Items", []):
                    # DynamoDB JSON -> Python Dict -> Pydantic Model
                    records.append(self.model_cls.model_validate(self.serializer.from_dynamo(item)))

        if self.order_field is not None:
            order_field = self.order_field
            records.sort(key=lambda r: read_field(r, order_field), reverse=self.descending)

        start = self.offset_val or 0
        stop = None if self.limit_val is None else start + self.limit_val
        selected = records[start:stop]

        logger.debug(
            "Fetch complete",
            extra={
                "table": self.options.table_name,
                "evaluated": len(records),
                "result_count": len(selected),
            },
        )
        destination.extend(selected)

    def count(self) -> int:
        kwargs = self._request_kwargs()
        kwargs["Select"] = "COUNT"

        logger.info(
            "Executing count",
            extra={
                "table": self.options.table_name,
                "index": self.options.index_name,
                "operation": self._operation(),
                "has_filter": self.condition is not None,
            },
        )

        with handle_dynamo_errors(table_name=self.options.table_name):
            paginator = self.client.get_paginator(self._operation())
            return sum(page.get("Count", 0) for page in paginator.paginate(**kwargs))
