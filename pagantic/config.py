from dataclasses import dataclass
from typing import Any


@dataclass
class TableOptions:
    """
    Where a DynamoCapability reads its records from.

    Without a partition key the whole table (or index) is scanned. With one,
    the capability issues a Query restricted to that partition.
    """

    table_name: str
    region: str = "us-east-1"
    index_name: str | None = None
    partition_key: str | None = None
    partition_value: Any | None = None
    consistent_read: bool = False

    def __post_init__(self) -> None:
        if self.partition_key is not None and self.partition_value is None:
            raise ValueError(
                f"partition_value is required when partition_key '{self.partition_key}' is set"
            )

    @property
    def uses_query(self) -> bool:
        """
        Check if reads go through the Query API instead of Scan.

        Returns:
            True if a partition key is configured, False otherwise
        """
        return self.partition_key is not None
