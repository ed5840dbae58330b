"""
Unit tests for TableOptions configuration dataclass.

Tests the TableOptions dataclass that tells the DynamoDB capability where to read.
"""

import pytest

from pagantic.config import TableOptions


@pytest.mark.unit
class TestTableOptions:
    """Test TableOptions dataclass."""

    def test_table_options_creation(self) -> None:
        """Test basic TableOptions creation."""
        options = TableOptions(
            table_name="projects",
            region="eu-south-1",
            index_name="by-owner",
            partition_key="owner",
            partition_value="alice",
            consistent_read=True,
        )

        assert options.table_name == "projects"
        assert options.region == "eu-south-1"
        assert options.index_name == "by-owner"
        assert options.partition_key == "owner"
        assert options.partition_value == "alice"
        assert options.consistent_read is True

    def test_table_options_defaults(self) -> None:
        """Test TableOptions with default values."""
        options = TableOptions(table_name="projects")

        assert options.region == "us-east-1"
        assert options.index_name is None
        assert options.partition_key is None
        assert options.partition_value is None
        assert options.consistent_read is False

    def test_uses_query(self) -> None:
        """Scans by default, queries once a partition is named."""
        assert TableOptions(table_name="projects").uses_query is False
        assert (
            TableOptions(table_name="projects", partition_key="owner", partition_value="a").uses_query
            is True
        )

    def test_partition_key_requires_value(self) -> None:
        """Test a partition key without a value is rejected."""
        with pytest.raises(ValueError, match="partition_value is required"):
            TableOptions(table_name="projects", partition_key="owner")
