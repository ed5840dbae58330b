"""
Shared pytest fixtures and configuration for Pagantic tests.

This module provides common fixtures used across the unit tests,
including a sample record model, mocked boto3 clients and helpers that
turn records into DynamoDB responses.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel

from pagantic import MemoryCapability, Paginator


class Project(BaseModel):
    id: int
    name: str
    date_creation: datetime


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")


def make_projects(n: int) -> list[Project]:
    """Builds `n` projects whose ids and creation dates share the same order."""
    start = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    return [
        Project(id=i, name=f"project-{i:03d}", date_creation=start + timedelta(seconds=i))
        for i in range(1, n + 1)
    ]


def to_dynamo_item(project: Project) -> dict[str, Any]:
    """Renders a project the way DynamoDB returns it from a Scan."""
    return {
        "id": {"N": str(project.id)},
        "name": {"S": project.name},
        "date_creation": {"S": project.date_creation.isoformat().replace("+00:00", "Z")},
    }


def paginator_pages(*pages: list[dict[str, Any]]) -> MagicMock:
    """Builds a mocked boto3 paginator whose paginate() yields the given item pages."""
    paginator = MagicMock()
    paginator.paginate.return_value = [{"Items": items, "Count": len(items)} for items in pages]
    return paginator


@pytest.fixture
def projects() -> list[Project]:
    """Three projects with ids 1, 2, 3 created one second apart."""
    return make_projects(3)


@pytest.fixture
def memory_paginator(projects) -> Paginator[Project]:
    """Paginator over the three sample projects, one fresh capability per call."""
    return Paginator(lambda: MemoryCapability(projects, Project))


@pytest.fixture
def mock_client():
    """
    Creates a fully mocked boto3 DynamoDB client.

    The client's paginator returns the three sample projects in a single page.
    """
    client = MagicMock()
    client.get_paginator.return_value = paginator_pages(
        [to_dynamo_item(p) for p in make_projects(3)]
    )
    return client


@pytest.fixture
def recording_capability():
    """
    A capability mock that records every call the paginator makes.

    fetch() appends whatever is stored in `capability.rows`; count()
    returns `capability.total`.
    """
    capability = MagicMock()
    capability.record_type = None
    capability.rows = []
    capability.total = 0
    capability.fetch.side_effect = lambda destination: destination.extend(capability.rows)
    capability.count.side_effect = lambda: capability.total
    return capability


@pytest.fixture
def project_factory():
    """Returns make_projects, for tests that need a dataset of a given size."""
    return make_projects


@pytest.fixture
def dynamo_item():
    """Returns to_dynamo_item, for tests that build DynamoDB responses."""
    return to_dynamo_item


@pytest.fixture
def scan_pages():
    """Returns paginator_pages, for tests that mock boto3 paginators."""
    return paginator_pages


@pytest.fixture
def project_model() -> type[Project]:
    """The Project record model."""
    return Project
