"""
Paginating Projects

Walks the same data with both strategies: offset pages (with a total count)
and cursor pages (seek by creation date, newest first). The first half runs
in memory; the second half runs against a DynamoDB table named "Projects".
"""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel

from pagantic import DynamoCapability, MemoryCapability, Page, Paginator, TableOptions


class Project(BaseModel):
    id: int
    name: str
    date_creation: datetime


start = datetime(2024, 1, 1, tzinfo=timezone.utc)
projects = [
    Project(id=i, name=f"project-{i}", date_creation=start + timedelta(hours=i))
    for i in range(1, 8)
]

# --- In memory ---

paginator = Paginator(lambda: MemoryCapability(projects, Project))

page = Page.offset_page("date_creation", limit=3)
while True:
    items, page = paginator.paginate(page)
    print(f"offset page: {[p.id for p in items]} (total={page.count})")
    if not page.has_next:
        break

for items, next_page in paginator.iter_pages(
    Page.cursor_page("date_creation", limit=3, reverse=True)
):
    print(f"cursor page: {[p.id for p in items]} next cursor={next_page.cursor.value}")

# --- DynamoDB ---

options = TableOptions(table_name="Projects", region="us-east-1")
dynamo_paginator = Paginator(DynamoCapability.factory(Project, options))

first_items, next_page = dynamo_paginator.paginate(Page.cursor_page("id", limit=20))
print(f"Fetched {len(first_items)} projects, more: {next_page.has_next}")

# A frontend would store next_page and send it back for the following request
if next_page.has_next:
    more_items, next_page = dynamo_paginator.paginate(next_page)
    print(f"Fetched {len(more_items)} more projects")
