"""
Service layer for learning resources.

Resources are grouped by category.  Listing a category that was never
used raises ``NotFoundError``; a category whose resources were all
deleted lists as empty.
"""

from typing import List

from skills_hub_api.app.core.store import RecordStore, Resource
from skills_hub_api.app.schemas.resource import CategoryRead, ResourceCreate, ResourceRead
from skills_hub_api.app.services import query_engine


class ResourceService:
    """Service for publishing, listing and removing resources."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def create_resource(self, data: ResourceCreate) -> str:
        return self.store.add_resource(data.link, data.category, data.added_by)

    async def list_resources(self, category: str) -> List[ResourceRead]:
        """Return the resources of ``category`` in the order they were added."""
        resources = query_engine.resources_in_category(self.store.snapshot(), category)
        return [self._to_read(resource) for resource in resources]

    async def delete_resource(self, resource_id: str, category: str) -> None:
        self.store.delete_resource(resource_id, category)

    async def list_categories(self) -> List[CategoryRead]:
        return [CategoryRead(name=name, count=count) for name, count in self.store.list_categories()]

    @staticmethod
    def _to_read(resource: Resource) -> ResourceRead:
        return ResourceRead(
            id=resource.id,
            link=resource.link,
            category=resource.category,
            added_by=resource.added_by,
        )
