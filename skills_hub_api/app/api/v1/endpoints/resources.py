"""
Resource endpoints for API v1.

Resources are links filed under a free-form category.  The category
is passed as a query parameter so any string, including ones with
slashes, can be used.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from skills_hub_api.app.api.v1.deps import get_resource_service, http_error
from skills_hub_api.app.core.errors import SkillsHubError
from skills_hub_api.app.schemas.resource import CategoryRead, ResourceCreate, ResourceCreated, ResourceRead
from skills_hub_api.app.services.resource_service import ResourceService

router = APIRouter()


@router.post("/", response_model=ResourceCreated, status_code=status.HTTP_201_CREATED)
async def create_resource(
    resource_in: ResourceCreate,
    service: ResourceService = Depends(get_resource_service),
) -> ResourceCreated:
    """Publish a resource.  Returns HTTP 400 if any field is blank."""
    try:
        resource_id = await service.create_resource(resource_in)
    except SkillsHubError as e:
        raise http_error(e) from e
    return ResourceCreated(id=resource_id, category=resource_in.category.strip())


@router.get("/", response_model=List[ResourceRead])
async def list_resources(
    category: str = Query(..., description="Category to list"),
    service: ResourceService = Depends(get_resource_service),
) -> List[ResourceRead]:
    """Return the resources of a category in the order they were added.

    HTTP 404 if the category was never used; an emptied category
    returns an empty list.
    """
    try:
        return await service.list_resources(category)
    except SkillsHubError as e:
        raise http_error(e) from e


@router.get("/categories", response_model=List[CategoryRead])
async def list_categories(service: ResourceService = Depends(get_resource_service)) -> List[CategoryRead]:
    return await service.list_categories()


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(
    resource_id: str,
    category: str = Query(..., description="Category the resource is filed under"),
    service: ResourceService = Depends(get_resource_service),
) -> None:
    try:
        await service.delete_resource(resource_id, category)
    except SkillsHubError as e:
        raise http_error(e) from e
    return None
