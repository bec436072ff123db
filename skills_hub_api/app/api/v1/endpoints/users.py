"""
User endpoints for API v1.

Users register the skills they can teach and the skills they want to
learn, replace both sets later, and ask for matches: other users who
teach at least one skill they want.  Domain errors are mapped to HTTP
errors by ``deps.http_error``.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from skills_hub_api.app.api.v1.deps import get_user_service, http_error
from skills_hub_api.app.core.errors import SkillsHubError
from skills_hub_api.app.schemas.user import MatchRead, UserCreate, UserCreated, UserExists, UserRead, UserUpdate
from skills_hub_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserCreated:
    """Register a user and return the generated id.

    Returns HTTP 400 if either skill list is empty.
    """
    try:
        user_id = await service.create_user(user_in)
    except SkillsHubError as e:
        raise http_error(e) from e
    return UserCreated(id=user_id)


@router.get("/", response_model=List[UserRead])
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return all users in registration order."""
    return await service.list_users()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserRead:
    try:
        return await service.get_user(user_id)
    except SkillsHubError as e:
        raise http_error(e) from e


@router.get("/{user_id}/exists", response_model=UserExists)
async def user_exists(user_id: str, service: UserService = Depends(get_user_service)) -> UserExists:
    """Report whether a user id is registered.  Never returns 404."""
    return UserExists(id=user_id, exists=await service.user_exists(user_id))


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    user_in: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Replace both skill sets of a user.

    Returns HTTP 400 for empty lists and HTTP 404 for unknown ids.
    """
    try:
        return await service.update_user(user_id, user_in)
    except SkillsHubError as e:
        raise http_error(e) from e


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> None:
    """Remove a user.  Resources they published stay listed."""
    try:
        await service.delete_user(user_id)
    except SkillsHubError as e:
        raise http_error(e) from e
    return None


@router.get("/{user_id}/matches", response_model=List[UserRead])
async def find_matches(user_id: str, service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return users who teach something ``user_id`` wants to learn.

    Sorted by id.  HTTP 404 is returned both for an unknown user and
    for a user with no matches; the detail message tells them apart.
    """
    try:
        return await service.find_matches(user_id)
    except SkillsHubError as e:
        raise http_error(e) from e


@router.get("/{user_id}/matches/summary", response_model=List[MatchRead])
async def match_summary(user_id: str, service: UserService = Depends(get_user_service)) -> List[MatchRead]:
    """Like ``/matches`` but lists the shared skills of each match."""
    try:
        return await service.match_summary(user_id)
    except SkillsHubError as e:
        raise http_error(e) from e
