"""
Shared dependencies for v1 endpoints.

The record store lives on ``app.state.store``; these helpers hand
request handlers a service bound to it and translate domain errors
into HTTP errors.
"""

from fastapi import HTTPException, Request, status

from skills_hub_api.app.core.errors import NoMatchesError, NotFoundError, SkillsHubError, ValidationError
from skills_hub_api.app.core.store import RecordStore
from skills_hub_api.app.services.resource_service import ResourceService
from skills_hub_api.app.services.user_service import UserService


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_user_service(request: Request) -> UserService:
    return UserService(get_store(request))


def get_resource_service(request: Request) -> ResourceService:
    return ResourceService(get_store(request))


def http_error(exc: SkillsHubError) -> HTTPException:
    """Map a domain error to the matching HTTP error.

    ``NoMatchesError`` is a 404 like ``NotFoundError`` but keeps its own
    detail message so clients can tell an unknown user from a user
    nobody can teach.
    """
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, (NotFoundError, NoMatchesError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
