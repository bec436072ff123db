"""
Information endpoint for API v1.

Returns the service name and version together with record counts,
which is handy for dashboards and smoke tests.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from skills_hub_api.app.api.v1.deps import get_store
from skills_hub_api.app.core.store import RecordStore

router = APIRouter()


@router.get("/", response_model=Dict[str, Any])
async def get_info(request: Request, store: RecordStore = Depends(get_store)) -> Dict[str, Any]:
    app_settings = request.app.state.settings
    return {
        "name": app_settings.project_name,
        "version": app_settings.api_version,
        "normalize_skills": store.normalize_skills,
        "counts": store.counts(),
    }
