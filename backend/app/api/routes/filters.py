"""Filter Routes — HTTP surface for filter artifacts, delegating to the filter dispatcher.

Invariants:
    - /api/filter accepts GET (list) and POST (save) only; other verbs get 405 from the router
    - GET and DELETE on /api/filter/{id} are separate routes with separate handlers
    - /api/filter/github/{owner}/{repo}/{path} accepts any verb (HEAD via GET, OPTIONS
      unless it is a CORS preflight); path may contain slashes
    - Routes never build responses themselves (dispatcher does)

Design Decisions:
    - Path params read by the dispatcher from request.path_params, so routes only
      inject context (ADR: thin routes)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.responses import Response

from app.api.dependencies import get_current_user, get_preference, get_provider
from app.core.provider_protocol import Provider
from app.schemas.identity import Preference, User
from app.services import handle_filters

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/filter", tags=["filters"])

_ANY_METHOD = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("", methods=["GET", "POST"])
async def filter_file_request(
    request: Request,
    pref: Preference = Depends(get_preference),
    user: User = Depends(get_current_user),
    provider: Provider = Depends(get_provider),
) -> Response:
    """List filters (GET) or create/update one (POST)."""
    response = await handle_filters.filter_file_request_handler(
        request, pref, user, provider,
    )
    if response is None:
        raise HTTPException(status.HTTP_405_METHOD_NOT_ALLOWED)
    return response


@router.api_route("/github/{owner}/{repo}/{path:path}", methods=_ANY_METHOD)
async def import_filter_file_github(
    request: Request,
    pref: Preference = Depends(get_preference),
    user: User = Depends(get_current_user),
    provider: Provider = Depends(get_provider),
) -> Response:
    """Import a filter file from a GitHub repository."""
    return await handle_filters.import_filter_file_github_handler(
        request, pref, user, provider,
    )


@router.get("/{id}")
async def get_meshery_filter(
    request: Request,
    pref: Preference = Depends(get_preference),
    user: User = Depends(get_current_user),
    provider: Provider = Depends(get_provider),
) -> Response:
    """Get a filter by id."""
    return await handle_filters.get_meshery_filter_handler(
        request, pref, user, provider,
    )


@router.delete("/{id}")
async def delete_meshery_filter(
    request: Request,
    pref: Preference = Depends(get_preference),
    user: User = Depends(get_current_user),
    provider: Provider = Depends(get_provider),
) -> Response:
    """Delete a filter by id."""
    return await handle_filters.delete_meshery_filter_handler(
        request, pref, user, provider,
    )
