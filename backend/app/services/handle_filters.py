"""Filter Dispatcher — maps filter HTTP requests onto exactly one Provider operation.

Invariants:
    - Stateless: every input arrives per request, nothing is kept between requests
    - Provider payload bytes are written back unmodified
    - List/get/delete/save successes carry Content-Type application/json;
      import success leaves the content type unset
    - Provider failures become 500 with "failed to {action}: {error}", except:
        * token retrieval -> fixed "failed to get user token", no detail
        * import -> raw error text, no prefix, no content type
    - Body decode failure -> 400 and the provider is never called
    - Save releases the request body exactly once on every exit path
    - No retries: each provider failure is reported once

Design Decisions:
    - Error conventions differ per operation on purpose; clients already parse them
      (ADR: observable contract over consistency)
    - Flat 500 for provider failures: not-found vs unavailable is not surfaced
    - prefObj/user are accepted and forwarded nowhere: they are opaque caller context
    - Handlers take the Starlette request and read path params from it, so the
      route layer stays a one-line delegation
"""

import logging

from pydantic import ValidationError
from starlette.requests import ClientDisconnect, Request
from starlette.responses import PlainTextResponse, Response

from app.core.provider_protocol import Provider
from app.schemas.identity import Preference, User
from app.schemas.meshery_filter import MesheryFilter

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def _http_error(message: str, status_code: int = 500) -> Response:
    """Plain-text error body, the shared error helper for list/get/delete/save."""
    return PlainTextResponse(message, status_code=status_code)


def _json_payload(payload: bytes) -> Response:
    return Response(content=payload, media_type=JSON_CONTENT_TYPE)


def _log_provider_failure(operation: str, exc: Exception, **extra) -> None:
    logger.warning(
        f"Provider {operation} failed: {exc}",
        extra={"operation": operation, **extra},
    )


async def filter_file_request_handler(
    request: Request, pref: Preference, user: User, provider: Provider,
) -> Response | None:
    """Collection route: GET lists, POST saves.

    Any other verb is left unhandled (returns None); producing a
    "method not allowed" answer is the router's job.
    """
    if request.method == "GET":
        return await get_meshery_filters_handler(request, pref, user, provider)
    if request.method == "POST":
        return await save_filter_file(request, pref, user, provider)
    return None


async def get_meshery_filters_handler(
    request: Request, pref: Preference, user: User, provider: Provider,
) -> Response:
    """Return the page of filters visible to the caller."""
    q = request.query_params
    try:
        resp = await provider.get_meshery_filters(
            request,
            q.get("page", ""),
            q.get("page_size", ""),
            q.get("search", ""),
            q.get("order", ""),
        )
    except Exception as e:
        _log_provider_failure("get_meshery_filters", e)
        return _http_error(f"failed to fetch the filters: {e}")

    return _json_payload(resp)


async def get_meshery_filter_handler(
    request: Request, pref: Preference, user: User, provider: Provider,
) -> Response:
    """Return a single filter by id."""
    filter_id = request.path_params.get("id", "")

    try:
        resp = await provider.get_meshery_filter(request, filter_id)
    except Exception as e:
        _log_provider_failure("get_meshery_filter", e, filter_id=filter_id)
        return _http_error(f"failed to get the filter: {e}")

    return _json_payload(resp)


async def delete_meshery_filter_handler(
    request: Request, pref: Preference, user: User, provider: Provider,
) -> Response:
    """Delete a filter by id. Irreversible; no confirmation step."""
    filter_id = request.path_params.get("id", "")

    try:
        resp = await provider.delete_meshery_filter(request, filter_id)
    except Exception as e:
        _log_provider_failure("delete_meshery_filter", e, filter_id=filter_id)
        return _http_error(f"failed to delete the filter: {e}")

    logger.info(f"Filter {filter_id} deleted", extra={"filter_id": filter_id})
    return _json_payload(resp)


async def import_filter_file_github_handler(
    request: Request, pref: Preference, user: User, provider: Provider,
) -> Response:
    """Import a filter file from a GitHub repository.

    Writes the fetched content as-is; on failure the raw error text is the body.
    """
    owner = request.path_params.get("owner", "")
    repo = request.path_params.get("repo", "")
    path = request.path_params.get("path", "")

    try:
        cont = await provider.import_filter_file_github(request, owner, repo, path)
    except Exception as e:
        _log_provider_failure("import_filter_file_github", e, path=f"{owner}/{repo}/{path}")
        return Response(content=str(e), status_code=500)

    return Response(content=cont)


async def save_filter_file(
    request: Request, pref: Preference, user: User, provider: Provider,
) -> Response:
    """Create or update a filter from the JSON request body."""
    try:
        return await _save_filter_file(request, provider)
    finally:
        await request.close()


async def _save_filter_file(request: Request, provider: Provider) -> Response:
    try:
        parsed_body = MesheryFilter.model_validate_json(await request.body())
    except (ValidationError, ClientDisconnect) as e:
        logger.info(f"Rejected filter body: {e}", extra={"operation": "save_meshery_filter"})
        return Response(
            content=f"failed to read request body: {e}", status_code=400,
        )

    try:
        token = await provider.get_provider_token(request)
    except Exception as e:
        _log_provider_failure("get_provider_token", e)
        return _http_error("failed to get user token")

    try:
        resp = await provider.save_meshery_filter(token, parsed_body)
    except Exception as e:
        _log_provider_failure(
            "save_meshery_filter", e,
            filter_id=str(parsed_body.id) if parsed_body.id else None,
        )
        return _http_error(f"failed to save the filter: {e}")

    return _json_payload(resp)
