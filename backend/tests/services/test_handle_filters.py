"""Filter Dispatcher — verifies provider forwarding and error translation without HTTP.

Invariants:
    - Path parameters reach the provider unchanged
    - Save closes the request body exactly once on every exit path
    - Save never calls the provider's save when the body does not decode
    - Unmatched verbs on the collection route are left unhandled (None)

Design Decisions:
    - FakeRequest instead of a real Starlette request: close() calls are countable
"""

import json

import pytest
from starlette.requests import ClientDisconnect

from app.schemas.identity import Preference, User
from app.schemas.meshery_filter import MesheryFilter
from app.services import handle_filters
from tests.services.fake_provider import FakeProvider, FakeRequest


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def pref():
    return Preference()


@pytest.fixture
def user():
    return User(user_id="u-1", username="tester")


VALID_BODY = json.dumps({"name": "ratelimit", "filter_file": "wasm"}).encode()


# --- Verb routing -------------------------------------------------------------

async def test_collection_get_routes_to_list(provider, pref, user):
    res = await handle_filters.filter_file_request_handler(
        FakeRequest("GET"), pref, user, provider,
    )
    assert res.status_code == 200
    assert provider.operations() == ["get_meshery_filters"]


async def test_collection_post_routes_to_save(provider, pref, user):
    res = await handle_filters.filter_file_request_handler(
        FakeRequest("POST", body=VALID_BODY), pref, user, provider,
    )
    assert res.status_code == 200
    assert provider.operations() == ["get_provider_token", "save_meshery_filter"]


@pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE", "HEAD"])
async def test_collection_other_verbs_are_unhandled(provider, pref, user, method):
    res = await handle_filters.filter_file_request_handler(
        FakeRequest(method), pref, user, provider,
    )
    assert res is None
    assert provider.calls == []


# --- List ---------------------------------------------------------------------

async def test_list_forwards_absent_params_as_empty_strings(provider, pref, user):
    await handle_filters.get_meshery_filters_handler(
        FakeRequest(query_params={"search": "rate"}), pref, user, provider,
    )
    assert provider.args_of("get_meshery_filters") == ("", "", "rate", "")


async def test_list_returns_provider_bytes_verbatim(provider, pref, user):
    provider.responses["get_meshery_filters"] = b'{"filters":[1,2]}'
    res = await handle_filters.get_meshery_filters_handler(
        FakeRequest(), pref, user, provider,
    )
    assert res.body == b'{"filters":[1,2]}'
    assert res.headers["content-type"] == "application/json"


async def test_list_error_is_prefixed_500(provider, pref, user):
    provider.errors["get_meshery_filters"] = RuntimeError("db down")
    res = await handle_filters.get_meshery_filters_handler(
        FakeRequest(), pref, user, provider,
    )
    assert res.status_code == 500
    assert res.body == b"failed to fetch the filters: db down"


# --- Get / Delete -------------------------------------------------------------

@pytest.mark.parametrize("filter_id", [
    "abc", "", "7f1c3c52-9f5e-4c8e-9a55-1b0c9a1f0e11", "with space", "ünïcode",
])
async def test_get_and_delete_forward_id_unchanged(provider, pref, user, filter_id):
    request = FakeRequest(path_params={"id": filter_id})
    await handle_filters.get_meshery_filter_handler(request, pref, user, provider)
    await handle_filters.delete_meshery_filter_handler(request, pref, user, provider)
    assert provider.args_of("get_meshery_filter") == (filter_id,)
    assert provider.args_of("delete_meshery_filter") == (filter_id,)


async def test_get_error_is_prefixed_500(provider, pref, user):
    provider.errors["get_meshery_filter"] = RuntimeError("boom")
    res = await handle_filters.get_meshery_filter_handler(
        FakeRequest(path_params={"id": "abc"}), pref, user, provider,
    )
    assert res.status_code == 500
    assert res.body == b"failed to get the filter: boom"


async def test_delete_error_is_prefixed_500(provider, pref, user):
    provider.errors["delete_meshery_filter"] = RuntimeError("not found")
    res = await handle_filters.delete_meshery_filter_handler(
        FakeRequest(path_params={"id": "abc"}), pref, user, provider,
    )
    assert res.status_code == 500
    assert res.body == b"failed to delete the filter: not found"


# --- Save ---------------------------------------------------------------------

async def test_save_passes_token_and_decoded_filter(provider, pref, user):
    provider.responses["get_provider_token"] = "tok-123"
    res = await handle_filters.save_filter_file(
        FakeRequest("POST", body=VALID_BODY), pref, user, provider,
    )
    token, meshery_filter = provider.args_of("save_meshery_filter")
    assert token == "tok-123"
    assert isinstance(meshery_filter, MesheryFilter)
    assert meshery_filter.name == "ratelimit"
    assert meshery_filter.id is None
    assert res.body == b'{"id":"saved"}'
    assert res.headers["content-type"] == "application/json"


@pytest.mark.parametrize("body", [b"not-json", b"", b"[1, 2]", b'{"name": 5}', b"null"])
async def test_save_rejects_malformed_body_without_calling_provider(
    provider, pref, user, body,
):
    request = FakeRequest("POST", body=body)
    res = await handle_filters.save_filter_file(request, pref, user, provider)
    assert res.status_code == 400
    assert res.body.startswith(b"failed to read request body:")
    assert provider.calls == []
    assert request.close_count == 1


async def test_save_client_disconnect_is_a_read_failure(provider, pref, user):
    request = FakeRequest("POST", body_error=ClientDisconnect())
    res = await handle_filters.save_filter_file(request, pref, user, provider)
    assert res.status_code == 400
    assert provider.calls == []
    assert request.close_count == 1


async def test_save_token_failure_omits_error_detail(provider, pref, user):
    provider.errors["get_provider_token"] = RuntimeError("secret detail")
    request = FakeRequest("POST", body=VALID_BODY)
    res = await handle_filters.save_filter_file(request, pref, user, provider)
    assert res.status_code == 500
    assert res.body == b"failed to get user token"
    assert "save_meshery_filter" not in provider.operations()
    assert request.close_count == 1


async def test_save_provider_failure_is_prefixed_500(provider, pref, user):
    provider.errors["save_meshery_filter"] = RuntimeError("conflict")
    request = FakeRequest("POST", body=VALID_BODY)
    res = await handle_filters.save_filter_file(request, pref, user, provider)
    assert res.status_code == 500
    assert res.body == b"failed to save the filter: conflict"
    assert request.close_count == 1


async def test_save_success_closes_body_once(provider, pref, user):
    request = FakeRequest("POST", body=VALID_BODY)
    await handle_filters.save_filter_file(request, pref, user, provider)
    assert request.close_count == 1


async def test_save_closes_body_when_provider_raises_unexpectedly(pref, user):
    class _Abort(BaseException):
        pass

    class _ExplodingProvider(FakeProvider):
        async def get_provider_token(self, request):
            raise _Abort

    request = FakeRequest("POST", body=VALID_BODY)
    with pytest.raises(_Abort):
        await handle_filters.save_filter_file(
            request, pref, user, _ExplodingProvider(),
        )
    assert request.close_count == 1


# --- Import -------------------------------------------------------------------

async def test_import_forwards_owner_repo_path(provider, pref, user):
    request = FakeRequest(path_params={
        "owner": "layer5io", "repo": "wasm-filters", "path": "rate-limit/filter.yaml",
    })
    await handle_filters.import_filter_file_github_handler(request, pref, user, provider)
    assert provider.args_of("import_filter_file_github") == (
        "layer5io", "wasm-filters", "rate-limit/filter.yaml",
    )


async def test_import_success_leaves_content_type_unset(provider, pref, user):
    res = await handle_filters.import_filter_file_github_handler(
        FakeRequest(path_params={"owner": "foo", "repo": "bar", "path": "baz.yaml"}),
        pref, user, provider,
    )
    assert res.status_code == 200
    assert res.body == b"spec: {}"
    assert "content-type" not in res.headers


async def test_import_error_is_raw_text(provider, pref, user):
    provider.errors["import_filter_file_github"] = RuntimeError("repository not found")
    res = await handle_filters.import_filter_file_github_handler(
        FakeRequest(path_params={"owner": "foo", "repo": "bar", "path": "baz.yaml"}),
        pref, user, provider,
    )
    assert res.status_code == 500
    assert res.body == b"repository not found"
    assert "content-type" not in res.headers
