"""Request Credentials — locate the caller's provider token in an inbound request.

Invariants:
    - Cookie "token" wins over the Authorization header
    - Only "Bearer <token>" authorization values are accepted
    - Returns None when the request carries no token; callers decide if that is an error
"""

from starlette.requests import Request

TOKEN_COOKIE = "token"


def extract_request_token(request: Request) -> str | None:
    token = request.cookies.get(TOKEN_COOKIE)
    if token:
        return token
    scheme, _, value = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None
