"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

Two credential shapes arrive in the `authorization` header:
  1. "Basic base64(username:password)" -- only on POST /user/signin.
  2. An access token, bare or as "Bearer <token>" -- every other
     authenticated call.

get_current_session() validates the token through AuthService.validate()
and returns the live Session; get_current_user() narrows that to its User.
Failures are raised as core.exceptions errors (NotSignedIn, SignedOut,
SessionExpired) and rendered by the exception handlers in api/main.py.

The AuthService itself lives on app.state, built once by the lifespan.

Layer rule: no imports from qa/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

import base64
import binascii

from fastapi import Request

from auth.models import Session, User
from auth.service import AuthService
from core.exceptions import MalformedCredentials, NotSignedIn


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def extract_token(request: Request) -> str:
    """Return the token from the authorization header, minus any Bearer prefix.

    Returns "" when the header is missing; the caller decides which error that is.
    """
    header = request.headers.get("authorization", "").strip()
    if header[:7].lower() == "bearer ":
        header = header[7:].strip()
    return header


def read_access_token(request: Request) -> str:
    """Like extract_token(), but a missing token is NotSignedIn."""
    token = extract_token(request)
    if not token:
        raise NotSignedIn()
    return token


def parse_basic_credentials(header: str) -> tuple[str, str]:
    """Decode "Basic base64(username:password)" into (username, password).

    The password may itself contain ':' -- only the first colon separates.
    Raises MalformedCredentials for anything that is not that shape.
    """
    scheme, _, encoded = header.strip().partition(" ")
    if scheme.lower() != "basic" or not encoded:
        raise MalformedCredentials()
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise MalformedCredentials() from exc
    username, sep, password = decoded.partition(":")
    if not sep or not username:
        raise MalformedCredentials()
    return username, password


def get_current_session(request: Request) -> Session:
    """Require a live session. Use as a FastAPI dependency:

        @router.get("/protected")
        def route(session: Session = Depends(get_current_session)): ...
    """
    return get_auth_service(request).validate(read_access_token(request))


def get_current_user(request: Request) -> User:
    """Require a live session and return the signed-in user."""
    return get_current_session(request).user
