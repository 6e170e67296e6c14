"""
api/routes/v1/users.py -- Signup, signin, signout and user profile endpoints.

Routes:
  POST /api/v1/user/signup            -- register a non-admin user (public)
  POST /api/v1/user/signin            -- Basic credentials; token in access-token header (public)
  POST /api/v1/user/signout           -- close the session named by the token
  GET  /api/v1/userprofile/{user_id}  -- public profile of any user (requires auth)

Security:
  Signup never creates an admin. Admins come from `python main.py create-admin`.
  Cache-Control: no-store on signin/signout responses so no proxy keeps a token.
  Signout validates nothing but the token's existence and open state -- an
  expired session may still be signed out.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.models import SigninResponse, SignoutResponse, SignupUserRequest, SignupUserResponse, UserDetailsResponse
from auth.dependencies import extract_token, get_auth_service, get_current_user, parse_basic_credentials
from auth.models import User
from auth.service import AuthService
from core.exceptions import MalformedCredentials

router = APIRouter()


@router.post("/user/signup", response_model=SignupUserResponse, status_code=201)
def signup(body: SignupUserRequest, service: AuthService = Depends(get_auth_service)) -> SignupUserResponse:
    """Register a new user. SGR-001 if the username is taken, SGR-002 if the email is."""
    user = service.signup(body.to_draft())
    return SignupUserResponse(id=user.uuid, status="USER SUCCESSFULLY REGISTERED")


@router.post("/user/signin", response_model=SigninResponse)
def signin(request: Request, service: AuthService = Depends(get_auth_service)) -> JSONResponse:
    """Open a session from "authorization: Basic base64(username:password)".

    The access token is returned in the access-token response header; the
    body carries the user's public id.
    """
    header = request.headers.get("authorization")
    if not header:
        raise MalformedCredentials()
    username, password = parse_basic_credentials(header)
    session = service.signin(username, password)
    resp = JSONResponse(
        status_code=200,
        content=SigninResponse(id=session.user.uuid, message="SIGNED IN SUCCESSFULLY").model_dump(),
    )
    resp.headers["access-token"] = session.access_token
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/user/signout", response_model=SignoutResponse)
def signout(request: Request, service: AuthService = Depends(get_auth_service)) -> JSONResponse:
    """Close the session. SGR-001 for an unknown token, SGR-002 if already closed."""
    user = service.signout(extract_token(request))
    resp = JSONResponse(
        status_code=200,
        content=SignoutResponse(id=user.uuid, message="SIGNED OUT SUCCESSFULLY").model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.get("/userprofile/{user_id}", response_model=UserDetailsResponse)
def user_profile(
    user_id: str,
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> UserDetailsResponse:
    """Return the profile of the user with public id user_id. USR-001 if unknown."""
    return UserDetailsResponse.from_user(service.get_user_by_uuid(user_id))
