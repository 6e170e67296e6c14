"""
core/exceptions.py -- Domain failure taxonomy for the Quora API.

Every failure a request can hit is one of four families:

  AuthenticationFailure -- credentials did not identify anyone (ATH-*)
  AuthorizationFailure  -- caller is identified but may not proceed (ATHR-*,
                           and the sign-out flavoured SGR-* codes)
  ConflictFailure       -- a uniqueness rule rejected the write (SGR-*)
  NotFoundFailure       -- a referenced user/question/answer is unknown

Each concrete class pins a stable machine-readable code and a default
human-readable message. The codes are a public contract: clients branch on
them, so they never change once shipped. Some codes repeat across families
(SGR-001 is both "username taken" and "not signed in" on sign-out); the
exception class, not the code alone, identifies the failure.

The api/ layer maps QuoraError.status_code to the HTTP status and renders
code/message into the ErrorResponse envelope. Nothing here is retried --
every failure is caused by caller input or state and is scoped to one request.

Layer rule: core/ is the kernel. No imports from api/, auth/ or qa/.
"""

from __future__ import annotations


class QuoraError(Exception):
    """Base class for every expected, request-scoped failure."""

    status_code: int = 400
    code: str = "QUORA-000"
    message: str = "Request failed."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(f"{self.code}: {self.message}")


# ---------------------------------------------------------------------------
# Families
# ---------------------------------------------------------------------------


class AuthenticationFailure(QuoraError):
    status_code = 401


class AuthorizationFailure(QuoraError):
    status_code = 403


class ConflictFailure(QuoraError):
    status_code = 409


class NotFoundFailure(QuoraError):
    status_code = 404


# ---------------------------------------------------------------------------
# Signup
# ---------------------------------------------------------------------------


class DuplicateUsername(ConflictFailure):
    code = "SGR-001"
    message = "Try any other Username, this Username has already been taken"


class DuplicateEmail(ConflictFailure):
    code = "SGR-002"
    message = "This user has already been registered, try with any other emailId"


# ---------------------------------------------------------------------------
# Signin
# ---------------------------------------------------------------------------


class UnknownUser(AuthenticationFailure):
    code = "ATH-001"
    message = "This username does not exist"


class BadCredentials(AuthenticationFailure):
    code = "ATH-002"
    message = "Password failed"


class MalformedCredentials(AuthenticationFailure):
    code = "ATH-003"
    message = "Authorization header must be Basic base64(username:password)"


# ---------------------------------------------------------------------------
# Token validation
# ---------------------------------------------------------------------------


class NotSignedIn(AuthorizationFailure):
    code = "ATHR-001"
    message = "User has not signed in"


class SignedOut(AuthorizationFailure):
    code = "ATHR-002"
    message = "User is signed out.Sign in first to get user details"


class SessionExpired(AuthorizationFailure):
    code = "ATHR-004"
    message = "User session has expired.Sign in again"


# ---------------------------------------------------------------------------
# Ownership (raised by auth.guard)
# ---------------------------------------------------------------------------


class OwnerOnly(AuthorizationFailure):
    code = "ATHR-003"
    message = "Only the owner can edit this resource"


class OwnerOrAdminOnly(AuthorizationFailure):
    code = "ATHR-003"
    message = "Only the owner or admin can delete this resource"


# ---------------------------------------------------------------------------
# Signout
# ---------------------------------------------------------------------------


class SignOutRestricted(AuthorizationFailure):
    """Sign-out failures answer 401, unlike the 403 of token validation."""

    status_code = 401


class SignOutNotSignedIn(SignOutRestricted):
    code = "SGR-001"
    message = "User is not Signed in"


class AlreadySignedOut(SignOutRestricted):
    code = "SGR-002"
    message = "User is already signed out"


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class UserNotFound(NotFoundFailure):
    code = "USR-001"
    message = "User with entered uuid does not exist"


class InvalidQuestion(NotFoundFailure):
    code = "QUES-001"
    message = "Entered question uuid does not exist"


class AnswerNotFound(NotFoundFailure):
    code = "ANS-001"
    message = "Entered answer uuid does not exist"
