"""
auth/service.py -- Signup, signin, token validation and signout.

Session lifecycle:

    Anonymous --signin--> Authenticated --signout--> SignedOut
                               |
                               +-- now > expires_at --> Expired (lazy)

Nothing runs in the background. Expiry is a value comparison made inside
validate(); there is no reaper and sessions are never deleted.

Validation order in validate():
  1. unknown token           -> NotSignedIn     (ATHR-001)
  2. logout_at is set        -> SignedOut       (ATHR-002)
  3. now > expires_at        -> SessionExpired  (ATHR-004)

Signout is not idempotent by accident: a second signout on the same token
raises AlreadySignedOut (SGR-002) and leaves the original logout_at alone.
Signing out an expired-but-open session is allowed; it just closes it.
The close itself is a conditional UPDATE (logout_at IS NULL), so when two
signouts race on one token only one of them succeeds.

Signup race: the username/email pre-checks give precise errors for the
common case, but are not atomic with the insert. When two signups race, the
UNIQUE constraints in the users table reject the loser with IntegrityError,
which signup() re-classifies into the same DuplicateUsername/DuplicateEmail
errors the pre-check would have raised.

Layer rule: no imports from api/ or qa/.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError

from auth.models import ROLE_ADMIN, ROLE_NONADMIN, Session, SignupDraft, User
from auth.passwords import derive_digest, digests_match, hash_password
from auth.store import SessionStore, UserStore
from auth.tokens import issue_token
from core.exceptions import (
    AlreadySignedOut,
    BadCredentials,
    DuplicateEmail,
    DuplicateUsername,
    NotSignedIn,
    SessionExpired,
    SignedOut,
    SignOutNotSignedIn,
    UnknownUser,
    UserNotFound,
)

logger = logging.getLogger("quora.auth")

DEFAULT_SESSION_TTL = timedelta(hours=8)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthService:
    """Orchestrates the password hasher, token codec and the two stores.

    Usage:
        service = AuthService(UserStore(engine), SessionStore(engine), secret_key=settings.secret_key)
        user = service.signup(SignupDraft(username="alice", email="a@x.io", password="pw1"))
        session = service.signin("alice", "pw1")
        caller = service.validate(session.access_token).user
        service.signout(session.access_token)

    clock is injectable so tests can move time past expires_at.
    """

    def __init__(
        self,
        users: UserStore,
        sessions: SessionStore,
        secret_key: str,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._secret_key = secret_key
        self._session_ttl = session_ttl
        self._clock = clock

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def signup(self, draft: SignupDraft) -> User:
        """Register a non-admin user.

        Raises DuplicateUsername before DuplicateEmail when both collide.
        """
        return self._register(draft, ROLE_NONADMIN)

    def register_admin(self, draft: SignupDraft) -> User:
        """Register an admin. Reachable only from the CLI, never over HTTP."""
        return self._register(draft, ROLE_ADMIN)

    def _register(self, draft: SignupDraft, role: str) -> User:
        if self._users.get_by_username(draft.username) is not None:
            raise DuplicateUsername()
        if self._users.get_by_email(draft.email) is not None:
            raise DuplicateEmail()

        salt, digest = hash_password(draft.password)
        user = User(
            uuid=str(uuid.uuid4()),
            username=draft.username,
            email=draft.email,
            salt=salt,
            password_digest=digest,
            role=role,
            first_name=draft.first_name,
            last_name=draft.last_name,
            country=draft.country,
            about_me=draft.about_me,
            dob=draft.dob,
            contact_number=draft.contact_number,
        )
        try:
            user.id = self._users.create_user(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent signup; report it the same way.
            if self._users.get_by_username(draft.username) is not None:
                raise DuplicateUsername() from exc
            if self._users.get_by_email(draft.email) is not None:
                raise DuplicateEmail() from exc
            raise
        logger.info("User registered uuid=%s role=%s", user.uuid, role)
        return user

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def signin(self, username: str, password: str) -> Session:
        """Verify credentials and open a new session.

        Raises UnknownUser if username is not registered, BadCredentials if
        the password does not reproduce the stored digest.
        """
        user = self._users.get_by_username(username)
        if user is None:
            logger.info("Signin rejected: unknown username")
            raise UnknownUser()
        candidate = derive_digest(password, user.salt)
        if not digests_match(candidate, user.password_digest):
            logger.info("Signin rejected: bad password for uuid=%s", user.uuid)
            raise BadCredentials()

        now = self._clock()
        expires_at = now + self._session_ttl
        session = Session(
            uuid=str(uuid.uuid4()),
            access_token=issue_token(user.uuid, now, expires_at, self._secret_key),
            user=user,
            issued_at=now,
            expires_at=expires_at,
        )
        self._sessions.create(session)
        logger.info("Signin ok uuid=%s session=%s", user.uuid, session.uuid)
        return session

    def validate(self, access_token: str) -> Session:
        """Return the live session for access_token, or raise.

        The returned session carries its owning User in session.user.
        """
        session = self._sessions.find_by_token(access_token)
        if session is None:
            raise NotSignedIn()
        if session.is_signed_out():
            raise SignedOut()
        if session.is_expired(self._clock()):
            raise SessionExpired()
        return session

    def signout(self, access_token: str) -> User:
        """Close the session for access_token and return its owner."""
        session = self._sessions.find_by_token(access_token)
        if session is None:
            raise SignOutNotSignedIn()
        if session.is_signed_out():
            raise AlreadySignedOut()
        session.logout_at = self._clock()
        if self._sessions.update(session) == 0:
            # A concurrent signout closed it between the lookup and the update.
            raise AlreadySignedOut()
        logger.info("Signout ok uuid=%s session=%s", session.user.uuid, session.uuid)
        return session.user

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_user_by_uuid(self, user_uuid: str) -> User:
        """Return the user with this public id, or raise UserNotFound."""
        user = self._users.get_by_uuid(user_uuid)
        if user is None:
            raise UserNotFound()
        return user
