"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class. Mirrors the approach in qa/models.py -- dataclasses own
domain shape; stores and services do the work. The only behaviour here is
read-only predicates over a record's own fields.

Layer rule: no imports from api/ or qa/.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_NONADMIN = "nonadmin"


@dataclass
class SignupDraft:
    """Everything a caller supplies to register. password is plaintext here
    and nowhere else -- AuthService hashes it and drops the draft."""

    username: str
    email: str
    password: str
    first_name: str = ""
    last_name: str = ""
    country: str | None = None
    about_me: str | None = None
    dob: str | None = None
    contact_number: str | None = None


@dataclass
class User:
    """A registered identity.

    id is the internal primary key and the only value ownership checks
    compare. uuid is the public identifier handed to clients; the internal id
    never leaves the server.

    salt + password_digest are the bcrypt salt and the digest derived from it.
    role is fixed at creation ("admin" or "nonadmin").
    """

    username: str
    email: str
    salt: str
    password_digest: str
    role: str = ROLE_NONADMIN
    uuid: str = ""
    id: int | None = None
    first_name: str = ""
    last_name: str = ""
    country: str | None = None
    about_me: str | None = None
    dob: str | None = None
    contact_number: str | None = None
    created_at: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass
class Session:
    """One authenticated login.

    access_token is the bearer credential (UNIQUE in storage). user is a
    shared reference -- the session never owns the identity's lifecycle.

    logout_at is None while the session is live. Once stamped it is never
    cleared or re-stamped; sessions are kept forever as an audit trail.
    """

    access_token: str
    user: User
    issued_at: datetime
    expires_at: datetime
    logout_at: datetime | None = None
    uuid: str = ""
    id: int | None = None

    def is_signed_out(self) -> bool:
        return self.logout_at is not None

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
