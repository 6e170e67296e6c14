"""
auth/store.py -- SQLAlchemy Core persistence layer for auth entities.

Pattern: Repository + Data Mapper (same as qa/store.py).
UserStore and SessionStore are the repositories; _row_to_user /
_row_to_session are the mappers. Service code never touches SQL directly.

Both repositories receive an Engine from the process bootstrap (see
core/database.py). They never create or dispose one themselves.

Security:
  All queries use bound parameters. No f-strings in SQL.

  users.username and users.email are UNIQUE. AuthService pre-checks both
  before inserting, but that check-then-act is not atomic: two concurrent
  signups can both pass it. The UNIQUE constraints are the real arbiter --
  create_user() lets IntegrityError propagate so the service can turn it into
  the matching conflict error.

  user_sessions.access_token is UNIQUE. Sessions are never deleted; a signed
  out session keeps its row with logout_at stamped.

Timestamps are stored as ISO 8601 strings (UTC) and converted to aware
datetimes by the mappers.

Layer rule: no imports from api/ or qa/.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.engine import Engine

from auth.models import Session, User
from core.database import metadata

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uuid", String(200), nullable=False, unique=True),
    Column("username", String(30), nullable=False, unique=True),
    Column("email", String(50), nullable=False, unique=True),
    Column("salt", String(200), nullable=False),
    Column("password_digest", String(255), nullable=False),
    Column("role", String(30), nullable=False, server_default="nonadmin"),
    Column("first_name", String(30), nullable=False, server_default=""),
    Column("last_name", String(30), nullable=False, server_default=""),
    Column("country", String(30)),
    Column("about_me", String(50)),
    Column("dob", String(30)),
    Column("contact_number", String(30)),
    Column("created_at", String(32), nullable=False),
)

_sessions = Table(
    "user_sessions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uuid", String(200), nullable=False, unique=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("access_token", Text, nullable=False, unique=True),
    Column("issued_at", String(32), nullable=False),
    Column("expires_at", String(32), nullable=False),
    Column("logout_at", String(32)),  # NULL while the session is live
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _iso(value: datetime | None) -> str | None:
    return value.astimezone(timezone.utc).isoformat() if value is not None else None


def _parse_iso(value: str | None) -> datetime | None:
    """Parse a stored timestamp. Naive values are treated as UTC."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User records.

    Usage:
        store = UserStore(engine)
        user_id = store.create_user(user)
        user = store.get_by_username("alice")
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        metadata.create_all(self.engine)

    def create_user(self, user: User) -> int:
        """Insert a new user and return its assigned database ID.

        Raises sqlalchemy.exc.IntegrityError if the username, email or uuid is
        already taken. Callers decide which conflict that was.
        """
        with self.engine.begin() as conn:
            result = conn.execute(
                _users.insert().values(
                    uuid=user.uuid,
                    username=user.username,
                    email=user.email,
                    salt=user.salt,
                    password_digest=user.password_digest,
                    role=user.role,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    country=user.country,
                    about_me=user.about_me,
                    dob=user.dob,
                    contact_number=user.contact_number,
                    created_at=_now_iso(),
                )
            )
            return result.inserted_primary_key[0]

    def get_by_id(self, user_id: int) -> User | None:
        """Look up a user by primary key. Returns None if not found."""
        return self._fetch_one(_users.c.id == user_id)

    def get_by_uuid(self, user_uuid: str) -> User | None:
        return self._fetch_one(_users.c.uuid == user_uuid)

    def get_by_username(self, username: str) -> User | None:
        """Look up a user by exact username (case-sensitive). Returns None if not found."""
        return self._fetch_one(_users.c.username == username)

    def get_by_email(self, email: str) -> User | None:
        return self._fetch_one(_users.c.email == email)

    def _fetch_one(self, clause) -> User | None:
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(clause)).fetchone()
        return _row_to_user(row) if row is not None else None


class SessionStore:
    """Repository for Session records, keyed by access token.

    Exposes create / find_by_token / update and nothing else. There is no
    delete: sessions accumulate as an audit trail.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        metadata.create_all(self.engine)

    def create(self, session: Session) -> Session:
        """Persist a new session and return it with its database ID filled in.

        Raises sqlalchemy.exc.IntegrityError on a duplicate token.
        """
        with self.engine.begin() as conn:
            result = conn.execute(
                _sessions.insert().values(
                    uuid=session.uuid,
                    user_id=session.user.id,
                    access_token=session.access_token,
                    issued_at=_iso(session.issued_at),
                    expires_at=_iso(session.expires_at),
                    logout_at=_iso(session.logout_at),
                )
            )
            session.id = result.inserted_primary_key[0]
        return session

    def find_by_token(self, access_token: str) -> Session | None:
        """Point lookup by token, with the owning user attached. None if unknown."""
        with self.engine.connect() as conn:
            row = conn.execute(_sessions.select().where(_sessions.c.access_token == access_token)).fetchone()
            if row is None:
                return None
            user_row = conn.execute(_users.select().where(_users.c.id == row.user_id)).fetchone()
        return _row_to_session(row, _row_to_user(user_row))

    def update(self, session: Session) -> int:
        """Stamp logout_at on a still-open session and return the rows changed.

        The WHERE clause requires logout_at IS NULL, so a session is closed
        at most once even when two signouts race: the loser gets 0.
        """
        with self.engine.begin() as conn:
            result = conn.execute(
                _sessions.update()
                .where(_sessions.c.id == session.id, _sessions.c.logout_at.is_(None))
                .values(logout_at=_iso(session.logout_at))
            )
            return result.rowcount


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        uuid=row.uuid,
        username=row.username,
        email=row.email,
        salt=row.salt,
        password_digest=row.password_digest,
        role=row.role,
        first_name=row.first_name,
        last_name=row.last_name,
        country=row.country,
        about_me=row.about_me,
        dob=row.dob,
        contact_number=row.contact_number,
        created_at=row.created_at,
    )


def _row_to_session(row, user: User) -> Session:
    return Session(
        id=row.id,
        uuid=row.uuid,
        access_token=row.access_token,
        user=user,
        issued_at=_parse_iso(row.issued_at),
        expires_at=_parse_iso(row.expires_at),
        logout_at=_parse_iso(row.logout_at),
    )
