"""
auth/tokens.py -- Session token codec (python-jose, HS256).

Security design decisions:
  Tokens are JWTs signed with HS256. The claims bind the identity's public
  uuid (sub), the validity window (iat / exp) and a random jti. The jti makes
  every token unique even when one user signs in twice within the same
  second -- the sessions table has a UNIQUE index on the token.

  Signing key: the caller passes the secret. AuthService passes
  Settings.secret_key, an application secret that is independent of user
  passwords. Tokens therefore do not depend on the password digest, and
  rotating SECRET_KEY revokes everything at once.

  Validity is NOT checked by re-parsing the token. The sessions table holds
  issued_at / expires_at / logout_at, and AuthService.validate() reads those.
  Clients treat the token as opaque, and nothing in the server decodes it.

Layer rule: no imports from api/ or qa/.
"""

from __future__ import annotations

import secrets
from datetime import datetime

from jose import jwt

_ALGORITHM = "HS256"


def issue_token(user_uuid: str, issued_at: datetime, expires_at: datetime, secret: str) -> str:
    """Encode a signed token for one session. Always succeeds for valid input.

    Args:
        user_uuid:  Public identifier of the signed-in user (never the
                    internal primary key).
        issued_at:  Session start, timezone-aware.
        expires_at: Session end, timezone-aware.
        secret:     Signing key material.
    """
    payload = {
        "sub": user_uuid,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
        "jti": secrets.token_hex(16),
    }
    return jwt.encode(payload, secret, algorithm=_ALGORITHM)
