"""Unit tests for auth/tokens.py -- session token codec.

Covers:
- issued token carries sub / iat / exp for the session window
- two tokens for the same user and instant are distinct (jti)
- a token signed with another key does not verify
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import JWTError, jwt

from auth.tokens import issue_token

SECRET = "k" * 32
ISSUED = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
EXPIRES = ISSUED + timedelta(hours=8)


def _claims(token: str, secret: str = SECRET) -> dict:
    return jwt.decode(token, secret, algorithms=["HS256"], options={"verify_exp": False})


def test_claims_bind_user_and_window():
    claims = _claims(issue_token("user-uuid-1", ISSUED, EXPIRES, SECRET))
    assert claims["sub"] == "user-uuid-1"
    assert claims["iat"] == int(ISSUED.timestamp())
    assert claims["exp"] == int(EXPIRES.timestamp())
    assert claims["jti"]


def test_tokens_are_unique_within_same_second():
    first = issue_token("user-uuid-1", ISSUED, EXPIRES, SECRET)
    second = issue_token("user-uuid-1", ISSUED, EXPIRES, SECRET)
    assert first != second


def test_wrong_key_does_not_verify():
    token = issue_token("user-uuid-1", ISSUED, EXPIRES, SECRET)
    with pytest.raises(JWTError):
        _claims(token, "z" * 32)
