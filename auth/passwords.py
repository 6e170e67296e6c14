"""
auth/passwords.py -- Salted password hashing (bcrypt, direct usage).

Contract:
  hash_password(plain)          -> (salt, digest)   fresh random salt per call
  derive_digest(plain, salt)    -> digest           deterministic recomputation
  digests_match(candidate, stored) -> bool          constant-time comparison

The salt and digest are stored in separate columns. bcrypt.hashpw() is
deterministic for a given salt, so verification is "derive again with the
stored salt, then compare" -- the caller decides what a mismatch means.
Nothing here raises on a wrong password.

bcrypt only consumes the first 72 bytes of its input, and bcrypt >= 5 raises
instead of truncating. _encode() truncates explicitly so both releases
behave the same.

Layer rule: no imports from api/ or qa/.
"""

from __future__ import annotations

import hmac

import bcrypt

from core.config import get_settings

_settings = get_settings()

_BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str) -> tuple[str, str]:
    """Return (salt, digest) for a plaintext password.

    A new salt is generated on every call, so hashing the same password twice
    never yields the same pair.
    """
    salt = bcrypt.gensalt(rounds=_settings.bcrypt_rounds)
    digest = bcrypt.hashpw(_encode(plain), salt)
    return salt.decode("ascii"), digest.decode("ascii")


def derive_digest(plain: str, salt: str) -> str:
    """Recompute the digest of plain under an existing salt."""
    return bcrypt.hashpw(_encode(plain), salt.encode("ascii")).decode("ascii")


def digests_match(candidate: str, stored: str) -> bool:
    return hmac.compare_digest(candidate.encode("ascii"), stored.encode("ascii"))
