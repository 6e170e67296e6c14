"""Unit tests for auth/guard.py -- owner-or-admin decisions.

Covers the full actor x privilege matrix:

                 EDIT              DELETE
  owner          allowed           allowed
  other user     OwnerOnly         OwnerOrAdminOnly
  admin          OwnerOnly         allowed
"""

import pytest

from auth.guard import Denial, Privilege, authorize_mutation, can_mutate
from auth.models import ROLE_ADMIN, User
from core.exceptions import OwnerOnly, OwnerOrAdminOnly


def _user(user_id: int, role: str = "nonadmin") -> User:
    return User(
        id=user_id,
        uuid=f"uuid-{user_id}",
        username=f"user{user_id}",
        email=f"user{user_id}@example.com",
        salt="salt",
        password_digest="digest",
        role=role,
    )


OWNER = _user(1)
OTHER = _user(2)
ADMIN = _user(3, role=ROLE_ADMIN)


@pytest.mark.parametrize(
    "actor, privilege, expected",
    [
        (OWNER, Privilege.EDIT, None),
        (OWNER, Privilege.DELETE, None),
        (OTHER, Privilege.EDIT, Denial.OWNER_ONLY),
        (OTHER, Privilege.DELETE, Denial.OWNER_OR_ADMIN_ONLY),
        (ADMIN, Privilege.EDIT, Denial.OWNER_ONLY),
        (ADMIN, Privilege.DELETE, None),
    ],
)
def test_can_mutate_matrix(actor, privilege, expected):
    assert can_mutate(actor, OWNER, privilege) == expected


def test_identity_is_compared_by_id_not_object():
    """Two separately loaded records of the same row are the same identity."""
    reloaded = _user(1)
    assert reloaded is not OWNER
    assert can_mutate(reloaded, OWNER, Privilege.EDIT) is None


def test_unsaved_actor_is_never_owner():
    unsaved = _user(1)
    unsaved.id = None
    owner = _user(1)
    owner.id = None
    assert can_mutate(unsaved, owner, Privilege.EDIT) is Denial.OWNER_ONLY


def test_authorize_mutation_edit_denied_message():
    with pytest.raises(OwnerOnly) as exc_info:
        authorize_mutation(ADMIN, OWNER, Privilege.EDIT, "question")
    assert exc_info.value.code == "ATHR-003"
    assert exc_info.value.message == "Only the question owner can edit the question"


def test_authorize_mutation_delete_denied_message():
    with pytest.raises(OwnerOrAdminOnly) as exc_info:
        authorize_mutation(OTHER, OWNER, Privilege.DELETE, "answer")
    assert exc_info.value.code == "ATHR-003"
    assert exc_info.value.message == "Only the answer owner or admin can delete the answer"


def test_authorize_mutation_allowed_returns_none():
    assert authorize_mutation(ADMIN, OWNER, Privilege.DELETE, "question") is None
