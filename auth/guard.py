"""
auth/guard.py -- Owner-or-admin authorization decision.

can_mutate() is a pure function: no store access, no clock, no logging. It
answers "may this actor apply this privilege to a resource owned by that
identity?" and returns the denial kind, or None when allowed.

  EDIT   -- only the owner.                       Denial: OwnerOnly
  DELETE -- the owner, or any admin.              Denial: OwnerOrAdminOnly

Identities are compared by internal database id. Never by public uuid, and
never by object identity -- two User instances loaded separately for the
same row are the same identity.

authorize_mutation() wraps the decision for service code: it raises the
matching AuthorizationFailure with a resource-specific message.

Layer rule: no imports from api/ or qa/.
"""

from __future__ import annotations

from enum import Enum

from auth.models import User
from core.exceptions import AuthorizationFailure, OwnerOnly, OwnerOrAdminOnly


class Privilege(str, Enum):
    EDIT = "edit"
    DELETE = "delete"


class Denial(str, Enum):
    OWNER_ONLY = "OwnerOnly"
    OWNER_OR_ADMIN_ONLY = "OwnerOrAdminOnly"


def can_mutate(actor: User, owner: User, privilege: Privilege) -> Denial | None:
    """Return None if actor may apply privilege to owner's resource, else the Denial."""
    is_owner = actor.id is not None and actor.id == owner.id
    if privilege is Privilege.EDIT:
        return None if is_owner else Denial.OWNER_ONLY
    if is_owner or actor.is_admin:
        return None
    return Denial.OWNER_OR_ADMIN_ONLY


def authorize_mutation(actor: User, owner: User, privilege: Privilege, resource: str) -> None:
    """Raise OwnerOnly / OwnerOrAdminOnly unless can_mutate() allows the call.

    resource names the kind of thing being mutated ("question", "answer") and
    only shapes the error message; the code is ATHR-003 either way.
    """
    denial = can_mutate(actor, owner, privilege)
    if denial is None:
        return
    error: AuthorizationFailure
    if denial is Denial.OWNER_ONLY:
        error = OwnerOnly(f"Only the {resource} owner can edit the {resource}")
    else:
        error = OwnerOrAdminOnly(f"Only the {resource} owner or admin can delete the {resource}")
    raise error
