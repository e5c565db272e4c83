"""Row-level authorization for orders.

A stateless predicate over (role, requester, owner): admins see and change
every order, everyone else only their own.
"""

from enum import Enum

from pantry.exceptions import Unauthorized


class Role(Enum):
    ADMIN = "admin"
    USER = "user"


def role_for(is_admin) -> Role:
    return Role.ADMIN if is_admin else Role.USER


def is_permitted(role, requester_id, owner_id) -> bool:
    if Role(role) == Role.ADMIN:
        return True
    return requester_id is not None and str(requester_id) == str(owner_id)


def ensure_permitted(role, requester_id, owner_id, action="access this order") -> None:
    if not is_permitted(role, requester_id, owner_id):
        raise Unauthorized(requester_id, action=action)


def ensure_admin(role, requester_id, action="manage orders") -> None:
    if Role(role) != Role.ADMIN:
        raise Unauthorized(requester_id, action=action)
