# onboarding/core/permissions.py

import enum
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from onboarding.core.exceptions import ForbiddenError, SelfActionForbiddenError, UnauthorizedError

if TYPE_CHECKING:
    from onboarding.schemas.auth_schema import Session


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    BANNED = "BANNED"


class Capability(str, enum.Enum):
    MANAGE_EMPLOYEES = "MANAGE_EMPLOYEES"
    MANAGE_CUSTOMERS = "MANAGE_CUSTOMERS"
    VIEW_CUSTOMERS = "VIEW_CUSTOMERS"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.USER: frozenset({Capability.MANAGE_CUSTOMERS, Capability.VIEW_CUSTOMERS}),
    Role.BANNED: frozenset(),
}

_missing = set(Role) - set(ROLE_CAPABILITIES)
if _missing:
    raise RuntimeError(f"Roles without a capability entry: {sorted(r.value for r in _missing)}")


class DenyReason(str, enum.Enum):
    NO_SESSION = "NO_SESSION"
    ROLE_MISMATCH = "ROLE_MISMATCH"
    SELF_ACTION_FORBIDDEN = "SELF_ACTION_FORBIDDEN"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)


def role_has_capability(role: Role, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES[role]


def authorize(
    session: Optional["Session"],
    capability: Capability,
    target_user_id: Optional[int] = None,
) -> Decision:
    """
    Decide whether ``session`` may perform an operation needing ``capability``.

    ``target_user_id`` is passed only for operations aimed at a staff account
    (delete, role change); an actor may never aim those at themselves.
    """
    if session is None:
        return Decision.deny(DenyReason.NO_SESSION)
    if not role_has_capability(session.role, capability):
        return Decision.deny(DenyReason.ROLE_MISMATCH)
    if target_user_id is not None and target_user_id == session.user_id:
        return Decision.deny(DenyReason.SELF_ACTION_FORBIDDEN)
    return Decision.allow()


def ensure_allowed(decision: Decision) -> None:
    """Raise the HTTP error matching a denied decision."""
    if decision.allowed:
        return
    if decision.reason is DenyReason.NO_SESSION:
        raise UnauthorizedError()
    if decision.reason is DenyReason.SELF_ACTION_FORBIDDEN:
        raise SelfActionForbiddenError("You cannot perform this action on your own account.")
    raise ForbiddenError("Forbidden: your role does not allow this action.")
