"""
Tenant/role authorization gate.

Every role maps to a closed set of scopes. Hotel-scoped roles only ever act on
their own hotel; platform admins act on all of them. Callers hand in an explicit
``Principal`` built for the current request.
"""
import enum
import logging
import uuid
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple, Union

from hotelhub.core.errors import (
    InsufficientRoleError,
    TenantMismatchError,
    UnauthenticatedError,
)
from hotelhub.models.user import User, UserRole

logger = logging.getLogger(__name__)


class Scope(str, enum.Enum):
    PLATFORM_ADMIN = "platform_admin"
    OWNER = "owner"
    HOTEL_SETTINGS = "hotel_settings"
    FRONT_DESK = "front_desk"
    HOUSEKEEPING = "housekeeping"
    MAINTENANCE = "maintenance"
    ACCOUNTING = "accounting"
    POS = "pos"
    STAFF = "staff"
    # Guest self-service outside any hotel: booking history
    PUBLIC_BOOKING = "public_booking"


class LandingDashboard(str, enum.Enum):
    PLATFORM = "/super-admin"
    OWNER = "/owner"
    FRONT_DESK = "/front-desk"
    HOUSEKEEPING = "/housekeeping"
    MAINTENANCE = "/maintenance"
    ACCOUNTING = "/accounting"
    POS = "/pos"
    PUBLIC_HOME = "/"


PLATFORM_ROLES: FrozenSet[UserRole] = frozenset({UserRole.SUPER_ADMIN, UserRole.DEVELOPER_ADMIN})

_HOTEL_MEMBER: FrozenSet[Scope] = frozenset({Scope.STAFF})

# Capabilities a role holds directly.
ROLE_SCOPES: Dict[UserRole, FrozenSet[Scope]] = {
    UserRole.SUPER_ADMIN: frozenset(Scope),
    UserRole.DEVELOPER_ADMIN: frozenset(Scope),
    UserRole.HOTEL_OWNER: frozenset({Scope.OWNER, Scope.HOTEL_SETTINGS}) | _HOTEL_MEMBER,
    UserRole.HOTEL_MANAGER: frozenset({Scope.OWNER}) | _HOTEL_MEMBER,
    UserRole.FRONT_DESK: frozenset({Scope.FRONT_DESK}) | _HOTEL_MEMBER,
    UserRole.HOUSEKEEPING: frozenset({Scope.HOUSEKEEPING}) | _HOTEL_MEMBER,
    UserRole.MAINTENANCE: frozenset({Scope.MAINTENANCE}) | _HOTEL_MEMBER,
    UserRole.ACCOUNTING: frozenset({Scope.ACCOUNTING}) | _HOTEL_MEMBER,
    UserRole.POS_STAFF: frozenset({Scope.POS}) | _HOTEL_MEMBER,
    UserRole.GUEST: frozenset({Scope.PUBLIC_BOOKING}),
}

STAFF_ROLES: Tuple[UserRole, ...] = (
    UserRole.FRONT_DESK,
    UserRole.HOUSEKEEPING,
    UserRole.MAINTENANCE,
    UserRole.ACCOUNTING,
    UserRole.POS_STAFF,
)

# Elevated roles inherit every scope of the roles listed here.
ROLE_INHERITS: Dict[UserRole, Tuple[UserRole, ...]] = {
    UserRole.HOTEL_OWNER: STAFF_ROLES,
    UserRole.HOTEL_MANAGER: STAFF_ROLES,
}

LANDING_BY_ROLE: Dict[UserRole, LandingDashboard] = {
    UserRole.SUPER_ADMIN: LandingDashboard.PLATFORM,
    UserRole.DEVELOPER_ADMIN: LandingDashboard.PLATFORM,
    UserRole.HOTEL_OWNER: LandingDashboard.OWNER,
    UserRole.HOTEL_MANAGER: LandingDashboard.OWNER,
    UserRole.FRONT_DESK: LandingDashboard.FRONT_DESK,
    UserRole.HOUSEKEEPING: LandingDashboard.HOUSEKEEPING,
    UserRole.MAINTENANCE: LandingDashboard.MAINTENANCE,
    UserRole.ACCOUNTING: LandingDashboard.ACCOUNTING,
    UserRole.POS_STAFF: LandingDashboard.POS,
    UserRole.GUEST: LandingDashboard.PUBLIC_HOME,
}

# URL segments of the tenant dashboard router (/<hotel-slug>/<segment>).
DASHBOARD_SEGMENTS: Dict[str, Scope] = {
    "owner": Scope.HOTEL_SETTINGS,
    "manager": Scope.OWNER,
    "frontdesk": Scope.FRONT_DESK,
    "housekeeping": Scope.HOUSEKEEPING,
    "maintenance": Scope.MAINTENANCE,
    "accounting": Scope.ACCOUNTING,
    "pos": Scope.POS,
}

for _table in (ROLE_SCOPES, LANDING_BY_ROLE):
    _missing = set(UserRole) - set(_table)
    if _missing:
        raise RuntimeError(f"Roles without an entry: {sorted(r.value for r in _missing)}")


@dataclass(frozen=True)
class Principal:
    user_id: uuid.UUID
    role: UserRole
    hotel_id: Optional[uuid.UUID] = None

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(user_id=user.id, role=UserRole(user.role), hotel_id=user.hotel_id)

    @property
    def is_platform_admin(self) -> bool:
        return self.role in PLATFORM_ROLES


def scopes_for(role: UserRole) -> FrozenSet[Scope]:
    """All scopes a role holds, inheritance applied."""
    scopes = set(ROLE_SCOPES[role])
    for inherited in ROLE_INHERITS.get(role, ()):
        scopes |= ROLE_SCOPES[inherited]
    return frozenset(scopes)


def requires_hotel(role: UserRole) -> bool:
    return role not in PLATFORM_ROLES and role is not UserRole.GUEST


def validate_affiliation(role: UserRole, hotel_id: Optional[uuid.UUID]) -> None:
    """Raise ValueError if the role/hotel pairing breaks the affiliation rule."""
    if requires_hotel(role) and hotel_id is None:
        raise ValueError(f"Role {role.value} requires a hotel affiliation")
    if not requires_hotel(role) and hotel_id is not None:
        raise ValueError(f"Role {role.value} cannot be affiliated with a hotel")


def _as_uuid(value: Union[uuid.UUID, str, None]) -> Optional[uuid.UUID]:
    if value is None or isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def authorize(
    principal: Optional[Principal],
    target_hotel_id: Union[uuid.UUID, str, None],
    requested_scope: Scope,
) -> Scope:
    """
    Decide whether ``principal`` may use ``requested_scope`` on ``target_hotel_id``.

    ``target_hotel_id`` is None for resources outside any hotel; a hotel-scoped
    principal never matches it. PLATFORM_ADMIN is decided on role alone.
    Returns the granted scope; raises UnauthenticatedError, TenantMismatchError
    or InsufficientRoleError.
    """
    if principal is None:
        raise UnauthenticatedError()

    target = _as_uuid(target_hotel_id)
    if (
        requested_scope is not Scope.PLATFORM_ADMIN
        and not principal.is_platform_admin
        and _as_uuid(principal.hotel_id) != target
    ):
        logger.warning(
            "Tenant mismatch: user %s (%s) denied %s",
            principal.user_id, principal.role.value, requested_scope.value,
        )
        raise TenantMismatchError()

    if requested_scope not in scopes_for(principal.role):
        logger.warning(
            "Insufficient role: user %s (%s) denied %s",
            principal.user_id, principal.role.value, requested_scope.value,
        )
        raise InsufficientRoleError()

    return requested_scope


def resolve_landing_dashboard(principal: Optional[Principal]) -> LandingDashboard:
    if principal is None:
        return LandingDashboard.PUBLIC_HOME
    return LANDING_BY_ROLE[principal.role]
