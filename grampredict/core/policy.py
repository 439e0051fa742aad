import enum
from typing import Dict, FrozenSet


class AppRole(str, enum.Enum):
    ADMIN = "admin"
    PANCHAYAT_OFFICER = "panchayat_officer"
    PUBLIC = "public"


class Capability(str, enum.Enum):
    VIEW_DASHBOARD = "view_dashboard"
    REQUEST_FORECAST = "request_forecast"
    CREATE_ASSET = "create_asset"
    UPDATE_ASSET = "update_asset"
    MANAGE_USERS = "manage_users"
    MANAGE_DISTRICTS = "manage_districts"


ROLE_CAPABILITIES: Dict[AppRole, FrozenSet[Capability]] = {
    AppRole.ADMIN: frozenset(Capability),
    AppRole.PANCHAYAT_OFFICER: frozenset({
        Capability.VIEW_DASHBOARD,
        Capability.REQUEST_FORECAST,
        Capability.CREATE_ASSET,
        Capability.UPDATE_ASSET,
    }),
    AppRole.PUBLIC: frozenset({
        Capability.VIEW_DASHBOARD,
        Capability.REQUEST_FORECAST,
    }),
}


def has_capability(role, capability: Capability) -> bool:
    """Checks whether a role grants a capability.

    Unknown role strings are treated as having no capabilities at all rather
    than falling back to the public role.

    Args:
        role (AppRole | str): The role to check, as stored on the user.
        capability (Capability): The capability being requested.

    Returns:
        bool: True if the role grants the capability.
    """
    try:
        role = AppRole(role)
    except ValueError:
        return False
    return capability in ROLE_CAPABILITIES[role]
