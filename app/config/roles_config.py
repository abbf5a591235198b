"""
Roles Configuration
Mirrors the `app_role` enum declared in the store. Used by the role policy,
the admin route guard and the role provisioning script.
"""

from enum import Enum


class AppRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


ROLE_DESCRIPTIONS = {
    AppRole.ADMIN: "Manages webhook URLs for every user",
    AppRole.USER: "Manages own Meta credentials and client database",
}


def parse_role(value: str) -> AppRole:
    """Return the AppRole for a raw string, raising ValueError on unknown roles"""
    try:
        return AppRole(value.strip().lower())
    except ValueError:
        valid = ", ".join(r.value for r in AppRole)
        raise ValueError(f"Unknown role '{value}'. Valid roles: {valid}")
