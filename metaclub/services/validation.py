from typing import Any, Optional

from ..models import TEAM_SIZES, ROLES

SIZE_ERRORS = {
    "Solo": "Solo team must have exactly 1 member",
    "Duo": "Duo team must have exactly 2 members",
    "Squad": "Squad must have exactly 4 members",
}


def validate_registration(team_type: Any, members: Any) -> Optional[str]:
    """
    Check team and member shape before anything is persisted.

    Returns the first failure message, or None when the payload is valid.
    Checks run in order: team type, members container, member count,
    required member fields, member roles.
    """
    if team_type not in TEAM_SIZES:
        return "Invalid team type"
    if members is None or not isinstance(members, list):
        return "Invalid members data"

    if len(members) != TEAM_SIZES[team_type]:
        return SIZE_ERRORS[team_type]

    for member in members:
        if not isinstance(member, dict):
            return "Invalid members data"
        if not member.get("name") or not member.get("email") or not member.get("role"):
            return "Missing member details"
        if not member.get("registration_number"):
            return "Missing Registration ID"
        if member["role"] not in ROLES:
            return "Invalid role"

    return None
