from .team import Team, TEAM_SIZES
from .participant import Participant, ROLES, PAYMENT_STATUSES

__all__ = [
    "Team",
    "Participant",
    "TEAM_SIZES",
    "ROLES",
    "PAYMENT_STATUSES",
]
