import logging
import random
from dataclasses import dataclass, field
from typing import Collection, Dict, List, Optional

from sqlmodel import Session

from ..config import DEFAULT_EVENT_ID, TICKET_PREFIX, TICKET_YEAR
from ..exceptions import PersistenceError
from ..models import Team, Participant
from .pricing import calculate_price, member_price

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    team_id: int
    team_name: str
    event_id: str
    total_amount: int
    ticket_ids: List[str] = field(default_factory=list)


def generate_ticket_id(team_id: int, taken: Collection[str] = ()) -> str:
    """
    Build a ticket id like ``MVS-2025-42-1234``.

    The suffix is redrawn while it collides with one already issued to a
    teammate. Since the team id is part of the ticket, ids are unique
    across teams as well.
    """
    while True:
        suffix = random.randint(1000, 9999)
        ticket_id = f"{TICKET_PREFIX}-{TICKET_YEAR}-{team_id}-{suffix}"
        if ticket_id not in taken:
            return ticket_id


def default_team_name(members: List[Dict]) -> str:
    return f"{members[0]['name']}'s Team"


def register_team(
    db: Session,
    team_type: str,
    members: List[Dict],
    transaction_id: str,
    screenshot_path: str,
    team_name: Optional[str] = None,
    event_id: Optional[str] = None
) -> RegistrationResult:
    """
    Persist a validated team and its members in a single transaction.

    Inserts the team row with the server-computed total, then one
    participant per member with its own price share and ticket id. Either
    everything is committed or nothing is: any failure rolls back and
    raises PersistenceError.
    """
    team_name = team_name or default_team_name(members)
    event_id = event_id or DEFAULT_EVENT_ID
    total_amount = calculate_price(team_type, members)

    try:
        team = Team(
            event_id=event_id,
            name=team_name,
            type=team_type,
            total_amount=total_amount,
            transaction_id=transaction_id,
            screenshot_path=screenshot_path
        )
        db.add(team)
        # Flush to get the team id for the ticket ids
        db.flush()
        team_id = team.id

        ticket_ids: List[str] = []
        for member in members:
            ticket_id = generate_ticket_id(team_id, ticket_ids)
            ticket_ids.append(ticket_id)

            db.add(Participant(
                team_id=team_id,
                name=member["name"],
                email=member["email"],
                phone=member.get("phone"),
                role=member["role"],
                college_or_work=member.get("college_or_work"),
                address=member.get("address"),
                ticket_id=ticket_id,
                registration_number=member["registration_number"],
                payment_status="Paid",
                amount_paid=member_price(member["role"])
            ))

        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception("Registration failed for team %r, rolled back", team_name)
        raise PersistenceError("Internal server error") from e

    logger.info(
        "Registered team %s (%s). Total: %s. Tickets: %s",
        team_name, team_type, total_amount, ", ".join(ticket_ids)
    )

    return RegistrationResult(
        team_id=team_id,
        team_name=team_name,
        event_id=event_id,
        total_amount=total_amount,
        ticket_ids=ticket_ids
    )
