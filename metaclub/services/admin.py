import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import String, cast
from sqlmodel import Session, select, func, col, or_

from ..exceptions import PersistenceError, TeamNotFoundError
from ..models import Team, Participant

logger = logging.getLogger(__name__)


def _registration_row(team: Team, participant: Participant) -> Dict[str, Any]:
    return {
        "team_id": team.id,
        "team_name": team.name,
        "team_type": team.type,
        "event_id": team.event_id,
        "total_amount": team.total_amount,
        "created_at": team.created_at,
        "transaction_id": team.transaction_id,
        "screenshot_path": team.screenshot_path,
        "participant_name": participant.name,
        "email": participant.email,
        "phone": participant.phone,
        "role": participant.role,
        "registration_number": participant.registration_number,
        "ticket_id": participant.ticket_id,
        "payment_status": participant.payment_status,
        "amount_paid": participant.amount_paid,
    }


def list_registrations(db: Session, search: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    All participants joined with their team, most recent team first.

    ``search`` matches case-insensitively against team name, participant
    name, email, ticket id and registration number.
    """
    statement = (
        select(Team, Participant)
        .join(Participant, Participant.team_id == Team.id)
        .order_by(col(Team.created_at).desc(), col(Team.id).desc(), col(Participant.id))
    )
    if search:
        pattern = f"%{search}%"
        statement = statement.where(or_(
            col(Team.name).ilike(pattern),
            col(Participant.name).ilike(pattern),
            col(Participant.email).ilike(pattern),
            col(Participant.ticket_id).ilike(pattern),
            col(Participant.registration_number).ilike(pattern),
        ))

    return [_registration_row(team, participant) for team, participant in db.exec(statement).all()]


def list_teams(db: Session, search: Optional[str] = None) -> List[Team]:
    """Team rows only, most recent first. ``search`` matches name, transaction id or id."""
    statement = select(Team).order_by(col(Team.created_at).desc(), col(Team.id).desc())
    if search:
        pattern = f"%{search}%"
        statement = statement.where(or_(
            col(Team.name).ilike(pattern),
            col(Team.transaction_id).ilike(pattern),
            cast(Team.id, String).like(pattern),
        ))
    return list(db.exec(statement).all())


def participant_total(db: Session, team_id: int) -> float:
    """Sum of what the team's participants paid."""
    total = db.exec(
        select(func.sum(Participant.amount_paid)).where(Participant.team_id == team_id)
    ).first()
    return total or 0


def update_team(
    db: Session,
    team_id: int,
    name: Optional[str],
    team_type: str,
    total_amount: float,
    transaction_id: Optional[str]
) -> Team:
    """
    Overwrite a team's editable fields.

    Participant amounts are left untouched, so an admin can override the
    total. A total that no longer matches the participant sum is logged.
    """
    team = db.get(Team, team_id)
    if not team:
        raise TeamNotFoundError(team_id)

    team.name = name
    team.type = team_type
    team.total_amount = total_amount
    team.transaction_id = transaction_id

    try:
        db.add(team)
        db.commit()
        db.refresh(team)
    except Exception as e:
        db.rollback()
        logger.exception("Update of team %s failed", team_id)
        raise PersistenceError() from e

    paid = participant_total(db, team_id)
    if paid != team.total_amount:
        logger.warning(
            "Team %s total %s differs from participant amounts %s after admin edit",
            team_id, team.total_amount, paid
        )

    logger.info("Team %s updated", team_id)
    return team


def delete_team(db: Session, team_id: int) -> None:
    """Delete a team and all of its participants in one transaction."""
    team = db.get(Team, team_id)
    if not team:
        raise TeamNotFoundError(team_id)

    try:
        participants = db.exec(select(Participant).where(Participant.team_id == team_id)).all()
        for participant in participants:
            db.delete(participant)
        db.flush()
        db.delete(team)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception("Delete of team %s failed, rolled back", team_id)
        raise PersistenceError() from e

    logger.info("Team %s and its participants deleted", team_id)
