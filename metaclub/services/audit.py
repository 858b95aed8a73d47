from dataclasses import dataclass, field
from typing import List

from sqlmodel import Session, select, func, col

from ..models import Team, Participant
from .admin import list_registrations


@dataclass
class AuditReport:
    total_teams: int = 0
    total_participants: int = 0
    admin_view_rows: int = 0
    orphaned_participants: List[int] = field(default_factory=list)
    missing_ticket_ids: List[int] = field(default_factory=list)
    missing_registration_numbers: List[int] = field(default_factory=list)
    amount_mismatches: List[int] = field(default_factory=list)

    @property
    def counts_match(self) -> bool:
        return self.total_participants == self.admin_view_rows

    @property
    def ok(self) -> bool:
        return self.counts_match and not (
            self.orphaned_participants
            or self.missing_ticket_ids
            or self.missing_registration_numbers
            or self.amount_mismatches
        )


def audit_registrations(db: Session) -> AuditReport:
    """
    Check that the admin view shows everything that was written.

    Flags participants without a team, participants missing a ticket id or
    registration number, and teams whose total differs from what their
    participants paid.
    """
    report = AuditReport()
    report.total_teams = db.exec(select(func.count(Team.id))).first() or 0
    report.total_participants = db.exec(select(func.count(Participant.id))).first() or 0
    report.admin_view_rows = len(list_registrations(db))

    team_ids = set(db.exec(select(Team.id)).all())
    participants = db.exec(select(Participant).order_by(col(Participant.id))).all()
    paid_by_team = {}
    for participant in participants:
        if participant.team_id not in team_ids:
            report.orphaned_participants.append(participant.id)
        if not participant.ticket_id:
            report.missing_ticket_ids.append(participant.id)
        if not participant.registration_number:
            report.missing_registration_numbers.append(participant.id)
        paid_by_team[participant.team_id] = (
            paid_by_team.get(participant.team_id, 0) + (participant.amount_paid or 0)
        )

    for team in db.exec(select(Team).order_by(col(Team.id))).all():
        if paid_by_team.get(team.id, 0) != team.total_amount:
            report.amount_mismatches.append(team.id)

    return report
