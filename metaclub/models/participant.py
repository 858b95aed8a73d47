from typing import Optional, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from .team import Team

ROLES = ("Developer", "Attacker", "Both")
PAYMENT_STATUSES = ("Pending", "Paid")


class Participant(SQLModel, table=True):
    """One member of a registered team, holding their own ticket."""
    __tablename__ = "participants"

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    name: str
    email: str
    phone: Optional[str] = None
    role: str = Field(max_length=20)
    college_or_work: Optional[str] = None
    address: Optional[str] = None
    ticket_id: Optional[str] = Field(default=None, unique=True, index=True, max_length=50)
    registration_number: Optional[str] = None
    payment_status: str = Field(default="Pending", max_length=20)
    amount_paid: Optional[float] = None

    team: Optional["Team"] = Relationship(back_populates="participants")
