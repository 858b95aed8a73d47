from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from .participant import Participant

# Team type -> required member count
TEAM_SIZES = {
    "Solo": 1,
    "Duo": 2,
    "Squad": 4,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Team(SQLModel, table=True):
    """A registered group sharing one payment and one total charge."""
    __tablename__ = "teams"

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: str = Field(default="1")
    name: Optional[str] = None
    type: str = Field(max_length=10)
    total_amount: float
    transaction_id: Optional[str] = None
    screenshot_path: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, index=True)

    participants: List["Participant"] = Relationship(back_populates="team")
