from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4


class ProfHourBalance(SQLModel, table=True):
    professor_id: str = Field(primary_key=True)
    franqueadora_id: str = Field(primary_key=True)
    available_hours: float = 0      # heures utilisables par le professeur
    locked_hours: float = 0         # heures bonus en attente de check-in


class HourTransaction(SQLModel, table=True):
    # une seule transaction de chaque type par réservation
    __table_args__ = (UniqueConstraint("booking_id", "type"),)

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)
    professor_id: str = Field(index=True)
    franqueadora_id: str
    type: str                       # BONUS_LOCK|BONUS_UNLOCK|REFUND
    source: str = "SYSTEM"
    hours: float
    booking_id: str = Field(index=True)
    meta_json: dict = Field(default_factory=dict, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HoursRequest(SQLModel):
    bookingId: str
    professorId: str
    franqueadoraId: str
    studentId: Optional[str] = None
    hours: float = Field(ge=0)
    method: str = "MANUAL"
