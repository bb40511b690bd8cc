# ============================================================
# models.py — Modèles de données SQLModel (Booking Service)
# ------------------------------------------------------------
# Définit les structures de tables de la base PostgreSQL :
#   1️. Booking : représente une réservation de cours
#   2️. CheckinRecord : trace d'audit de chaque tentative de check-in
# Et les corps de requête / identité de l'appelant :
#   3️. CheckinRequest, ActingUser
# ============================================================
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from .status import BookingStatus, CheckinMethod


def new_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ------------------------------------------------------------
# Booking
# ------------------------------------------------------------
# Représente une réservation entre un professeur et un élève :
#  - student_id vide = créneau ouvert, pas encore réservé
#  - status_canonical fait foi : AVAILABLE | PAID | DONE | CANCELED | COMPLETED
#  - status est l'ancien champ texte, gardé pour compatibilité
#  - Cycle de vie géré ici : PAID → COMPLETED au check-in
# ------------------------------------------------------------
class Booking(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    teacher_id: str = Field(index=True)
    student_id: Optional[str] = Field(default=None, index=True)
    franchise_id: str = Field(index=True)
    status: str = BookingStatus.AVAILABLE.value
    status_canonical: str = BookingStatus.AVAILABLE.value
    date: Optional[datetime] = None
    start_at: Optional[datetime] = None
    duration: int = 60                     # minutes
    created_at: datetime = Field(default_factory=utcnow)


# ------------------------------------------------------------
# CheckinRecord
# ------------------------------------------------------------
# Une ligne par tentative auditée (GRANTED ou DENIED).
# teacher_id est toujours celui de la réservation, pas celui
# de l'utilisateur qui a agi.
# ------------------------------------------------------------
class CheckinRecord(SQLModel, table=True):
    __tablename__ = "checkins"

    id: str = Field(default_factory=new_id, primary_key=True)
    academy_id: str = Field(index=True)
    teacher_id: str = Field(index=True)
    booking_id: str = Field(index=True)
    status: str                            # GRANTED | DENIED
    reason: Optional[str] = None           # code de refus, vide si GRANTED
    method: str                            # QRCODE | MANUAL
    created_at: datetime = Field(default_factory=utcnow, index=True)


class BookingCreate(SQLModel):
    teacher_id: str
    student_id: Optional[str] = None
    franchise_id: str
    status_canonical: BookingStatus = BookingStatus.AVAILABLE
    date: Optional[datetime] = None
    start_at: Optional[datetime] = None
    duration: int = Field(default=60, gt=0)


class CheckinRequest(SQLModel):
    method: CheckinMethod


class ActingUser(SQLModel):
    user_id: str
    role: str = ""
