# ============================================================
# repository.py — Accès aux données Booking et Check-in
# ------------------------------------------------------------
# Ce module implémente le design pattern "Repository" pour les
# tables Booking et checkins. Il isole la logique d'accès et de
# manipulation des données de la couche API.
# ============================================================
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import update
from sqlmodel import Session, select

from .authorizer import CheckinAuditRecord
from .models import Booking, BookingCreate, CheckinRecord
from .status import AuditStatus, BookingStatus, enum_value

MAX_CHECKINS_LISTED = 500
STATS_WINDOW_DAYS = 30


# BookingRepository
# Lecture / création des réservations et transition atomique du statut.
class BookingRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, data: BookingCreate) -> Booking:
        status = enum_value(data.status_canonical)
        b = Booking(**data.model_dump(exclude={"status_canonical"}), status=status, status_canonical=status)
        self.session.add(b)
        self.session.commit()
        self.session.refresh(b)
        return b

    def get(self, booking_id: str) -> Optional[Booking]:
        return self.session.exec(select(Booking).where(Booking.id == booking_id)).first()

    # UPDATE conditionnel : ne passe à `next_status` que si le statut
    # canonique est encore `expected`. Deux check-ins simultanés ne
    # peuvent donc pas réussir tous les deux. Pas de commit ici, la
    # transaction inclut aussi l'écriture de l'audit.
    def compare_and_set_status(self, booking_id: str, expected: BookingStatus, next_status: BookingStatus) -> bool:
        result = self.session.exec(
            update(Booking)
            .where(Booking.id == booking_id, Booking.status_canonical == expected.value)
            .values(status_canonical=next_status.value, status=next_status.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


# CheckinRepository
# Journal d'audit des tentatives de check-in (append-only).
class CheckinRepository:
    def __init__(self, session: Session):
        self.session = session

    def append(self, record: CheckinAuditRecord) -> CheckinRecord:
        row = CheckinRecord(
            academy_id=record.academy_id,
            teacher_id=record.teacher_id,
            booking_id=record.booking_id,
            status=record.status.value,
            reason=enum_value(record.reason),
            method=record.method.value,
        )
        self.session.add(row)
        return row

    def list(self, academy_id: Optional[str] = None, teacher_id: Optional[str] = None) -> List[CheckinRecord]:
        q = select(CheckinRecord)
        if academy_id:
            q = q.where(CheckinRecord.academy_id == academy_id)
        if teacher_id:
            q = q.where(CheckinRecord.teacher_id == teacher_id)
        q = q.order_by(CheckinRecord.created_at.desc()).limit(MAX_CHECKINS_LISTED)
        return list(self.session.exec(q).all())

    def stats(self, academy_id: str, now: Optional[datetime] = None) -> dict:
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=STATS_WINDOW_DAYS)
        rows = self.session.exec(
            select(CheckinRecord).where(
                CheckinRecord.academy_id == academy_id,
                CheckinRecord.created_at >= since,
            )
        ).all()

        today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        week_ago = now - timedelta(days=7)
        created = [_as_utc(r.created_at) for r in rows]
        return {
            "total": len(rows),
            "granted": sum(1 for r in rows if r.status == AuditStatus.GRANTED.value),
            "denied": sum(1 for r in rows if r.status == AuditStatus.DENIED.value),
            "today": sum(1 for c in created if c >= today_start),
            "week": sum(1 for c in created if c >= week_ago),
            "month": len(rows),
        }


# SQLite renvoie des datetimes naïfs : on les suppose en UTC
def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
