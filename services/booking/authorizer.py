# ============================================================
# authorizer.py — Décision de check-in
# ------------------------------------------------------------
# Fonction pure : à partir d'une réservation, de l'utilisateur
# qui agit et de la méthode de check-in, décide :
#   - si le check-in est accordé ou refusé (et pourquoi)
#   - quel enregistrement d'audit écrire (ou aucun)
#   - si la réservation doit passer à COMPLETED
# Aucune E/S ici : l'appelant applique le résultat en base.
# ============================================================
from dataclasses import dataclass
from typing import Optional, Union

from .models import ActingUser, Booking, CheckinRequest
from .status import (
    CHECKED_IN_STATUSES,
    AuditStatus,
    BookingStatus,
    CheckinMethod,
    DenialCode,
    enum_value,
    is_admin_role,
    is_legacy_completed,
)

UNAUTHORIZED_MESSAGE = "Você não tem permissão para fazer check-in neste agendamento"
ALREADY_COMPLETED_MESSAGE = "Check-in já foi realizado para este agendamento"
INVALID_STATUS_MESSAGE = "Status do agendamento inválido para check-in. Status atual: {status}"


@dataclass(frozen=True)
class Authorized:
    new_status: BookingStatus = BookingStatus.COMPLETED


@dataclass(frozen=True)
class Denied:
    code: DenialCode
    message: str


CheckinOutcome = Union[Authorized, Denied]


@dataclass(frozen=True)
class CheckinAuditRecord:
    academy_id: str
    teacher_id: str
    booking_id: str
    status: AuditStatus
    reason: Optional[DenialCode]
    method: CheckinMethod


@dataclass(frozen=True)
class CheckinDecision:
    outcome: CheckinOutcome
    audit_record: Optional[CheckinAuditRecord]
    booking_mutated: bool

    @property
    def granted(self) -> bool:
        return isinstance(self.outcome, Authorized)

    def as_payload(self, booking_id: str) -> dict:
        """Corps de réponse HTTP. Un refus ne contient jamais la réservation."""
        if isinstance(self.outcome, Authorized):
            return {
                "success": True,
                "booking": {"id": booking_id, "status_canonical": self.outcome.new_status.value},
            }
        return {
            "success": False,
            "code": self.outcome.code.value,
            "error": self.outcome.message,
        }


def _audit(booking: Booking, request: CheckinRequest, reason: Optional[DenialCode]) -> CheckinAuditRecord:
    return CheckinAuditRecord(
        academy_id=booking.franchise_id,
        teacher_id=booking.teacher_id,
        booking_id=booking.id,
        status=AuditStatus.GRANTED if reason is None else AuditStatus.DENIED,
        reason=reason,
        method=CheckinMethod(request.method),
    )


def _is_checked_in(booking: Booking) -> bool:
    return booking.status_canonical in CHECKED_IN_STATUSES or is_legacy_completed(booking.status)


def authorize(booking: Booking, user: ActingUser, request: CheckinRequest) -> CheckinDecision:
    # 1) propriétaire (professeur / élève) ou administrateur, avant tout le reste
    is_teacher = user.user_id == booking.teacher_id
    is_student = booking.student_id is not None and user.user_id == booking.student_id
    is_admin = is_admin_role(user.role)
    if not (is_teacher or is_student or is_admin):
        return CheckinDecision(
            outcome=Denied(DenialCode.UNAUTHORIZED, UNAUTHORIZED_MESSAGE),
            audit_record=_audit(booking, request, DenialCode.UNAUTHORIZED),
            booking_mutated=False,
        )

    # 2) check-in déjà fait : rejeu, pas d'audit
    if _is_checked_in(booking):
        return CheckinDecision(
            outcome=Denied(DenialCode.ALREADY_COMPLETED, ALREADY_COMPLETED_MESSAGE),
            audit_record=None,
            booking_mutated=False,
        )

    # 3) seul PAID est éligible
    if booking.status_canonical != BookingStatus.PAID:
        message = INVALID_STATUS_MESSAGE.format(status=enum_value(booking.status_canonical))
        return CheckinDecision(
            outcome=Denied(DenialCode.INVALID_STATUS, message),
            audit_record=_audit(booking, request, DenialCode.INVALID_STATUS),
            booking_mutated=False,
        )

    # 4) accordé
    return CheckinDecision(
        outcome=Authorized(),
        audit_record=_audit(booking, request, None),
        booking_mutated=True,
    )
