# ============================================================
# status.py — Statuts, méthodes et rôles du check-in
# ------------------------------------------------------------
# Regroupe les valeurs fermées utilisées par la décision de
# check-in :
#   - BookingStatus : statut canonique d'une réservation
#   - CheckinMethod : canal du check-in (QR code ou manuel)
#   - AdminRole / ADMIN_ROLES : rôles qui passent outre le contrôle
#     professeur/élève (les autres rôles restent de simples chaînes)
#   - DenialCode / AuditStatus : codes écrits dans l'audit
# ============================================================
from enum import Enum
from typing import Any, Union


class BookingStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    PAID = "PAID"
    DONE = "DONE"
    CANCELED = "CANCELED"
    COMPLETED = "COMPLETED"


class CheckinMethod(str, Enum):
    QRCODE = "QRCODE"
    MANUAL = "MANUAL"


class AdminRole(str, Enum):
    FRANQUIA = "FRANQUIA"
    FRANQUEADORA = "FRANQUEADORA"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class DenialCode(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    ALREADY_COMPLETED = "ALREADY_COMPLETED"
    INVALID_STATUS = "INVALID_STATUS"


class AuditStatus(str, Enum):
    GRANTED = "GRANTED"
    DENIED = "DENIED"


# Ces rôles passent outre la vérification professeur/élève
ADMIN_ROLES = frozenset(AdminRole)

# DONE et COMPLETED valent tous deux « check-in déjà fait »
CHECKED_IN_STATUSES = frozenset({BookingStatus.DONE, BookingStatus.COMPLETED})


def enum_value(value: Union[Enum, str, None]) -> Any:
    # str(Enum) varie selon la version de Python, on passe par .value
    return value.value if isinstance(value, Enum) else value


def is_admin_role(role: Union[AdminRole, str, None]) -> bool:
    return enum_value(role) in {r.value for r in ADMIN_ROLES}


# ------------------------------------------------------------
# Compatibilité avec l'ancien champ `status`
# ------------------------------------------------------------
# Les anciennes réservations n'ont parfois que `status` à jour.
# À supprimer une fois les données migrées vers status_canonical.
# ------------------------------------------------------------
def is_legacy_completed(legacy_status: Union[str, None]) -> bool:
    return legacy_status == BookingStatus.COMPLETED.value
