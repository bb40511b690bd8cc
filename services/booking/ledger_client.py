# ============================================================
# ledger_client.py — Appels HTTP vers le service Ledger
# ------------------------------------------------------------
# Après un check-in accordé, le service Booking demande au
# Ledger de débloquer les heures du professeur (durée du cours).
# Le Ledger est idempotent par bookingId : rejouer l'appel ne
# crédite pas deux fois.
# ============================================================
import os, logging
from typing import Optional

import httpx

from .models import Booking
from .status import CheckinMethod

LEDGER_URL = os.getenv("LEDGER_URL", "http://ledger:8002")
LEDGER_TIMEOUT = float(os.getenv("LEDGER_TIMEOUT", "5"))

logger = logging.getLogger(__name__)


def consume_credit(booking: Booking, method: CheckinMethod) -> dict:
    r = httpx.post(
        f"{LEDGER_URL}/v1/ledger/consume",
        json={
            "bookingId": booking.id,
            "professorId": booking.teacher_id,
            "franqueadoraId": booking.franchise_id,
            "studentId": booking.student_id,
            "hours": (booking.duration or 60) / 60,
            "method": CheckinMethod(method).value,
        },
        timeout=LEDGER_TIMEOUT,
    )
    r.raise_for_status()
    data = r.json()
    return {"hoursCredited": data["hoursCredited"], "newBalance": data["newBalance"]}


# Le check-in est déjà enregistré quand on arrive ici : une panne
# du Ledger, ou une réponse illisible (ValueError couvre le JSON
# invalide), est journalisée, pas propagée.
def consume_credit_safely(booking: Booking, method: CheckinMethod) -> Optional[dict]:
    try:
        return consume_credit(booking, method)
    except (httpx.HTTPError, ValueError, KeyError) as e:
        logger.error("[ledger] consume failed for booking %s: %s", booking.id, e)
        return None
