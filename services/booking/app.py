# ============================================================
# app.py — Point d'entrée du service Booking
# ------------------------------------------------------------
# Ce module initialise l'application FastAPI du service Booking :
#   - Configure les logs (LOG_LEVEL)
#   - Crée les tables dans la base de données PostgreSQL
#   - Monte les routes API (réservations, check-in, journal)
# ============================================================
import logging, os

from fastapi import FastAPI
from sqlmodel import SQLModel

from . import models  # noqa: F401  (enregistre les tables)
from .api import router, engine

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title="Booking Service")


# Exécuté automatiquement par FastAPI au lancement du conteneur :
# crée les tables SQL (Booking + checkins).
@app.on_event("startup")
def start():
    SQLModel.metadata.create_all(engine)


app.include_router(router)
