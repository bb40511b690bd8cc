# ============================================================
# publisher.py — Émission d'événements RabbitMQ
# ------------------------------------------------------------
# Ce module gère la publication des événements du service
# Booking. Après un check-in accordé, on publie
# "BookingCheckedIn" pour informer les autres services.
# ============================================================
import os, json, logging
import pika
from pika.exceptions import AMQPError

RABBIT_HOST = os.getenv("RABBITMQ_HOST", "localhost")
EXCHANGE = "events"

logger = logging.getLogger(__name__)

# Cette méthode publie un message sur l'échange "events" en mode fanout :
#
#   - event_type : nom de l'événement
#   - payload    : contenu du message
#
# Tous les consommateurs liés à l'échange reçoivent le message.

def publish_event(event_type: str, payload: dict):
    conn = pika.BlockingConnection(pika.ConnectionParameters(host=RABBIT_HOST))
    try:
        ch = conn.channel()
        # durable=True pour survivre aux redémarrages RabbitMQ
        ch.exchange_declare(exchange=EXCHANGE, exchange_type="fanout", durable=True)
        message = {"type": event_type, "payload": payload}
        ch.basic_publish(exchange=EXCHANGE, routing_key="", body=json.dumps(message))
        logger.info("[event] %s %s", event_type, payload)
    finally:
        conn.close()


# Variante utilisée après un commit : une panne du broker ne doit
# pas faire échouer une opération déjà enregistrée en base.
def publish_event_safely(event_type: str, payload: dict) -> bool:
    try:
        publish_event(event_type, payload)
        return True
    except AMQPError as e:
        logger.warning("[event] %s not published: %s", event_type, e)
        return False
