# agrichain/services/notification_service.py
from agrichain.celery_worker import celery_app
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_notification(session_id: str, order_id: str, total: str):
        send_order_notification_task.delay(session_id, order_id, total)

    @staticmethod
    def send_claim_notification(farmer_id: str, claim_id: int):
        send_claim_notification_task.delay(farmer_id, claim_id)


@celery_app.task(name="agrichain.services.notification_service.send_order_notification_task")
def send_order_notification_task(session_id: str, order_id: str, total: str):
    """
    Potwierdzenie zamowienia, w demo tylko logujemy.
    """
    logger.info(f"[NOTIFICATION] Session {session_id}: order {order_id} confirmed, total {total}")
    return {"session_id": session_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="agrichain.services.notification_service.send_claim_notification_task")
def send_claim_notification_task(farmer_id: str, claim_id: int):
    logger.info(f"[NOTIFICATION] Farmer {farmer_id}: claim {claim_id} received and pending review")
    return {"farmer_id": farmer_id, "claim_id": claim_id, "status": "sent"}
