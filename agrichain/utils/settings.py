# agrichain/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _ms_range(name: str, default: str) -> tuple[int, int]:
    low, high = os.getenv(name, default).split(",")
    return int(low), int(high)


STORE_URL = os.getenv("STORE_URL", "sqlite:///./agrichain.db")
STORE_QUOTA_BYTES = int(os.getenv("STORE_QUOTA_BYTES", 5 * 1024 * 1024))

SIMULATE_NETWORK = os.getenv("SIMULATE_NETWORK", "true").lower() in ("1", "true", "yes")
FAULT_RATE = float(os.getenv("FAULT_RATE", 0.01))

# min,max w milisekundach dla kazdej klasy operacji
LATENCY_MS = {
    "read": _ms_range("READ_LATENCY_MS", "100,300"),
    "write": _ms_range("WRITE_LATENCY_MS", "400,1200"),
    "aggregate": _ms_range("AGGREGATE_LATENCY_MS", "800,1400"),
    "trace": _ms_range("TRACE_LATENCY_MS", "600,1000"),
    "maintenance": _ms_range("MAINTENANCE_LATENCY_MS", "200,400"),
}

RECENT_ORDERS_LIMIT = int(os.getenv("RECENT_ORDERS_LIMIT", 5))
ORDER_DELIVERY_DAYS = int(os.getenv("ORDER_DELIVERY_DAYS", 2))

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
