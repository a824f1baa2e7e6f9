# agrichain/utils/logging.py
import logging

from agrichain.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger("agrichain")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(LOG_LEVEL)

    if name == "agrichain" or name.startswith("agrichain."):
        return logging.getLogger(name)
    return logging.getLogger(f"agrichain.{name}")
