# agrichain/main.py
import uvicorn

from agrichain.api import create_app
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)

app = create_app()

if __name__ == "__main__":
    logger.info("Starting AgriChain data service")
    uvicorn.run(app, host="0.0.0.0", port=8000)
