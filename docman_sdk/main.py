# docman_sdk/main.py
import logging
import os

from docman_sdk.app_setup import create_app
from docman_sdk.config import get_settings
from docman_sdk.logging_config import setup_sdk_logging

settings = get_settings()
setup_sdk_logging(settings.LOGGING_LEVEL)
logger = logging.getLogger("docman_sdk.main")

app = create_app(settings)

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info("Starting Uvicorn for %s on %s:%s...", settings.PROJECT_NAME, host, port)
    uvicorn.run("docman_sdk.main:app", host=host, port=port, log_level=settings.LOGGING_LEVEL.lower())
