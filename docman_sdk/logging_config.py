# docman_sdk/logging_config.py
import logging
import sys
from typing import Union

# Имя базового логгера для всего SDK
SDK_LOGGER_NAME = "docman_sdk"


def setup_sdk_logging(
    level: Union[int, str] = logging.INFO,
    log_format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
):
    """Настраивает базовый логгер SDK."""
    logger = logging.getLogger(SDK_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    # Повторный вызов не должен дублировать обработчики
    if logger.hasHandlers() and logger.handlers:
        logger.debug(f"Logger '{SDK_LOGGER_NAME}' already has handlers. Skipping setup.")
        return logger

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(handler)

    logger.debug(
        f"SDK Logging setup complete for '{SDK_LOGGER_NAME}' at level {logging.getLevelName(level)}"
    )
    return logger


def get_sdk_logger(name: str = SDK_LOGGER_NAME) -> logging.Logger:
    """Возвращает экземпляр логгера SDK (или его дочерний)."""
    if name != SDK_LOGGER_NAME and not name.startswith(f"{SDK_LOGGER_NAME}."):
        name = f"{SDK_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
