# docman_sdk/config.py
import os
import logging
from typing import Annotated, List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger("docman_sdk.config")

CONFIG_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(CONFIG_DIR, ".."))
ENV_FILE_PATH = os.path.join(PROJECT_ROOT, ".env")
ENV_TEST_FILE_PATH = os.path.join(PROJECT_ROOT, ".env.test")

_CURRENT_ENV = os.getenv("ENV", "prod").lower()
_EFFECTIVE_ENV_FILE = ENV_TEST_FILE_PATH if _CURRENT_ENV == "test" else ENV_FILE_PATH
load_dotenv(_EFFECTIVE_ENV_FILE)

DEFAULT_ALLOWED_PAGE_SIZES = [5, 10, 25, 50]


class ListingSettings(BaseSettings):
    PROJECT_NAME: str = "DocmanLists"
    ENV: str = Field(_CURRENT_ENV, description="Текущее окружение.")
    LOGGING_LEVEL: str = Field(
        "INFO",
        json_schema_extra={"examples": ["DEBUG", "INFO", "WARNING", "ERROR"]},
    )

    # Сервис списков записей
    API_BASE_URL: str = Field(
        "http://localhost:5001/api", description="Базовый URL сервиса записей."
    )
    API_TOKEN: Optional[str] = Field(
        None, description="Bearer токен для статического поставщика учетных данных."
    )

    # Пагинация
    DEFAULT_PAGE_SIZE: int = 10
    ALLOWED_PAGE_SIZES: Annotated[List[int], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_PAGE_SIZES)
    )

    # HTTP клиент
    HTTP_TIMEOUT: float = 10.0
    HTTP_CONNECT_TIMEOUT: float = 5.0
    HTTP_MAX_CONNECTIONS: int = 100
    HTTP_MAX_KEEPALIVE: int = 20

    UI_PREFIX: str = "/ui/lists"

    model_config = SettingsConfigDict(
        env_file=_EFFECTIVE_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("ALLOWED_PAGE_SIZES", mode="before")
    @classmethod
    def parse_page_sizes(cls, v: Union[str, List[int], None]) -> List[int]:
        if v is None or v == "":
            return list(DEFAULT_ALLOWED_PAGE_SIZES)
        if isinstance(v, str):
            return sorted({int(p.strip()) for p in v.split(",") if p.strip()})
        return sorted({int(p) for p in v})

    @model_validator(mode="after")
    def check_default_page_size(self) -> "ListingSettings":
        if self.DEFAULT_PAGE_SIZE not in self.ALLOWED_PAGE_SIZES:
            raise ValueError(
                f"DEFAULT_PAGE_SIZE={self.DEFAULT_PAGE_SIZE} is not one of ALLOWED_PAGE_SIZES={self.ALLOWED_PAGE_SIZES}"
            )
        return self


def get_settings() -> ListingSettings:
    try:
        settings = ListingSettings()
    except Exception as e:
        logger.critical(
            "Failed to load listing settings from '%s'.", _EFFECTIVE_ENV_FILE, exc_info=True
        )
        raise RuntimeError(f"Could not load listing settings: {e}") from e
    logger.debug("Settings loaded for %s (ENV='%s').", settings.PROJECT_NAME, settings.ENV)
    return settings
