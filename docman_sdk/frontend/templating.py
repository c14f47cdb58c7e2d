# docman_sdk/frontend/templating.py
import logging
import os
from datetime import date, datetime
from typing import Any, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from starlette.templating import Jinja2Templates

SDK_TEMPLATES_DIR = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "templates"
)

logger = logging.getLogger("docman_sdk.frontend.templating")

# Инициализируется один раз при создании приложения
templates: Optional[Jinja2Templates] = None


def cell_value(item: Any, field_name: str) -> str:
    """Значение поля записи для ячейки таблицы (pydantic-схема или dict)."""
    if isinstance(item, dict):
        value = item.get(field_name)
    else:
        value = getattr(item, field_name, None)
        if value is None and field_name == "createdAt":
            value = getattr(item, "created_at", None)
        if value is None and field_name == "reviewDate":
            value = getattr(item, "review_date", None)
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return str(value.get("name") or value.get("title") or value.get("_id") or "")
    return str(value)


def setup_jinja_env(template_dirs: List[str]) -> Environment:
    """
    Создает окружение Jinja2 с поддержкой нескольких директорий для переопределения.
    Директории в начале списка имеют приоритет.
    """
    if not template_dirs:
        raise ValueError("At least one template directory must be provided.")

    logger.debug(f"Setting up Jinja2 environment with loaders for: {template_dirs}")
    env = Environment(
        loader=FileSystemLoader(template_dirs),
        autoescape=select_autoescape(["html", "xml"]),
        enable_async=False,
    )
    env.filters["cell"] = cell_value
    logger.info(f"Jinja2 environment configured successfully with search path: {template_dirs}")
    return env


def initialize_templates(service_template_dir: Optional[str] = None) -> Jinja2Templates:
    """
    Инициализирует глобальный объект `templates`. Директория сервиса (если есть) имеет приоритет над SDK.
    """
    global templates
    if templates is not None:
        logger.debug("Templates already initialized. Skipping re-initialization.")
        return templates

    search_paths = [SDK_TEMPLATES_DIR]
    if service_template_dir:
        if os.path.isdir(service_template_dir):
            search_paths.insert(0, service_template_dir)
        else:
            logger.warning(
                f"Service template directory '{service_template_dir}' not found. Only SDK templates will be available."
            )

    try:
        templates = Jinja2Templates(env=setup_jinja_env(search_paths))
        logger.info("Global Jinja2Templates instance initialized.")
    except Exception as e:
        logger.critical("Failed to initialize Jinja2Templates.", exc_info=True)
        raise RuntimeError("Failed to initialize templates") from e
    return templates


def get_templates() -> Jinja2Templates:
    if templates is None:
        logger.error("Templates accessed before initialization!")
        raise RuntimeError(
            "Templates not initialized. Call initialize_templates() during app setup."
        )
    return templates
