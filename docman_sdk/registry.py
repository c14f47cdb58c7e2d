# docman_sdk/registry.py
import logging
from typing import Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from docman_sdk.exceptions import ConfigurationError
from docman_sdk.schemas.pagination import PaginationMode
from docman_sdk.schemas.records import (
    BookRecord,
    CategoryRecord,
    DocumentRecord,
    ProjectRecord,
    RecordSchema,
)

logger = logging.getLogger("docman_sdk.registry")

# Поля конверта, под которыми разные эндпоинты присылают список записей
DEFAULT_ITEM_FIELDS: Tuple[str, ...] = ("items", "data")


class FilterOption(BaseModel):
    value: str
    label: str

    model_config = ConfigDict(frozen=True)


class FilterSpec(BaseModel):
    """
    Описание одного фильтра-выпадающего списка.
    Опции задаются статически либо загружаются из options_endpoint с параметрами
    options_params; список записей ищется в полях options_item_fields ответа
    (value_field -> value, label_fields склеиваются через пробел -> label).
    """

    key: str
    label: str
    placeholder: str = ""
    options: List[FilterOption] = Field(default_factory=list)
    options_endpoint: Optional[str] = None
    options_params: Tuple[Tuple[str, str], ...] = ()
    options_item_fields: Tuple[str, ...] = DEFAULT_ITEM_FIELDS
    value_field: str = "_id"
    label_fields: Tuple[str, ...] = ("name",)

    model_config = ConfigDict(frozen=True)


class ResourceConfig(BaseModel):
    kind: str
    endpoint: str
    label: str
    pagination_mode: PaginationMode
    filters: List[FilterSpec] = Field(default_factory=list)
    supports_date_range: bool = False
    item_fields: Tuple[str, ...] = DEFAULT_ITEM_FIELDS
    record_cls: Optional[Type[RecordSchema]] = None
    sortable_fields: Tuple[str, ...] = ("createdAt",)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def filter_keys(self) -> Tuple[str, ...]:
        return tuple(f.key for f in self.filters)

    def get_filter(self, key: str) -> Optional[FilterSpec]:
        return next((f for f in self.filters if f.key == key), None)

    @property
    def error_message(self) -> str:
        return f"Failed to load {self.label.lower()}"


class ResourceRegistry:
    _registry: Dict[str, ResourceConfig] = {}
    _is_configured: bool = False

    @classmethod
    def register(cls, config: ResourceConfig) -> None:
        kind = config.kind.lower()
        if kind in cls._registry:
            logger.warning(
                f"Resource kind '{config.kind}' is already registered. Overwriting previous configuration."
            )
        cls._registry[kind] = config
        cls._is_configured = True
        logger.info(
            f"Registry: Registered '{kind}' (Endpoint: {config.endpoint}, Mode: {config.pagination_mode.value}, "
            f"Filters: {list(config.filter_keys)}, Date range: {config.supports_date_range})"
        )

    @classmethod
    def get_resource(cls, kind: str, raise_error: bool = True) -> Optional[ResourceConfig]:
        if not cls._is_configured:
            if raise_error:
                raise ConfigurationError("ResourceRegistry has not been configured. Call register_default_resources() first.")
            return None
        config = cls._registry.get(kind.lower())
        if config is None and raise_error:
            raise ConfigurationError(
                f"Resource kind '{kind}' not found in registry. Available kinds: {list(cls._registry.keys())}"
            )
        return config

    @classmethod
    def kinds(cls) -> List[str]:
        return list(cls._registry.keys())

    @classmethod
    def clear(cls) -> None:
        logger.info("Clearing ResourceRegistry.")
        cls._registry = {}
        cls._is_configured = False

    @classmethod
    def is_configured(cls) -> bool:
        return cls._is_configured


OVERDUE_OPTIONS = [
    FilterOption(value="true", label="Overdue Only"),
    FilterOption(value="false", label="Not Overdue"),
]
PROJECT_STATUS_OPTIONS = [
    FilterOption(value="active", label="Active"),
    FilterOption(value="completed", label="Completed"),
    FilterOption(value="on-hold", label="On Hold"),
    FilterOption(value="archived", label="Archived"),
]
PROJECT_PRIORITY_OPTIONS = [
    FilterOption(value="critical", label="Critical"),
    FilterOption(value="high", label="High"),
    FilterOption(value="medium", label="Medium"),
    FilterOption(value="low", label="Low"),
]


def category_filter(category_type: str) -> FilterSpec:
    """Фильтр по категории; справочник категорий общий, тип задает раздел (Document, Book)."""
    return FilterSpec(
        key="category",
        label="Category",
        placeholder="All Categories",
        options_endpoint="categories",
        options_params=(("type", category_type),),
        options_item_fields=("categories", "items", "data"),
    )


def user_filter(key: str, label: str, placeholder: str) -> FilterSpec:
    return FilterSpec(
        key=key,
        label=label,
        placeholder=placeholder,
        options_endpoint="users",
        options_item_fields=("users", "items", "data"),
        label_fields=("firstname", "lastname"),
    )


def register_default_resources() -> None:
    """Регистрирует стандартные списки приложения: документы, проекты, книги, категории."""
    ResourceRegistry.register(
        ResourceConfig(
            kind="documents",
            endpoint="docs",
            label="Documents",
            pagination_mode=PaginationMode.DELEGATED,
            filters=[
                category_filter("Document"),
                user_filter("author", "Author", "All Authors"),
                FilterSpec(
                    key="overdue", label="Review Status", placeholder="All Documents", options=OVERDUE_OPTIONS
                ),
            ],
            supports_date_range=True,
            item_fields=("documents", "docs", "items", "data"),
            record_cls=DocumentRecord,
            sortable_fields=("title", "author", "category", "reviewDate", "createdAt"),
        )
    )
    ResourceRegistry.register(
        ResourceConfig(
            kind="projects",
            endpoint="projects/my-projects",
            label="Projects",
            pagination_mode=PaginationMode.LOCAL,
            filters=[
                FilterSpec(key="status", label="Status", placeholder="All Statuses", options=PROJECT_STATUS_OPTIONS),
                FilterSpec(
                    key="priority", label="Priority", placeholder="All Priorities", options=PROJECT_PRIORITY_OPTIONS
                ),
            ],
            item_fields=("projects", "items", "data"),
            record_cls=ProjectRecord,
            sortable_fields=("name", "status", "priority", "createdAt"),
        )
    )
    ResourceRegistry.register(
        ResourceConfig(
            kind="books",
            endpoint="books",
            label="Books",
            pagination_mode=PaginationMode.DELEGATED,
            filters=[
                category_filter("Book"),
                user_filter("owner", "Owner", "All Owners"),
            ],
            supports_date_range=True,
            item_fields=("books", "items", "data"),
            record_cls=BookRecord,
            sortable_fields=("title", "category", "owner", "createdAt"),
        )
    )
    ResourceRegistry.register(
        ResourceConfig(
            kind="categories",
            endpoint="categories",
            label="Categories",
            pagination_mode=PaginationMode.LOCAL,
            item_fields=("categories", "items", "data"),
            record_cls=CategoryRecord,
            sortable_fields=("name", "createdAt"),
        )
    )
