# docman_sdk/schemas/pagination.py
import math
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    model_validator,
)

# TypeVar для типа записей в списке items
DataType = TypeVar("DataType")


class PaginationMode(str, Enum):
    LOCAL = "local"  # весь отфильтрованный набор уже загружен, страницы режутся на клиенте
    DELEGATED = "delegated"  # сервис получает page/limit и возвращает одну страницу


class PageRequest(BaseModel):
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)

    model_config = ConfigDict(frozen=True)


class PageResult(BaseModel):
    """
    Метаданные страницы, возвращенные сервисом.
    Сервис присылает {total, page, limit, pages}; pages всегда пересчитывается из total и limit.
    """

    total: int = Field(..., ge=0)
    page: int = Field(1, ge=1)
    page_size: int = Field(
        ..., ge=1, validation_alias=AliasChoices("page_size", "limit", "pageSize")
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def clamp_page(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        size = data.get("page_size", data.get("limit", data.get("pageSize")))
        try:
            total, size, page = int(data.get("total")), int(size), int(data.get("page", 1))
        except (TypeError, ValueError):
            # Некорректные значения отдаем на обычную валидацию полей
            return data
        if total >= 0 and size >= 1:
            page_count = math.ceil(total / size)
            data["page"] = min(max(page, 1), max(page_count, 1))
        return data

    @computed_field
    @property
    def page_count(self) -> int:
        return math.ceil(self.total / self.page_size)


class ListResponse(BaseModel, Generic[DataType]):
    """
    Канонический ответ списка: записи и (необязательно) метаданные пагинации.
    """

    items: List[DataType] = Field(default_factory=list)
    pagination: Optional[PageResult] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
