# docman_sdk/schemas/criteria.py
from datetime import date
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SORT_KEY = "createdAt"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class DateRange(BaseModel):
    """
    Диапазон дат для фильтрации. Пустая граница (None) означает "не задано".
    Пустая строка из формы приводится к None.
    """

    start: Optional[date] = None
    end: Optional[date] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("start", "end", mode="before")
    @classmethod
    def empty_string_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def is_ordered(self) -> bool:
        if self.start is None or self.end is None:
            return True
        return self.start <= self.end


class SortSpec(BaseModel):
    key: str = DEFAULT_SORT_KEY
    direction: SortDirection = SortDirection.DESC

    model_config = ConfigDict(frozen=True)


class FilterCriteria(BaseModel):
    """
    Снимок текущих критериев списка: поиск, фильтры по полям, диапазон дат и сортировка.
    Экземпляры неизменяемы; каждое изменение в CriteriaStore порождает новый снимок.
    """

    search: str = ""
    field_filters: Dict[str, str] = Field(default_factory=dict)
    date_range: DateRange = Field(default_factory=DateRange)
    sort: SortSpec = Field(default_factory=SortSpec)

    model_config = ConfigDict(frozen=True)

    @property
    def has_active_filters(self) -> bool:
        # Сортировка не считается активным фильтром
        if self.search:
            return True
        if not self.date_range.is_empty:
            return True
        return any(self.field_filters.values())
