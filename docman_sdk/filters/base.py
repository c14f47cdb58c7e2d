# docman_sdk/filters/base.py
import logging
from typing import Callable, Iterable, List, Optional, Union

from docman_sdk.schemas.criteria import (
    DEFAULT_SORT_KEY,
    DateRange,
    FilterCriteria,
    SortDirection,
    SortSpec,
)

logger = logging.getLogger("docman_sdk.filters.base")

CriteriaListener = Callable[[FilterCriteria], None]


class CriteriaStore:
    """
    Хранит текущие критерии списка (поиск, фильтры по полям, диапазон дат, сортировку).

    Каждый мутатор заменяет снимок целиком и возвращает новый FilterCriteria.
    Входные значения не валидируются: это забота представляющего UI.
    После каждой мутации вызываются подписчики (ListView сбрасывает по ним страницу на 1).
    """

    def __init__(
        self,
        filter_keys: Iterable[str] = (),
        initial: Optional[FilterCriteria] = None,
    ):
        self.filter_keys: List[str] = list(filter_keys)
        self._criteria = initial or self._default_criteria()
        self._listeners: List[CriteriaListener] = []

    def _default_criteria(self) -> FilterCriteria:
        return FilterCriteria(
            search="",
            field_filters={key: "" for key in self.filter_keys},
            date_range=DateRange(),
            sort=SortSpec(key=DEFAULT_SORT_KEY, direction=SortDirection.DESC),
        )

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def has_active_filters(self) -> bool:
        return self._criteria.has_active_filters

    def subscribe(self, listener: CriteriaListener) -> None:
        self._listeners.append(listener)

    def _replace(self, **changes) -> FilterCriteria:
        self._criteria = self._criteria.model_copy(update=changes)
        logger.debug(f"Criteria updated: {changes}")
        for listener in self._listeners:
            listener(self._criteria)
        return self._criteria

    def set_search(self, text: str) -> FilterCriteria:
        return self._replace(search=text or "")

    def set_field_filter(self, key: str, value: Optional[str]) -> FilterCriteria:
        field_filters = dict(self._criteria.field_filters)
        field_filters[key] = value or ""
        return self._replace(field_filters=field_filters)

    def set_date_range(self, date_range: Optional[DateRange]) -> FilterCriteria:
        return self._replace(date_range=date_range or DateRange())

    def set_sort(self, key: str, direction: Union[SortDirection, str] = SortDirection.ASC) -> FilterCriteria:
        return self._replace(sort=SortSpec(key=key or "", direction=SortDirection(direction)))

    def toggle_sort(self, key: str) -> FilterCriteria:
        # Повторный клик по активной колонке меняет направление, новая колонка начинает с asc
        current = self._criteria.sort
        if current.key == key:
            return self.set_sort(key, current.direction.toggled())
        return self.set_sort(key, SortDirection.ASC)

    def clear_all(self) -> FilterCriteria:
        self._criteria = self._default_criteria()
        logger.debug("Criteria cleared to defaults.")
        for listener in self._listeners:
            listener(self._criteria)
        return self._criteria
