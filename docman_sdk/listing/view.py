# docman_sdk/listing/view.py
import logging
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple, Union

from docman_sdk.clients.base import RemoteServiceClient
from docman_sdk.config import DEFAULT_ALLOWED_PAGE_SIZES, ListingSettings
from docman_sdk.data_access.fetcher import FetchOutcome, FetchStatus, ListFetcher
from docman_sdk.data_access.reconciler import normalize_response
from docman_sdk.exceptions import ServiceCommunicationError
from docman_sdk.filters.base import CriteriaStore
from docman_sdk.filters.query import QueryParams, build_query
from docman_sdk.notifications import InMemoryNotificationSink, NotificationLevel, NotificationSink
from docman_sdk.registry import FilterOption, FilterSpec, ResourceConfig, ResourceRegistry
from docman_sdk.schemas.criteria import DateRange, FilterCriteria, SortDirection
from docman_sdk.schemas.pagination import ListResponse

from .pagination import PageMarker, PaginationController

logger = logging.getLogger("docman_sdk.listing.view")


class ListView:
    """
    Координатор одного списка: CriteriaStore + PaginationController + ListFetcher.

    Изменение критериев синхронно сбрасывает страницу на 1, затем выполняется запрос.
    Смена страницы или размера страницы в DELEGATED режиме перезапрашивает данные,
    в LOCAL режиме только перерезает уже загруженный набор.
    Если актуальный запрос завершился ошибкой, состояние страниц возвращается к
    последнему отображенному результату. Если ошибкой завершился запрос с новыми
    критериями, страница остается первой, а следующее действие пагинации повторяет
    запрос первой страницы под эти критерии.
    """

    def __init__(
        self,
        resource: ResourceConfig,
        client: RemoteServiceClient,
        notification_sink: Optional[NotificationSink] = None,
        page_size: int = 10,
        allowed_page_sizes: Optional[List[int]] = None,
    ):
        self.resource = resource
        self.client = client
        self.notifications = notification_sink if notification_sink is not None else InMemoryNotificationSink()
        self.criteria_store = CriteriaStore(resource.filter_keys)
        self.pagination = PaginationController(
            resource.pagination_mode,
            page_size=page_size,
            allowed_page_sizes=allowed_page_sizes or DEFAULT_ALLOWED_PAGE_SIZES,
        )
        self.fetcher = ListFetcher(client, resource, self.notifications)
        self.filter_options: Dict[str, List[FilterOption]] = {f.key: list(f.options) for f in resource.filters}
        self._loaded_option_keys: Set[str] = set()
        # Номер последнего запроса, выданного до изменения критериев, пока их результат не применен
        self._criteria_changed_after: Optional[int] = None
        self._displayed_state = self.pagination.snapshot()
        self.criteria_store.subscribe(self._on_criteria_changed)

    @classmethod
    def for_resource(
        cls,
        kind: str,
        client: RemoteServiceClient,
        settings: Optional[ListingSettings] = None,
        notification_sink: Optional[NotificationSink] = None,
    ) -> "ListView":
        resource = ResourceRegistry.get_resource(kind)
        kwargs: Dict[str, Any] = {}
        if settings is not None:
            kwargs = {"page_size": settings.DEFAULT_PAGE_SIZE, "allowed_page_sizes": settings.ALLOWED_PAGE_SIZES}
        return cls(resource, client, notification_sink=notification_sink, **kwargs)

    def _on_criteria_changed(self, _criteria: FilterCriteria) -> None:
        self.pagination.reset()
        if self._criteria_changed_after is None:
            self._criteria_changed_after = self.fetcher.latest_sequence

    # --- Состояние для отображения ---

    @property
    def criteria(self) -> FilterCriteria:
        return self.criteria_store.criteria

    @property
    def response(self) -> Optional[ListResponse]:
        return self.fetcher.current

    @property
    def loaded(self) -> bool:
        return self.fetcher.current is not None

    @property
    def is_loading(self) -> bool:
        return self.fetcher.is_loading

    @property
    def criteria_pending(self) -> bool:
        return self._criteria_changed_after is not None

    @property
    def has_active_filters(self) -> bool:
        return self.criteria_store.has_active_filters

    @property
    def items(self) -> List[Any]:
        if self.response is None:
            return []
        return self.pagination.visible(self.response.items)

    @property
    def page_numbers(self) -> List[PageMarker]:
        return self.pagination.page_window()

    @property
    def display_range(self) -> Tuple[int, int, int]:
        return self.pagination.display_range()

    def build_query(self) -> QueryParams:
        return build_query(self.criteria, self.pagination.page_request(), self.resource.filter_keys)

    # --- Загрузка ---

    async def refresh(self) -> FetchOutcome:
        outcome = await self.fetcher.fetch(self.build_query())
        if outcome.applied and outcome.response is not None:
            self.pagination.apply_result(outcome.response.pagination, len(outcome.response.items))
            self._displayed_state = self.pagination.snapshot()
            if self._criteria_changed_after is not None and outcome.sequence > self._criteria_changed_after:
                self._criteria_changed_after = None
        elif outcome.status == FetchStatus.FAILED and outcome.sequence == self.fetcher.latest_sequence:
            if self.criteria_pending:
                # Номер страницы старого результата к новым критериям не относится
                self.pagination.restore(replace(self._displayed_state, current_page=1))
            else:
                self.pagination.restore(self._displayed_state)
        return outcome

    async def load(self) -> FetchOutcome:
        await self.load_filter_options()
        return await self.refresh()

    @property
    def options_loaded(self) -> bool:
        return all(spec.key in self._loaded_option_keys for spec in self.resource.filters if spec.options_endpoint)

    async def load_filter_options(self) -> None:
        """Загружает опции фильтров; неудачно загруженные запрашиваются повторно при следующем вызове."""
        for spec in self.resource.filters:
            if not spec.options_endpoint or spec.key in self._loaded_option_keys:
                continue
            options = await self._fetch_options(spec)
            if options is not None:
                self.filter_options[spec.key] = options
                self._loaded_option_keys.add(spec.key)

    async def _fetch_options(self, spec: FilterSpec) -> Optional[List[FilterOption]]:
        endpoint = spec.options_endpoint or ""
        params = list(spec.options_params)
        try:
            payload = await self.client.list_records(endpoint, params)
        except ServiceCommunicationError as e:
            logger.error(f"Failed to load options for filter '{spec.key}' from '{endpoint}' {params}: {e}")
            self.notifications.notify(f"Failed to load {spec.label.lower()} options", NotificationLevel.ERROR)
            return None
        options: List[FilterOption] = []
        for item in normalize_response(payload, spec.options_item_fields).items:
            if not isinstance(item, Mapping) or item.get(spec.value_field) in (None, ""):
                continue
            label = " ".join(str(item.get(name) or "") for name in spec.label_fields).strip()
            value = str(item[spec.value_field])
            options.append(FilterOption(value=value, label=label or value))
        return options

    # --- Критерии ---

    async def set_search(self, text: str) -> FetchOutcome:
        self.criteria_store.set_search(text)
        return await self.refresh()

    async def set_field_filter(self, key: str, value: Optional[str]) -> FetchOutcome:
        self.criteria_store.set_field_filter(key, value)
        return await self.refresh()

    async def set_date_range(self, date_range: Optional[DateRange]) -> FetchOutcome:
        self.criteria_store.set_date_range(date_range)
        return await self.refresh()

    async def set_sort(self, key: str, direction: Union[SortDirection, str] = SortDirection.ASC) -> FetchOutcome:
        self.criteria_store.set_sort(key, direction)
        return await self.refresh()

    async def toggle_sort(self, key: str) -> FetchOutcome:
        self.criteria_store.toggle_sort(key)
        return await self.refresh()

    async def clear_all(self) -> FetchOutcome:
        self.criteria_store.clear_all()
        return await self.refresh()

    async def apply_criteria(
        self,
        search: Optional[str] = None,
        field_filters: Optional[Mapping[str, str]] = None,
        date_range: Optional[DateRange] = None,
    ) -> FetchOutcome:
        """Применяет несколько изменений формы фильтров разом и делает один запрос."""
        if search is not None:
            self.criteria_store.set_search(search)
        for key, value in (field_filters or {}).items():
            self.criteria_store.set_field_filter(key, value)
        if date_range is not None:
            self.criteria_store.set_date_range(date_range)
        return await self.refresh()

    # --- Пагинация ---

    async def _after_page_change(self, changed: bool) -> Optional[FetchOutcome]:
        if self.criteria_pending:
            # Результат под текущие критерии еще не получен: сначала первая страница
            self.pagination.reset()
            return await self.refresh()
        if not changed:
            return None
        if self.pagination.is_delegated:
            return await self.refresh()
        self._displayed_state = self.pagination.snapshot()
        return None

    async def go_to_page(self, page: int) -> Optional[FetchOutcome]:
        return await self._after_page_change(self.pagination.go_to_page(page))

    async def go_to_next(self) -> Optional[FetchOutcome]:
        return await self._after_page_change(self.pagination.go_to_next())

    async def go_to_previous(self) -> Optional[FetchOutcome]:
        return await self._after_page_change(self.pagination.go_to_previous())

    async def set_page_size(self, page_size: int) -> Optional[FetchOutcome]:
        return await self._after_page_change(self.pagination.set_page_size(page_size))
