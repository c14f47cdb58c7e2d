# docman_sdk/listing/pagination.py
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, TypeVar, Union

from docman_sdk.config import DEFAULT_ALLOWED_PAGE_SIZES
from docman_sdk.exceptions import ConfigurationError
from docman_sdk.schemas.pagination import PageRequest, PageResult, PaginationMode

logger = logging.getLogger("docman_sdk.listing.pagination")

ELLIPSIS = "..."
MAX_VISIBLE_PAGES = 5

PageMarker = Union[int, str]
T = TypeVar("T")


def build_page_window(
    current_page: int, total_pages: int, max_visible: int = MAX_VISIBLE_PAGES
) -> List[PageMarker]:
    """
    Номера страниц для кнопок пагинации.

    При total_pages <= max_visible показываются все страницы. Иначе окно current ± max_visible//2,
    первая и последняя страницы всегда видны, а на месте пропуска больше одной страницы стоит "...".
    12 страниц, текущая 6 -> [1, "...", 4, 5, 6, 7, 8, "...", 12].
    """
    if total_pages <= 0:
        return []
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    half = max_visible // 2
    start = max(1, current_page - half)
    end = min(total_pages, current_page + half)

    pages: List[PageMarker] = []
    if start > 1:
        pages.append(1)
        if start > 2:
            pages.append(ELLIPSIS)
    pages.extend(range(start, end + 1))
    if end < total_pages:
        if end < total_pages - 1:
            pages.append(ELLIPSIS)
        pages.append(total_pages)
    return pages


@dataclass(frozen=True)
class PaginationState:
    current_page: int
    page_size: int
    total_items: int
    server_paged: bool


class PaginationController:
    """
    Состояние пагинации одного списка.

    Режим выбирается один раз при создании:
    - LOCAL: весь отфильтрованный набор уже загружен, страница вырезается на клиенте;
    - DELEGATED: сервис получает page/limit и возвращает одну страницу и total.
    Если в DELEGATED ответ пришел без pagination, контроллер деградирует до локальной нарезки.
    """

    def __init__(
        self,
        mode: PaginationMode,
        page_size: int = 10,
        allowed_page_sizes: Sequence[int] = DEFAULT_ALLOWED_PAGE_SIZES,
    ):
        self.allowed_page_sizes: Tuple[int, ...] = tuple(sorted(allowed_page_sizes))
        if page_size not in self.allowed_page_sizes:
            raise ConfigurationError(
                f"Page size {page_size} is not one of the allowed sizes {list(self.allowed_page_sizes)}"
            )
        self.mode = mode
        self._page_size = page_size
        self._current_page = 1
        self._total_items = 0
        self._server_paged = False

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_items(self) -> int:
        return self._total_items

    @property
    def total_pages(self) -> int:
        return math.ceil(self._total_items / self._page_size)

    @property
    def is_delegated(self) -> bool:
        return self.mode == PaginationMode.DELEGATED

    @property
    def server_paged(self) -> bool:
        """True, если последние данные пришли от сервиса уже нарезанными на страницу."""
        return self._server_paged

    # --- Переходы ---

    def go_to_page(self, page: int) -> bool:
        if page < 1 or page > self.total_pages:
            logger.debug(f"Ignoring go_to_page({page}): outside [1, {self.total_pages}].")
            return False
        if page == self._current_page:
            return False
        self._current_page = page
        return True

    def go_to_next(self) -> bool:
        return self.go_to_page(self._current_page + 1)

    def go_to_previous(self) -> bool:
        return self.go_to_page(self._current_page - 1)

    def set_page_size(self, page_size: int) -> bool:
        if page_size not in self.allowed_page_sizes:
            logger.warning(
                f"Ignoring page size {page_size}: not one of {list(self.allowed_page_sizes)}."
            )
            return False
        self._page_size = page_size
        self._current_page = 1
        return True

    def reset(self) -> None:
        self._current_page = 1

    # --- Связь с запросом и ответом ---

    def page_request(self) -> Optional[PageRequest]:
        if not self.is_delegated:
            return None
        return PageRequest(page=self._current_page, page_size=self._page_size)

    def apply_result(self, pagination: Optional[PageResult], item_count: int) -> None:
        if self.is_delegated and pagination is not None:
            self._server_paged = True
            self._total_items = pagination.total
            self._current_page = pagination.page
            if pagination.page_size != self._page_size:
                logger.debug(
                    f"Service paged with limit {pagination.page_size}, view requested {self._page_size}."
                )
            return

        self._server_paged = False
        self._total_items = item_count
        if self._current_page > max(self.total_pages, 1):
            logger.debug(f"Page {self._current_page} exceeds {self.total_pages} page(s); clamping to page 1.")
            self._current_page = 1

    def visible(self, items: Sequence[T]) -> List[T]:
        if self._server_paged:
            return list(items[: self._page_size])
        start = (self._current_page - 1) * self._page_size
        return list(items[start : start + self._page_size])

    def display_range(self) -> Tuple[int, int, int]:
        """(первый, последний, всего) для строки "Showing X to Y of Z"."""
        total = self._total_items
        if total == 0:
            return 0, 0, 0
        first = (self._current_page - 1) * self._page_size + 1
        last = min(first + self._page_size - 1, total)
        return first, last, total

    def page_window(self) -> List[PageMarker]:
        return build_page_window(self._current_page, self.total_pages)

    # --- Снимки ---

    def snapshot(self) -> PaginationState:
        return PaginationState(
            current_page=self._current_page,
            page_size=self._page_size,
            total_items=self._total_items,
            server_paged=self._server_paged,
        )

    def restore(self, state: PaginationState) -> None:
        self._current_page = state.current_page
        self._page_size = state.page_size
        self._total_items = state.total_items
        self._server_paged = state.server_paged
