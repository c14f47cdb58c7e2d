# docman_sdk/frontend/renderer.py
import json
import logging
from typing import Any, List

from fastapi import Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from docman_sdk.listing.pagination import ELLIPSIS
from docman_sdk.listing.view import ListView
from docman_sdk.notifications import InMemoryNotificationSink, Notification
from docman_sdk.registry import FilterOption

from .config import LIST_VIEW_TEMPLATE, TOAST_EVENT_NAME
from .exceptions import RenderingError
from .templating import get_templates

logger = logging.getLogger("docman_sdk.frontend.renderer")


class FilterRenderContext(BaseModel):
    key: str
    label: str
    placeholder: str
    options: List[FilterOption] = Field(default_factory=list)
    selected: str = ""


class ListRenderContext(BaseModel):
    resource_kind: str
    title: str
    view_id: str
    base_url: str
    items: List[Any] = Field(default_factory=list)
    columns: List[str] = Field(default_factory=list)
    search: str = ""
    filters: List[FilterRenderContext] = Field(default_factory=list)
    supports_date_range: bool = False
    start_date: str = ""
    end_date: str = ""
    sort_key: str = ""
    sort_direction: str = ""
    has_active_filters: bool = False
    is_loading: bool = False
    current_page: int = 1
    total_pages: int = 0
    page_size: int = 10
    allowed_page_sizes: List[int] = Field(default_factory=list)
    page_numbers: List[Any] = Field(default_factory=list)
    display_start: int = 0
    display_end: int = 0
    display_total: int = 0
    ellipsis: str = ELLIPSIS
    notifications: List[Notification] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)


class ListViewRenderer:
    def __init__(self, request: Request, view: ListView, view_id: str, base_url: str):
        self.request = request
        self.view = view
        self.view_id = view_id
        self.base_url = base_url.rstrip("/")

    def _drain_notifications(self) -> List[Notification]:
        sink = self.view.notifications
        if isinstance(sink, InMemoryNotificationSink):
            return sink.drain()
        return []

    def build_context(self) -> ListRenderContext:
        view = self.view
        criteria = view.criteria
        resource = view.resource
        first, last, total = view.display_range
        return ListRenderContext(
            resource_kind=resource.kind,
            title=resource.label,
            view_id=self.view_id,
            base_url=self.base_url,
            items=view.items,
            columns=list(resource.sortable_fields),
            search=criteria.search,
            filters=[
                FilterRenderContext(
                    key=spec.key,
                    label=spec.label,
                    placeholder=spec.placeholder,
                    options=view.filter_options.get(spec.key, []),
                    selected=criteria.field_filters.get(spec.key, ""),
                )
                for spec in resource.filters
            ],
            supports_date_range=resource.supports_date_range,
            start_date=criteria.date_range.start.isoformat() if criteria.date_range.start else "",
            end_date=criteria.date_range.end.isoformat() if criteria.date_range.end else "",
            sort_key=criteria.sort.key,
            sort_direction=criteria.sort.direction.value,
            has_active_filters=view.has_active_filters,
            is_loading=view.is_loading,
            current_page=view.pagination.current_page,
            total_pages=view.pagination.total_pages,
            page_size=view.pagination.page_size,
            allowed_page_sizes=list(view.pagination.allowed_page_sizes),
            page_numbers=view.page_numbers,
            display_start=first,
            display_end=last,
            display_total=total,
            notifications=self._drain_notifications(),
        )

    def render_to_response(self, status_code: int = 200) -> HTMLResponse:
        context = self.build_context()
        try:
            response = get_templates().TemplateResponse(
                self.request,
                LIST_VIEW_TEMPLATE,
                {"ctx": context},
                status_code=status_code,
            )
        except Exception as e:
            logger.exception(f"Failed to render list view '{self.view_id}' for '{context.resource_kind}'.")
            raise RenderingError(f"Failed to render list view: {e}") from e

        if context.notifications:
            response.headers["HX-Trigger"] = json.dumps(
                {TOAST_EVENT_NAME: [{"level": n.level.value, "message": n.message} for n in context.notifications]}
            )
        return response
