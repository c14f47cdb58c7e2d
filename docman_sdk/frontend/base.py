# docman_sdk/frontend/base.py
import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Path as FastAPIPath, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from docman_sdk.listing.view import ListView
from docman_sdk.schemas.criteria import DateRange

from .dependencies import get_list_view
from .renderer import ListViewRenderer

logger = logging.getLogger("docman_sdk.frontend.router")
router = APIRouter(tags=["List views"])


def _render(request: Request, view: ListView, resource_kind: str, view_id: str) -> HTMLResponse:
    base_url = request.url_for("get_list_view", resource_kind=resource_kind, view_id=view_id).path
    return ListViewRenderer(request, view, view_id, base_url).render_to_response()


def _form_str(form, name: str) -> str:
    value = form.get(name)
    return value.strip() if isinstance(value, str) else ""


@router.get("/{resource_kind}/{view_id}", response_class=HTMLResponse, name="get_list_view")
async def get_list_view_content(
    request: Request,
    resource_kind: str = FastAPIPath(...),
    view_id: str = FastAPIPath(...),
    view: ListView = Depends(get_list_view),
):
    if not view.loaded:
        await view.load()
    elif not view.options_loaded:
        await view.load_filter_options()
    return _render(request, view, resource_kind, view_id)


@router.post("/{resource_kind}/{view_id}/criteria", response_class=HTMLResponse, name="apply_list_criteria")
async def apply_list_criteria(
    request: Request,
    resource_kind: str = FastAPIPath(...),
    view_id: str = FastAPIPath(...),
    view: ListView = Depends(get_list_view),
):
    form = await request.form()
    resource = view.resource

    field_filters: Dict[str, str] = {}
    for spec in resource.filters:
        value = _form_str(form, spec.key)
        if value:
            allowed = {option.value for option in view.filter_options.get(spec.key, [])}
            if value not in allowed:
                raise HTTPException(
                    status_code=422, detail=f"'{value}' is not an available option for filter '{spec.key}'."
                )
        field_filters[spec.key] = value

    date_range = None
    if resource.supports_date_range:
        try:
            date_range = DateRange.model_validate(
                {"start": _form_str(form, "startDate"), "end": _form_str(form, "endDate")}
            )
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False)) from e
        if not date_range.is_ordered:
            raise HTTPException(status_code=422, detail="Start date must not be after end date.")

    await view.apply_criteria(search=_form_str(form, "search"), field_filters=field_filters, date_range=date_range)
    return _render(request, view, resource_kind, view_id)


@router.post("/{resource_kind}/{view_id}/sort/{sort_key}", response_class=HTMLResponse, name="toggle_list_sort")
async def toggle_list_sort(
    request: Request,
    resource_kind: str = FastAPIPath(...),
    view_id: str = FastAPIPath(...),
    sort_key: str = FastAPIPath(...),
    view: ListView = Depends(get_list_view),
):
    if sort_key not in view.resource.sortable_fields:
        raise HTTPException(status_code=422, detail=f"'{sort_key}' is not a sortable field.")
    await view.toggle_sort(sort_key)
    return _render(request, view, resource_kind, view_id)


@router.post("/{resource_kind}/{view_id}/clear", response_class=HTMLResponse, name="clear_list_criteria")
async def clear_list_criteria(
    request: Request,
    resource_kind: str = FastAPIPath(...),
    view_id: str = FastAPIPath(...),
    view: ListView = Depends(get_list_view),
):
    await view.clear_all()
    return _render(request, view, resource_kind, view_id)


@router.post("/{resource_kind}/{view_id}/page/{page}", response_class=HTMLResponse, name="go_to_list_page")
async def go_to_list_page(
    request: Request,
    resource_kind: str = FastAPIPath(...),
    view_id: str = FastAPIPath(...),
    page: int = FastAPIPath(...),
    view: ListView = Depends(get_list_view),
):
    # Номер вне диапазона молча игнорируется
    await view.go_to_page(page)
    return _render(request, view, resource_kind, view_id)


@router.post("/{resource_kind}/{view_id}/next", response_class=HTMLResponse, name="go_to_next_list_page")
async def go_to_next_list_page(
    request: Request,
    resource_kind: str = FastAPIPath(...),
    view_id: str = FastAPIPath(...),
    view: ListView = Depends(get_list_view),
):
    await view.go_to_next()
    return _render(request, view, resource_kind, view_id)


@router.post("/{resource_kind}/{view_id}/previous", response_class=HTMLResponse, name="go_to_previous_list_page")
async def go_to_previous_list_page(
    request: Request,
    resource_kind: str = FastAPIPath(...),
    view_id: str = FastAPIPath(...),
    view: ListView = Depends(get_list_view),
):
    await view.go_to_previous()
    return _render(request, view, resource_kind, view_id)


@router.post("/{resource_kind}/{view_id}/page-size/{page_size}", response_class=HTMLResponse, name="set_list_page_size")
async def set_list_page_size(
    request: Request,
    resource_kind: str = FastAPIPath(...),
    view_id: str = FastAPIPath(...),
    page_size: int = FastAPIPath(...),
    view: ListView = Depends(get_list_view),
):
    if page_size not in view.pagination.allowed_page_sizes:
        raise HTTPException(
            status_code=422,
            detail=f"Page size must be one of {list(view.pagination.allowed_page_sizes)}.",
        )
    await view.set_page_size(page_size)
    return _render(request, view, resource_kind, view_id)
