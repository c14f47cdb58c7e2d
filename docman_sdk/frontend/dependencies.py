# docman_sdk/frontend/dependencies.py
import logging

from fastapi import Depends, HTTPException, Path as FastAPIPath, Request

from docman_sdk.exceptions import ConfigurationError
from docman_sdk.listing.view import ListView

from .session import ListViewManager

logger = logging.getLogger("docman_sdk.frontend.dependencies")


def get_view_manager(request: Request) -> ListViewManager:
    manager = getattr(request.app.state, "view_manager", None)
    if manager is None:
        logger.error("ListViewManager not found in app.state.")
        raise HTTPException(status_code=503, detail="List views are not initialized.")
    return manager


def get_list_view(
    resource_kind: str = FastAPIPath(...),
    view_id: str = FastAPIPath(..., min_length=1, max_length=64),
    manager: ListViewManager = Depends(get_view_manager),
) -> ListView:
    try:
        return manager.get_or_create(resource_kind, view_id)
    except ConfigurationError as e:
        raise HTTPException(status_code=404, detail=f"Unknown list resource '{resource_kind}'.") from e
