# docman_sdk/listing/__init__.py
from .pagination import (
    ELLIPSIS,
    PaginationController,
    PaginationState,
    build_page_window,
)
from .view import ListView

__all__ = [
    "ELLIPSIS",
    "PaginationController",
    "PaginationState",
    "build_page_window",
    "ListView",
]
