# docman_sdk/__init__.py
from .listing import ListView, PaginationController, build_page_window
from .filters import CriteriaStore, build_query
from .data_access import ListFetcher, normalize_response
from .registry import ResourceRegistry, ResourceConfig, register_default_resources

__all__ = [
    "ListView",
    "PaginationController",
    "build_page_window",
    "CriteriaStore",
    "build_query",
    "ListFetcher",
    "normalize_response",
    "ResourceRegistry",
    "ResourceConfig",
    "register_default_resources",
]
