# docman_sdk/filters/__init__.py
from .base import CriteriaStore
from .query import build_query, QueryParams

__all__ = [
    "CriteriaStore",
    "build_query",
    "QueryParams",
]
