# docman_sdk/schemas/__init__.py
from .criteria import DateRange, FilterCriteria, SortDirection, SortSpec, DEFAULT_SORT_KEY
from .pagination import ListResponse, PageRequest, PageResult, PaginationMode
from .records import RecordSchema, DocumentRecord, ProjectRecord, BookRecord, CategoryRecord

__all__ = [
    "DateRange",
    "FilterCriteria",
    "SortDirection",
    "SortSpec",
    "DEFAULT_SORT_KEY",
    "ListResponse",
    "PageRequest",
    "PageResult",
    "PaginationMode",
    "RecordSchema",
    "DocumentRecord",
    "ProjectRecord",
    "BookRecord",
    "CategoryRecord",
]
