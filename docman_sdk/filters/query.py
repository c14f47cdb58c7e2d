# docman_sdk/filters/query.py
from typing import List, Optional, Sequence, Tuple

from docman_sdk.schemas.criteria import FilterCriteria
from docman_sdk.schemas.pagination import PageRequest

QueryParams = List[Tuple[str, str]]


def build_query(
    criteria: FilterCriteria,
    page_request: Optional[PageRequest] = None,
    filter_keys: Sequence[str] = (),
) -> QueryParams:
    """
    Translates criteria and an optional page request into ordered query parameters.

    Order: search, field filters (declared keys first, then the rest by name),
    startDate, endDate, sortBy, sortOrder, page, limit. Empty values are omitted.
    `page`/`limit` are emitted only when a page request is given (delegated paging).
    """
    params: QueryParams = []

    if criteria.search:
        params.append(("search", criteria.search))

    declared = list(filter_keys)
    extra = sorted(key for key in criteria.field_filters if key not in declared)
    for key in declared + extra:
        value = criteria.field_filters.get(key, "")
        if value:
            params.append((key, str(value)))

    date_range = criteria.date_range
    if date_range.start is not None:
        params.append(("startDate", date_range.start.isoformat()))
    if date_range.end is not None:
        params.append(("endDate", date_range.end.isoformat()))

    if criteria.sort.key:
        params.append(("sortBy", criteria.sort.key))
        params.append(("sortOrder", criteria.sort.direction.value))

    if page_request is not None:
        params.append(("page", str(page_request.page)))
        params.append(("limit", str(page_request.page_size)))

    return params
