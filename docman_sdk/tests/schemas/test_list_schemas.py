# docman_sdk/tests/schemas/test_list_schemas.py
from datetime import date

import pytest
from pydantic import ValidationError

from docman_sdk.schemas.criteria import DateRange, SortDirection
from docman_sdk.schemas.pagination import PageRequest, PageResult
from docman_sdk.schemas.records import DocumentRecord, ProjectRecord


def test_page_result_accepts_service_field_names():
    result = PageResult.model_validate({"total": 23, "page": 2, "limit": 10, "pages": 99})
    assert result.page_size == 10
    assert result.page_count == 3  # pages от сервиса не используется


@pytest.mark.parametrize(
    "payload, expected_page",
    [
        ({"total": 23, "page": 7, "limit": 10}, 3),
        ({"total": 23, "page": 0, "limit": 10}, 1),
        ({"total": 0, "page": 4, "limit": 10}, 1),
    ],
)
def test_page_result_clamps_page(payload, expected_page):
    assert PageResult.model_validate(payload).page == expected_page


def test_page_result_rejects_negative_total():
    with pytest.raises(ValidationError):
        PageResult.model_validate({"total": -1, "page": 1, "limit": 10})


def test_page_request_validation():
    with pytest.raises(ValidationError):
        PageRequest(page=0, page_size=10)
    with pytest.raises(ValidationError):
        PageRequest(page=1, page_size=0)


def test_date_range_parsing_and_order():
    rng = DateRange.model_validate({"start": "2024-02-01", "end": ""})
    assert rng.start == date(2024, 2, 1)
    assert rng.end is None
    assert rng.is_ordered
    assert DateRange(start=date(2024, 3, 1), end=date(2024, 2, 1)).is_ordered is False


def test_sort_direction_toggled():
    assert SortDirection.ASC.toggled() is SortDirection.DESC
    assert SortDirection.DESC.toggled() is SortDirection.ASC


def test_records_read_service_aliases():
    doc = DocumentRecord.model_validate(
        {"_id": "d1", "title": "Policy", "reviewDate": "2024-06-01T00:00:00Z", "author": {"_id": "u1"}}
    )
    assert doc.id == "d1"
    assert doc.review_date is not None
    assert doc.display_title == "Policy"
    assert doc.model_extra["author"] == {"_id": "u1"}

    project = ProjectRecord.model_validate({"id": "p1", "name": "Migration"})
    assert project.display_title == "Migration"
