# docman_sdk/tests/data_access/test_list_fetcher.py
import asyncio
from typing import Any, List, Tuple
from unittest import mock

import pytest

from docman_sdk.data_access.fetcher import FetchStatus, ListFetcher
from docman_sdk.exceptions import ServiceCommunicationError
from docman_sdk.notifications import InMemoryNotificationSink, NotificationLevel
from docman_sdk.registry import ResourceConfig
from docman_sdk.tests.conftest import make_documents

pytestmark = pytest.mark.asyncio


class ControlledClient:
    """Клиент, ответы которого тест завершает вручную и в любом порядке."""

    def __init__(self):
        self.calls: List[Tuple[List[Any], asyncio.Future]] = []

    async def list_records(self, endpoint: str, params=()):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((list(params), future))
        return await future

    async def wait_for_calls(self, count: int) -> None:
        while len(self.calls) < count:
            await asyncio.sleep(0)


async def test_fetch_applies_normalized_response(
    mock_client: mock.AsyncMock, documents_resource: ResourceConfig
):
    mock_client.list_records.return_value = {
        "docs": make_documents(2),
        "pagination": {"total": 2, "page": 1, "limit": 10},
    }
    fetcher = ListFetcher(mock_client, documents_resource)

    outcome = await fetcher.fetch([("page", "1"), ("limit", "10")])

    assert outcome.status == FetchStatus.APPLIED
    assert outcome.sequence == 1
    assert [item.id for item in fetcher.current.items] == ["doc-1", "doc-2"]
    assert fetcher.current.pagination.total == 2
    mock_client.list_records.assert_awaited_once_with("docs", [("page", "1"), ("limit", "10")])


async def test_failure_keeps_current_result_and_notifies(
    mock_client: mock.AsyncMock,
    documents_resource: ResourceConfig,
    notification_sink: InMemoryNotificationSink,
):
    fetcher = ListFetcher(mock_client, documents_resource, notification_sink)
    mock_client.list_records.return_value = make_documents(3)
    await fetcher.fetch([])
    displayed = fetcher.current

    mock_client.list_records.side_effect = ServiceCommunicationError("Service down", status_code=500)
    outcome = await fetcher.fetch([])

    assert outcome.status == FetchStatus.FAILED
    assert isinstance(outcome.error, ServiceCommunicationError)
    assert fetcher.current is displayed
    notifications = notification_sink.drain()
    assert len(notifications) == 1
    assert notifications[0].message == "Failed to load documents"
    assert notifications[0].level == NotificationLevel.ERROR


async def test_out_of_order_completion_last_issued_wins(
    documents_resource: ResourceConfig, notification_sink: InMemoryNotificationSink
):
    client = ControlledClient()
    fetcher = ListFetcher(client, documents_resource, notification_sink)

    first = asyncio.create_task(fetcher.fetch([("search", "a")]))
    second = asyncio.create_task(fetcher.fetch([("search", "ab")]))
    await client.wait_for_calls(2)
    assert fetcher.is_loading is True

    client.calls[1][1].set_result({"documents": make_documents(1, start=20)})
    second_outcome = await second
    client.calls[0][1].set_result({"documents": make_documents(5)})
    first_outcome = await first

    assert second_outcome.status == FetchStatus.APPLIED
    assert first_outcome.status == FetchStatus.STALE
    assert [item.id for item in fetcher.current.items] == ["doc-20"]
    assert fetcher.is_loading is False
    assert notification_sink.pending == []


async def test_in_order_completion_applies_both(documents_resource: ResourceConfig):
    client = ControlledClient()
    fetcher = ListFetcher(client, documents_resource)

    first = asyncio.create_task(fetcher.fetch([]))
    second = asyncio.create_task(fetcher.fetch([]))
    await client.wait_for_calls(2)

    client.calls[0][1].set_result(make_documents(1))
    assert (await first).status == FetchStatus.APPLIED
    client.calls[1][1].set_result(make_documents(2))
    assert (await second).status == FetchStatus.APPLIED
    assert len(fetcher.current.items) == 2


async def test_stale_failure_is_discarded_silently(
    documents_resource: ResourceConfig, notification_sink: InMemoryNotificationSink
):
    client = ControlledClient()
    fetcher = ListFetcher(client, documents_resource, notification_sink)

    first = asyncio.create_task(fetcher.fetch([]))
    second = asyncio.create_task(fetcher.fetch([]))
    await client.wait_for_calls(2)

    client.calls[1][1].set_result(make_documents(2))
    await second
    client.calls[0][1].set_exception(ServiceCommunicationError("late failure"))
    outcome = await first

    assert outcome.status == FetchStatus.STALE
    assert notification_sink.pending == []
    assert len(fetcher.current.items) == 2


async def test_older_success_after_newer_failure_is_discarded(
    documents_resource: ResourceConfig, notification_sink: InMemoryNotificationSink
):
    client = ControlledClient()
    fetcher = ListFetcher(client, documents_resource, notification_sink)

    first = asyncio.create_task(fetcher.fetch([]))
    second = asyncio.create_task(fetcher.fetch([]))
    await client.wait_for_calls(2)

    client.calls[1][1].set_exception(ServiceCommunicationError("boom"))
    assert (await second).status == FetchStatus.FAILED
    client.calls[0][1].set_result(make_documents(4))
    assert (await first).status == FetchStatus.STALE

    assert fetcher.current is None
    assert [n.message for n in notification_sink.drain()] == ["Failed to load documents"]
