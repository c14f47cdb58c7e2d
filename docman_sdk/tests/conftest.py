# docman_sdk/tests/conftest.py
import logging
import os
from typing import Any, Dict, List
from unittest import mock

import pytest

from docman_sdk.clients.base import RemoteServiceClient
from docman_sdk.config import ListingSettings
from docman_sdk.notifications import InMemoryNotificationSink
from docman_sdk.registry import ResourceConfig, ResourceRegistry, register_default_resources

logger = logging.getLogger("docman_sdk.tests.conftest")


def make_documents(count: int, start: int = 1) -> List[Dict[str, Any]]:
    """Записи документов в том виде, в каком их отдает сервис."""
    return [
        {
            "_id": f"doc-{i}",
            "title": f"Document {i}",
            "category": {"_id": "cat-1", "name": "Policies"},
            "createdAt": "2024-03-01T10:00:00Z",
        }
        for i in range(start, start + count)
    ]


def make_projects(count: int) -> List[Dict[str, Any]]:
    return [{"_id": f"prj-{i}", "name": f"Project {i}", "status": "active"} for i in range(1, count + 1)]


ALL_DOCUMENTS = make_documents(42)
CATEGORIES_PAYLOAD = {"categories": [{"_id": "cat-1", "name": "Policies"}, {"_id": "cat-2", "name": "Guides"}]}
USERS_PAYLOAD = [{"_id": "u-1", "firstname": "Ann", "lastname": "Lee"}, {"firstname": "No", "lastname": "Id"}]


def paged_documents_service(calls: List[Dict[str, Any]]):
    """Имитирует сервис документов с серверной пагинацией (42 записи) и справочники фильтров."""

    async def _list_records(endpoint: str, params=()):
        query = dict(params)
        calls.append({"endpoint": endpoint, "params": list(params)})
        if endpoint == "categories":
            return CATEGORIES_PAYLOAD
        if endpoint == "users":
            return USERS_PAYLOAD
        page, limit = int(query.get("page", 1)), int(query.get("limit", 10))
        start = (page - 1) * limit
        return {
            "docs": ALL_DOCUMENTS[start : start + limit],
            "pagination": {"total": len(ALL_DOCUMENTS), "page": page, "limit": limit, "pages": 5},
        }

    return _list_records


class ListingTestSettings(ListingSettings):
    PROJECT_NAME: str = "DocmanListsTest"
    API_BASE_URL: str = "http://records.test/api"
    API_TOKEN: str = "test-token"
    LOGGING_LEVEL: str = "DEBUG"


@pytest.fixture(scope="session", autouse=True)
def set_sdk_test_environment(request: pytest.FixtureRequest):
    logger.info("Setting ENV=test for SDK test session.")
    original_env_value = os.environ.get("ENV")
    os.environ["ENV"] = "test"

    def finalizer():
        logger.info("Restoring original ENV after SDK test session.")
        if original_env_value is None:
            os.environ.pop("ENV", None)
        else:
            os.environ["ENV"] = original_env_value

    request.addfinalizer(finalizer)


@pytest.fixture(scope="function", autouse=True)
def manage_resource_registry_for_tests():
    logger.debug("manage_resource_registry_for_tests: Registering default resources.")
    ResourceRegistry.clear()
    register_default_resources()
    if not ResourceRegistry.is_configured():
        pytest.fail("manage_resource_registry_for_tests: ResourceRegistry failed to configure.")
    yield
    ResourceRegistry.clear()


@pytest.fixture
def test_settings() -> ListingTestSettings:
    return ListingTestSettings()


@pytest.fixture
def documents_resource() -> ResourceConfig:
    return ResourceRegistry.get_resource("documents")


@pytest.fixture
def projects_resource() -> ResourceConfig:
    return ResourceRegistry.get_resource("projects")


@pytest.fixture
def mock_client() -> mock.AsyncMock:
    client = mock.AsyncMock(spec=RemoteServiceClient)
    client.list_records = mock.AsyncMock(name="list_records", return_value=[])
    return client


@pytest.fixture
def notification_sink() -> InMemoryNotificationSink:
    return InMemoryNotificationSink()
