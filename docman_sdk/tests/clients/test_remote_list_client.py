# docman_sdk/tests/clients/test_remote_list_client.py
from unittest import mock

import httpx
import pytest
import pytest_asyncio
from respx import MockRouter

from docman_sdk.clients.auth import CallableCredentialProvider, StaticCredentialProvider
from docman_sdk.clients.base import RemoteServiceClient
from docman_sdk.exceptions import ServiceCommunicationError

pytestmark = pytest.mark.asyncio

SERVICE_URL_STR = "http://records.test/api"
DOCS_URL = f"{SERVICE_URL_STR}/docs"


@pytest_asyncio.fixture
async def http_client() -> httpx.AsyncClient:
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def service_client(http_client: httpx.AsyncClient) -> RemoteServiceClient:
    return RemoteServiceClient(
        base_url=f"{SERVICE_URL_STR}/",
        credential_provider=StaticCredentialProvider("test-auth-token"),
        http_client=http_client,
    )


async def test_list_records_returns_raw_payload(service_client: RemoteServiceClient, respx_mock: MockRouter):
    payload = {"docs": [{"_id": "d1", "title": "Policy"}], "pagination": {"total": 1, "page": 1, "limit": 10}}
    route = respx_mock.get(DOCS_URL).respond(200, json=payload)

    result = await service_client.list_records("docs", [("search", "pol"), ("page", "1"), ("limit", "10")])

    assert result == payload
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer test-auth-token"
    # Порядок параметров сохраняется
    assert request.url.query == b"search=pol&page=1&limit=10"


async def test_endpoint_url_joins_without_double_slashes(service_client: RemoteServiceClient):
    assert service_client.endpoint_url("/projects/my-projects/") == f"{SERVICE_URL_STR}/projects/my-projects"


async def test_prefixed_token_is_not_prefixed_twice(http_client: httpx.AsyncClient, respx_mock: MockRouter):
    client = RemoteServiceClient(
        SERVICE_URL_STR,
        credential_provider=CallableCredentialProvider(lambda: "Bearer from-session"),
        http_client=http_client,
    )
    route = respx_mock.get(DOCS_URL).respond(200, json=[])
    await client.list_records("docs")
    assert route.calls.last.request.headers["Authorization"] == "Bearer from-session"


async def test_no_token_no_auth_header(http_client: httpx.AsyncClient, respx_mock: MockRouter):
    client = RemoteServiceClient(SERVICE_URL_STR, http_client=http_client)
    route = respx_mock.get(DOCS_URL).respond(200, json=[])
    await client.list_records("docs")
    assert "Authorization" not in route.calls.last.request.headers


@pytest.mark.parametrize(
    "status_code, kwargs, expected_detail",
    [
        (500, {"json": {"detail": "Database unavailable"}}, "Database unavailable"),
        (401, {"json": {"message": "Token expired"}}, "Token expired"),
        (404, {"text": "Not Found"}, "Not Found"),
    ],
)
async def test_error_status_raises_service_communication_error(
    service_client: RemoteServiceClient, respx_mock: MockRouter, status_code, kwargs, expected_detail
):
    respx_mock.get(DOCS_URL).respond(status_code, **kwargs)
    with pytest.raises(ServiceCommunicationError) as exc_info:
        await service_client.list_records("docs")
    assert exc_info.value.status_code == status_code
    assert exc_info.value.url == DOCS_URL
    assert expected_detail in exc_info.value.message


async def test_unexpected_success_status_is_an_error(service_client: RemoteServiceClient, respx_mock: MockRouter):
    respx_mock.get(DOCS_URL).respond(204)
    with pytest.raises(ServiceCommunicationError) as exc_info:
        await service_client.list_records("docs")
    assert exc_info.value.status_code == 204


async def test_timeout_maps_to_service_communication_error(
    service_client: RemoteServiceClient, respx_mock: MockRouter
):
    respx_mock.get(DOCS_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))
    with pytest.raises(ServiceCommunicationError) as exc_info:
        await service_client.list_records("docs")
    assert "Timeout error" in exc_info.value.message
    assert exc_info.value.status_code is None


async def test_network_error_maps_to_service_communication_error(
    service_client: RemoteServiceClient, respx_mock: MockRouter
):
    respx_mock.get(DOCS_URL).mock(side_effect=httpx.ConnectError("refused"))
    with pytest.raises(ServiceCommunicationError) as exc_info:
        await service_client.list_records("docs")
    assert "Network error" in exc_info.value.message
    assert str(exc_info.value).startswith("Service Communication Error")


async def test_invalid_json_raises(service_client: RemoteServiceClient, respx_mock: MockRouter):
    respx_mock.get(DOCS_URL).respond(200, text="<html>oops</html>")
    with pytest.raises(ServiceCommunicationError):
        await service_client.list_records("docs")


async def test_close_only_owned_client():
    external = mock.AsyncMock(spec=httpx.AsyncClient)
    client = RemoteServiceClient(SERVICE_URL_STR, http_client=external)
    await client.close()
    external.aclose.assert_not_awaited()

    owned = RemoteServiceClient(SERVICE_URL_STR)
    with mock.patch.object(owned._http_client, "aclose", new_callable=mock.AsyncMock) as aclose:
        await owned.close()
    aclose.assert_awaited_once()
