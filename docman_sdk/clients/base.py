# docman_sdk/clients/base.py
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from docman_sdk.clients.auth import CredentialProvider
from docman_sdk.exceptions import ServiceCommunicationError

logger = logging.getLogger("docman_sdk.clients.base")


class RemoteServiceClient:
    """
    HTTP-клиент сервиса списков записей.
    Возвращает "сырой" JSON ответа: нормализация конвертов выполняется в reconciler.
    """

    def __init__(
        self,
        base_url: str,
        credential_provider: Optional[CredentialProvider] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.base_url_str = str(base_url).rstrip("/")
        self.credential_provider = credential_provider

        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None
        logger.debug(f"RemoteServiceClient initialized for API base: {self.base_url_str}. Owns client: {self._owns_client}")

    def _get_auth_headers(self) -> Dict[str, str]:
        token = self.credential_provider.get_token() if self.credential_provider else None
        if token:
            prefix = "Bearer "
            if token.lower().startswith(prefix.lower()):
                return {"Authorization": token}
            return {"Authorization": f"{prefix}{token}"}
        return {}

    def endpoint_url(self, endpoint: str) -> str:
        return f"{self.base_url_str}/{endpoint.strip('/')}"

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        detail_message = response.text
        try:
            error_json = response.json()
        except ValueError:
            return detail_message
        if isinstance(error_json, dict):
            for key in ("detail", "message"):
                if error_json.get(key):
                    return str(error_json[key])
        return detail_message

    async def _request(
        self,
        method: str,
        url: str,
        allowed_statuses: Optional[List[int]] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        headers = self._get_auth_headers()
        headers.update(kwargs.pop("headers", {}))
        logger.debug(f"Executing remote call: {method} {url}, Params: {kwargs.get('params')}")
        try:
            response = await self._http_client.request(method, url, headers=headers, **kwargs)
            effective_allowed_statuses = allowed_statuses if allowed_statuses is not None else [200]
            if response.status_code not in effective_allowed_statuses:
                logger.warning(
                    f"Remote call to {url} returned unexpected status: {response.status_code}. "
                    f"Allowed: {effective_allowed_statuses}. Response text: {response.text[:500]}"
                )
                response.raise_for_status()
                # 1xx/3xx не бросают HTTPStatusError, но для списка они тоже ошибка
                raise ServiceCommunicationError(
                    f"Unexpected response status {response.status_code}", status_code=response.status_code, url=url
                )
            logger.debug(f"Remote call to {url} successful. Status: {response.status_code}")
            return response
        except httpx.TimeoutException as e:
            raise ServiceCommunicationError(f"Timeout error accessing {url}: {e!s}", url=url) from e
        except httpx.RequestError as e:
            raise ServiceCommunicationError(f"Network error accessing {url}: {e!s}", url=url) from e
        except httpx.HTTPStatusError as e:
            raise ServiceCommunicationError(
                message=f"Service responded with error: {self._error_detail(e.response)}",
                status_code=e.response.status_code,
                url=url,
            ) from e

    async def list_records(
        self,
        endpoint: str,
        params: Sequence[Tuple[str, str]] = (),
    ) -> Any:
        """
        GET списка записей. Параметры передаются упорядоченным списком пар,
        чтобы порядок в строке запроса совпадал с порядком build_query.
        """
        url = self.endpoint_url(endpoint)
        logger.info(f"Client LIST: Fetching list from {url} with params: {list(params)}")
        response = await self._request("GET", url, params=list(params), allowed_statuses=[200])
        try:
            return response.json()
        except ValueError as e:
            raise ServiceCommunicationError(f"Invalid JSON in list response from {url}", status_code=response.status_code, url=url) from e

    async def close(self) -> None:
        if self._owns_client and self._http_client:
            logger.info(f"Closing owned HTTP client for {self.base_url_str}")
            try:
                await self._http_client.aclose()
            except Exception as e:
                logger.error(f"Error closing owned HTTP client for {self.base_url_str}: {e}", exc_info=True)
        else:
            logger.debug(f"HTTP client for {self.base_url_str} is managed externally, not closing.")
