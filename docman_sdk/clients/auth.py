# docman_sdk/clients/auth.py
from typing import Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class CredentialProvider(Protocol):
    """Источник Bearer токена для запросов к сервису записей."""

    def get_token(self) -> Optional[str]: ...


class StaticCredentialProvider:
    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token


class CallableCredentialProvider:
    """Читает токен при каждом запросе (например, из сессии пользователя)."""

    def __init__(self, getter: Callable[[], Optional[str]]):
        self._getter = getter

    def get_token(self) -> Optional[str]:
        return self._getter()
