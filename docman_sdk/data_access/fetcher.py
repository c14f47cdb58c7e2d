# docman_sdk/data_access/fetcher.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Set

from docman_sdk.clients.base import RemoteServiceClient
from docman_sdk.exceptions import ServiceCommunicationError
from docman_sdk.filters.query import QueryParams
from docman_sdk.notifications import NotificationLevel, NotificationSink
from docman_sdk.registry import ResourceConfig
from docman_sdk.schemas.pagination import ListResponse

from .reconciler import normalize_response

logger = logging.getLogger("docman_sdk.data_access.fetcher")


class FetchStatus(str, Enum):
    APPLIED = "applied"
    STALE = "stale"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchOutcome:
    sequence: int
    status: FetchStatus
    response: Optional[ListResponse] = None
    error: Optional[ServiceCommunicationError] = None

    @property
    def applied(self) -> bool:
        return self.status == FetchStatus.APPLIED


class ListFetcher:
    """
    Выполняет запросы списка с семантикой "последний выигрывает".

    Каждый вызов fetch() получает возрастающий номер. Результат (успех или ошибка)
    применяется, только если его номер больше всех уже наблюденных; более старые
    ответы молча отбрасываются. Ошибки актуальных запросов уходят в NotificationSink,
    текущий отображаемый результат при этом не меняется. Повторов нет.
    """

    def __init__(
        self,
        client: RemoteServiceClient,
        resource: ResourceConfig,
        notification_sink: Optional[NotificationSink] = None,
    ):
        self.client = client
        self.resource = resource
        self.notification_sink = notification_sink
        self._issued_seq = 0
        self._observed_seq = 0
        self._in_flight: Set[int] = set()
        self.current: Optional[ListResponse] = None

    @property
    def is_loading(self) -> bool:
        return bool(self._in_flight)

    @property
    def latest_sequence(self) -> int:
        return self._issued_seq

    def _is_stale(self, seq: int) -> bool:
        return seq <= self._observed_seq

    async def fetch(self, query: QueryParams) -> FetchOutcome:
        self._issued_seq += 1
        seq = self._issued_seq
        self._in_flight.add(seq)
        logger.debug(f"Fetch #{seq} for '{self.resource.kind}' issued with params: {query}")
        try:
            payload = await self.client.list_records(self.resource.endpoint, query)
        except ServiceCommunicationError as e:
            return self._on_failure(seq, e)
        finally:
            self._in_flight.discard(seq)

        if self._is_stale(seq):
            logger.debug(f"Fetch #{seq} for '{self.resource.kind}' is stale (observed #{self._observed_seq}); discarded.")
            return FetchOutcome(sequence=seq, status=FetchStatus.STALE)

        self._observed_seq = seq
        response = normalize_response(payload, self.resource.item_fields, self.resource.record_cls)
        self.current = response
        logger.debug(f"Fetch #{seq} for '{self.resource.kind}' applied: {len(response.items)} item(s).")
        return FetchOutcome(sequence=seq, status=FetchStatus.APPLIED, response=response)

    def _on_failure(self, seq: int, error: ServiceCommunicationError) -> FetchOutcome:
        if self._is_stale(seq):
            logger.debug(f"Fetch #{seq} for '{self.resource.kind}' failed after a newer outcome; error discarded: {error}")
            return FetchOutcome(sequence=seq, status=FetchStatus.STALE, error=error)

        self._observed_seq = seq
        logger.error(f"Fetch #{seq} for '{self.resource.kind}' failed: {error}")
        if self.notification_sink is not None:
            self.notification_sink.notify(self.resource.error_message, NotificationLevel.ERROR)
        return FetchOutcome(sequence=seq, status=FetchStatus.FAILED, error=error)
