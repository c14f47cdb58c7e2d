# docman_sdk/frontend/session.py
import logging
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from docman_sdk.clients.base import RemoteServiceClient
from docman_sdk.config import ListingSettings
from docman_sdk.listing.view import ListView
from docman_sdk.notifications import InMemoryNotificationSink
from docman_sdk.registry import ResourceRegistry

from .config import DEFAULT_MAX_VIEWS

logger = logging.getLogger("docman_sdk.frontend.session")

ViewKey = Tuple[str, str]


class ListViewManager:
    """
    Хранит ListView по ключу (resource_kind, view_id).
    Каждый view_id владеет своим состоянием критериев и пагинации; между view ничего не разделяется.
    """

    def __init__(
        self,
        client_factory: Callable[[], RemoteServiceClient],
        settings: Optional[ListingSettings] = None,
        max_views: int = DEFAULT_MAX_VIEWS,
    ):
        self._client_factory = client_factory
        self._settings = settings
        self._max_views = max_views
        self._views: "OrderedDict[ViewKey, ListView]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._views)

    def get_or_create(self, resource_kind: str, view_id: str) -> ListView:
        key = (resource_kind.lower(), view_id)
        view = self._views.get(key)
        if view is not None:
            self._views.move_to_end(key)
            return view

        # ConfigurationError для неизвестного ресурса пробрасывается вызывающему
        ResourceRegistry.get_resource(resource_kind)
        view = ListView.for_resource(
            resource_kind,
            self._client_factory(),
            settings=self._settings,
            notification_sink=InMemoryNotificationSink(),
        )
        self._views[key] = view
        logger.info(f"Created list view '{view_id}' for resource '{resource_kind}'. Active views: {len(self._views)}")

        while len(self._views) > self._max_views:
            evicted_key, _ = self._views.popitem(last=False)
            logger.info(f"Evicted list view {evicted_key} (limit {self._max_views}).")
        return view

    def discard(self, resource_kind: str, view_id: str) -> bool:
        removed = self._views.pop((resource_kind.lower(), view_id), None)
        if removed is not None:
            logger.info(f"Discarded list view '{view_id}' for resource '{resource_kind}'.")
        return removed is not None
