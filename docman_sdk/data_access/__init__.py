# docman_sdk/data_access/__init__.py
from .reconciler import EnvelopeKind, ClassifiedPayload, classify_payload, normalize_response
from .fetcher import ListFetcher, FetchOutcome, FetchStatus
from .common import app_http_client_lifespan, build_http_client, get_http_client_from_state

__all__ = [
    "EnvelopeKind",
    "ClassifiedPayload",
    "classify_payload",
    "normalize_response",
    "ListFetcher",
    "FetchOutcome",
    "FetchStatus",
    "app_http_client_lifespan",
    "build_http_client",
    "get_http_client_from_state",
]
