# docman_sdk/data_access/reconciler.py
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Type

from pydantic import BaseModel, ValidationError

from docman_sdk.registry import DEFAULT_ITEM_FIELDS
from docman_sdk.schemas.pagination import ListResponse, PageResult

logger = logging.getLogger("docman_sdk.data_access.reconciler")


class EnvelopeKind(str, Enum):
    BARE_SEQUENCE = "bare_sequence"
    ENVELOPE = "envelope"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ClassifiedPayload:
    kind: EnvelopeKind
    items: List[Any] = field(default_factory=list)
    items_field: Optional[str] = None
    raw_pagination: Any = None


def classify_payload(payload: Any, item_fields: Sequence[str] = DEFAULT_ITEM_FIELDS) -> ClassifiedPayload:
    """
    Определяет форму ответа: голый список, конверт с известным полем списка, либо неизвестная форма.
    Поля проверяются в порядке item_fields; побеждает первое, в котором лежит список.
    """
    if isinstance(payload, list):
        return ClassifiedPayload(kind=EnvelopeKind.BARE_SEQUENCE, items=list(payload))
    if isinstance(payload, Mapping):
        for name in item_fields:
            candidate = payload.get(name)
            if isinstance(candidate, list):
                return ClassifiedPayload(
                    kind=EnvelopeKind.ENVELOPE,
                    items=list(candidate),
                    items_field=name,
                    raw_pagination=payload.get("pagination"),
                )
    return ClassifiedPayload(kind=EnvelopeKind.UNRECOGNIZED)


def _parse_pagination(raw: Any) -> Optional[PageResult]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        logger.warning(f"Ignoring pagination of unexpected type {type(raw).__name__}.")
        return None
    try:
        return PageResult.model_validate(dict(raw))
    except ValidationError as e:
        logger.warning(f"Ignoring invalid pagination object {dict(raw)}: {e.error_count()} validation error(s).")
        return None


def _validate_items(items: List[Any], record_cls: Type[BaseModel]) -> List[Any]:
    validated: List[Any] = []
    for index, item in enumerate(items):
        try:
            validated.append(record_cls.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping item #{index} that does not match {record_cls.__name__}: {e.error_count()} error(s).")
    return validated


def normalize_response(
    payload: Any,
    item_fields: Sequence[str] = DEFAULT_ITEM_FIELDS,
    record_cls: Optional[Type[BaseModel]] = None,
) -> ListResponse:
    """
    Normalizes any known response envelope into the canonical ListResponse.
    Never raises: an unrecognized shape becomes an empty list and a logged diagnostic.
    """
    classified = classify_payload(payload, item_fields)

    if classified.kind == EnvelopeKind.UNRECOGNIZED:
        shape = sorted(payload.keys()) if isinstance(payload, Mapping) else type(payload).__name__
        logger.warning(
            f"Unrecognized list response shape ({shape}); expected a list or one of the fields {list(item_fields)}. "
            "Normalizing to an empty list."
        )
        return ListResponse(items=[], pagination=None)

    items = classified.items
    if record_cls is not None:
        items = _validate_items(items, record_cls)

    pagination = _parse_pagination(classified.raw_pagination)
    logger.debug(
        f"Normalized {classified.kind.value} response"
        f"{f' (field: {classified.items_field})' if classified.items_field else ''}: "
        f"{len(items)} item(s), pagination: {'yes' if pagination else 'no'}."
    )
    return ListResponse(items=items, pagination=pagination)
