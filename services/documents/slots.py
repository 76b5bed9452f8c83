from __future__ import annotations

import logging
from typing import Any, Iterable

from domain.models import CatalogEntry, DocumentSlot
from services.documents.message_parser import extract_requested_labels

logger = logging.getLogger(__name__)


def _as_entry(item: Any) -> CatalogEntry | None:
    entry = CatalogEntry.coerce(item)
    return entry if entry is not None and entry.label else None


def sort_catalog(entries: Iterable[Any]) -> list[CatalogEntry]:
    """Order by admin sort key; entries without one keep their order at the end."""
    parsed = [e for e in (_as_entry(x) for x in entries or []) if e is not None]
    return sorted(parsed, key=lambda e: (e.sort_order is None, e.sort_order or 0))


def get_document_slots(catalog: Iterable[Any] | None, admin_message: str | None) -> list[DocumentSlot]:
    """
    Catalog slots first (catalog order), then labels an administrator listed
    under the request header, in message order. Labels are unique.
    """
    slots: list[DocumentSlot] = []
    seen: set[str] = set()

    for item in catalog or []:
        entry = _as_entry(item)
        if entry is None or entry.label in seen:
            continue
        seen.add(entry.label)
        slots.append(DocumentSlot(label=entry.label, catalog_id=entry.id))

    extra = 0
    for label in extract_requested_labels(admin_message):
        if label in seen:
            continue
        seen.add(label)
        slots.append(DocumentSlot(label=label, is_extra=True))
        extra += 1

    logger.debug("resolved %d slots (%d extra)", len(slots), extra)
    return slots
