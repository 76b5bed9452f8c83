from __future__ import annotations

from typing import Any

from domain.models import DocumentSlot, SlotDocument
from services.documents.slot_status import get_doc_for_slot, get_slot_status


def select_documents(records: Any, slots: list[DocumentSlot] | None) -> list[SlotDocument]:
    """One row per slot for views that show a single file per requirement."""
    return [
        SlotDocument(
            slot=slot,
            document=get_doc_for_slot(records, slot.label),
            state=get_slot_status(records, slot).state,
        )
        for slot in slots or []
    ]
