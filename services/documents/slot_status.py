from __future__ import annotations

from typing import Any

from domain.models import DocumentRecord, DocumentSlot, DocumentSlotStatus, DocumentStatus


def coerce_records(records: Any) -> list[DocumentRecord]:
    if not isinstance(records, (list, tuple)):
        return []
    return [r for r in (DocumentRecord.coerce(x) for x in records) if r is not None]


def get_docs_for_slot(records: Any, label: str) -> list[DocumentRecord]:
    """Records whose docType equals the label (both trimmed, case-sensitive)."""
    wanted = (label or "").strip()
    return [r for r in coerce_records(records) if r.doc_type.strip() == wanted]


def get_doc_for_slot(records: Any, label: str) -> DocumentRecord | None:
    """
    One representative record for a slot.

    Priority: rejected > accepted > pending/unset > first. A rejection is
    surfaced even when a later upload was accepted.
    """
    docs = get_docs_for_slot(records, label)
    if not docs:
        return None
    for wanted in (DocumentStatus.REJECTED, DocumentStatus.ACCEPTED, DocumentStatus.PENDING_REVIEW):
        for doc in docs:
            if doc.effective_status is wanted:
                return doc
    return docs[0]


def get_slot_status(records: Any, slot: DocumentSlot) -> DocumentSlotStatus:
    docs = get_docs_for_slot(records, slot.label)
    statuses = [d.effective_status for d in docs]
    return DocumentSlotStatus(
        slot=slot,
        documents=docs,
        has_accepted=DocumentStatus.ACCEPTED in statuses,
        has_pending_review=DocumentStatus.PENDING_REVIEW in statuses,
        has_rejected=DocumentStatus.REJECTED in statuses,
        all_rejected=bool(docs) and all(s is DocumentStatus.REJECTED for s in statuses),
        is_empty=not docs,
    )


def first_rejection_reason(docs: list[DocumentRecord]) -> str | None:
    return next((d.rejection_reason for d in docs if d.rejection_reason), None)


def get_rejected_details(records: Any, slots: list[DocumentSlot] | None) -> dict[str, str | None]:
    """Label -> first rejection reason, for slots where every record was rejected."""
    details: dict[str, str | None] = {}
    for slot in slots or []:
        status = get_slot_status(records, slot)
        if status.all_rejected:
            details[slot.label] = first_rejection_reason(status.documents)
    return details
