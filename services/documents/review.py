"""
Write-side helpers for the document list.

The store keeps one JSON array per application and writes it back whole,
so two writers that read the same array race and the last write wins.
These helpers only build the next array; the caller persists it and must
serialize writes (see check_version).
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from domain.models import DocumentRecord, DocumentStatus

logger = logging.getLogger(__name__)


class DocumentReviewError(Exception):
    pass


class RecordNotFound(DocumentReviewError):
    pass


class InvalidTransition(DocumentReviewError):
    pass


class StaleDocumentList(DocumentReviewError):
    pass


def check_version(expected: int, actual: int) -> None:
    """Optimistic concurrency guard around the whole-array write."""
    if expected != actual:
        raise StaleDocumentList(f"document list changed (read v{expected}, store has v{actual})")


def _stored(item: Any) -> Any:
    """Records already parsed go back in their stored (camelCase) shape."""
    if isinstance(item, DocumentRecord):
        return item.model_dump(mode="json", by_alias=True, exclude_none=True)
    return item


def _existing(records: Any) -> list[Any]:
    if not isinstance(records, (list, tuple)):
        return []
    return [_stored(item) for item in records]


def _has_id(item: Any, record_id: str) -> bool:
    if not isinstance(item, Mapping) or item.get("id") is None:
        return False
    return str(item["id"]) == str(record_id)


def append_upload(
    records: Any,
    doc_type: str,
    file_name: str | None = None,
    url: str | None = None,
    uploaded_at: datetime | None = None,
) -> list[Any]:
    """
    Next array: every existing item exactly as given, plus a fresh
    pending_review record. Older records stay as history.
    """
    record = DocumentRecord(
        id=uuid.uuid4().hex,
        doc_type=(doc_type or "").strip(),
        file_name=file_name,
        url=url,
        uploaded_at=uploaded_at or datetime.now(timezone.utc),
        status=DocumentStatus.PENDING_REVIEW,
    )
    logger.info("appended upload %s for doc_type=%r", record.id, record.doc_type)
    return [*_existing(records), _stored(record)]


def apply_review_decision(
    records: Any,
    record_id: str,
    status: DocumentStatus | str,
    reason: str | None = None,
) -> list[Any]:
    """
    Next array where one existing record carries the administrator's decision.
    Only its status and rejection reason change; every other item is passed
    through untouched. The rejection reason is kept only for rejections.
    """
    try:
        target = DocumentStatus(status)
    except ValueError as e:
        raise InvalidTransition(f"unknown review status {status!r}") from e

    current = _existing(records)
    index = next((i for i, item in enumerate(current) if _has_id(item, record_id)), None)
    if index is None:
        raise RecordNotFound(f"document {record_id} not found")

    item = current[index]
    # a legacy status nobody recognises can still be decided on
    source = DocumentRecord.coerce(item).effective_status or DocumentStatus.PENDING_REVIEW
    if not source.can_transition_to(target):
        raise InvalidTransition(
            f"cannot move document {record_id} from {source.value} to {target.value}"
        )

    updated = {**item, "status": target.value}
    updated.pop("rejectionReason", None)
    updated.pop("rejection_reason", None)
    if target is DocumentStatus.REJECTED and reason:
        updated["rejectionReason"] = reason
    logger.info("document %s: %s -> %s", record_id, source.value, target.value)
    return [*current[:index], updated, *current[index + 1 :]]
