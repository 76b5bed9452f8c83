from __future__ import annotations

import logging
import time
from typing import Any

from core.config import settings
from domain.models import (
    AlertInfo,
    AlertSeverity,
    AlertType,
    ApplicationDocumentSummary,
    ApplicationSnapshot,
    DocumentSlot,
)
from services.documents.message_parser import parse_admin_message
from services.documents.slot_status import first_rejection_reason, get_slot_status
from services.documents.slots import get_document_slots

logger = logging.getLogger(__name__)


def calculate_alerts(
    records: Any,
    slots: list[DocumentSlot] | None,
    admin_message: str | None,
    app_status: str | None,
    app_id: str,
) -> list[AlertInfo]:
    """
    Alerts for one application, always in this order:
      missing (warning) -> rejected (critical) -> rejected_info (info) -> admin_request (info)

    Severity, not position, tells the UI whether action is needed.
    """
    alerts: list[AlertInfo] = []
    statuses = [get_slot_status(records, slot) for slot in slots or []]

    missing = [s.slot for s in statuses if s.is_empty]
    if missing:
        alerts.append(
            AlertInfo(
                type=AlertType.MISSING,
                severity=AlertSeverity.WARNING,
                slots=missing,
                app_id=app_id,
            )
        )

    # every record for the slot was rejected: a replacement is needed
    rejected = [s for s in statuses if s.all_rejected and not s.is_empty]
    if rejected:
        reasons = {}
        for s in rejected:
            reason = first_rejection_reason(s.documents)
            if reason:
                reasons[s.slot.label] = reason
        alerts.append(
            AlertInfo(
                type=AlertType.REJECTED,
                severity=AlertSeverity.CRITICAL,
                slots=[s.slot for s in rejected],
                app_id=app_id,
                rejection_reasons=reasons,
            )
        )

    mixed = [s.slot for s in statuses if s.has_rejected and s.has_accepted]
    if mixed:
        alerts.append(
            AlertInfo(
                type=AlertType.REJECTED_INFO,
                severity=AlertSeverity.INFO,
                slots=mixed,
                app_id=app_id,
            )
        )

    info = parse_admin_message(admin_message)
    if info.has_content and not info.is_just_doc_list and app_status != settings.APPROVED_STATUS:
        alerts.append(
            AlertInfo(
                type=AlertType.ADMIN_REQUEST,
                severity=AlertSeverity.INFO,
                message=info.formatted_message,
                app_id=app_id,
            )
        )

    logger.debug("app %s: %d alerts over %d slots", app_id, len(alerts), len(statuses))
    return alerts


def needs_document_action(
    records: Any,
    slots: list[DocumentSlot] | None,
    admin_message: str | None,
    app_status: str | None,
) -> bool:
    """True when any alert is critical or warning; info alerts are for awareness only."""
    alerts = calculate_alerts(records, slots, admin_message, app_status, "")
    return any(a.severity.needs_action for a in alerts)


def summarize_application(snapshot: ApplicationSnapshot) -> ApplicationDocumentSummary:
    start = time.perf_counter()
    slots = get_document_slots(snapshot.catalog, snapshot.admin_message)
    statuses = [get_slot_status(snapshot.documents, slot) for slot in slots]
    alerts = calculate_alerts(
        snapshot.documents, slots, snapshot.admin_message, snapshot.status, snapshot.id
    )
    logger.debug(
        "app %s summarized: %d slots, %d records, %d alerts in %.3fs",
        snapshot.id,
        len(slots),
        len(snapshot.documents),
        len(alerts),
        time.perf_counter() - start,
    )
    return ApplicationDocumentSummary(
        app_id=snapshot.id,
        slots=slots,
        statuses=statuses,
        alerts=alerts,
        needs_action=any(a.severity.needs_action for a in alerts),
    )
