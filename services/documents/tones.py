"""Display tones for alerts and slots. The UI maps each tone to its own colours."""

from __future__ import annotations

from enum import Enum

from domain.models import AlertInfo, AlertSeverity, AlertType, DocumentSlotStatus


class AlertTone(str, Enum):
    DANGER = "danger"
    CAUTION = "caution"
    NOTICE = "notice"
    NEUTRAL = "neutral"


class SlotTone(str, Enum):
    DONE = "done"
    WAITING = "waiting"
    WAITING_EXTRA = "waiting_extra"
    FAILED = "failed"
    REQUESTED_EXTRA = "requested_extra"
    IDLE = "idle"


def alert_tone(alert: AlertInfo) -> AlertTone:
    if alert.type is AlertType.REJECTED and alert.severity is AlertSeverity.CRITICAL:
        return AlertTone.DANGER
    if alert.type is AlertType.MISSING or (
        alert.type is AlertType.REJECTED_INFO and alert.severity is AlertSeverity.WARNING
    ):
        return AlertTone.CAUTION
    if alert.type in (AlertType.ADMIN_REQUEST, AlertType.REJECTED_INFO):
        return AlertTone.NOTICE
    return AlertTone.NEUTRAL


def slot_tone(status: DocumentSlotStatus) -> SlotTone:
    if status.has_accepted:
        return SlotTone.DONE
    if status.has_pending_review:
        return SlotTone.WAITING_EXTRA if status.slot.is_extra else SlotTone.WAITING
    if status.all_rejected:
        return SlotTone.FAILED
    if status.slot.is_extra:
        return SlotTone.REQUESTED_EXTRA
    return SlotTone.IDLE
