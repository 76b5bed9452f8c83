from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.models import (
    AlertInfo,
    DocumentSlotStatus,
    DocumentStatus,
    SlotDocument,
)
from services.documents.tones import AlertTone, SlotTone


class _In(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ParseMessageIn(_In):
    message: Optional[str] = None


class SlotsIn(_In):
    catalog: List[Any] = []
    admin_message: Optional[str] = Field(default=None, alias="adminMessage")


class StatusOut(_In):
    app_id: str = Field(alias="appId")
    statuses: List[DocumentSlotStatus] = []
    selected: List[SlotDocument] = []
    slot_tones: List[SlotTone] = Field(default_factory=list, alias="slotTones")


class AlertsOut(_In):
    app_id: str = Field(alias="appId")
    alerts: List[AlertInfo] = []
    tones: List[AlertTone] = []
    needs_action: bool = Field(default=False, alias="needsAction")


class UploadIn(_In):
    # stored array, passed through untouched
    documents: List[Any] = []
    doc_type: str = Field(alias="docType", min_length=1)
    file_name: Optional[str] = Field(default=None, alias="fileName")
    url: Optional[str] = None


class ReviewIn(_In):
    documents: List[Any] = []
    record_id: str = Field(alias="recordId")
    status: DocumentStatus
    reason: Optional[str] = None


class DocumentsOut(_In):
    documents: List[Any] = []


class RequestMessageIn(_In):
    labels: List[str] = []
    note: Optional[str] = None


class RequestMessageOut(_In):
    message: str
