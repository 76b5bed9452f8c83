import logging
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
)

from domain.value_objects import SlotKey

logger = logging.getLogger(__name__)


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DOCUMENTS_REQUESTED = "documents_requested"
    APPROVED = "approved"
    REJECTED = "rejected"


class DocumentStatus(str, Enum):
    """
    Review state of one uploaded record.

    pending_review -> accepted | rejected
    accepted       -> accepted | rejected
    rejected       -> accepted | rejected

    Nothing goes back to pending_review: a resubmission appends a new
    pending_review record next to the old one.
    """

    PENDING_REVIEW = "pending_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    def can_transition_to(self, target: "DocumentStatus") -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[DocumentStatus, set[DocumentStatus]] = {
    DocumentStatus.PENDING_REVIEW: {DocumentStatus.ACCEPTED, DocumentStatus.REJECTED},
    DocumentStatus.ACCEPTED: {DocumentStatus.ACCEPTED, DocumentStatus.REJECTED},
    DocumentStatus.REJECTED: {DocumentStatus.ACCEPTED, DocumentStatus.REJECTED},
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


def _text_or_none(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


class DocumentRecord(_CamelModel):
    """
    One uploaded file. Legacy blobs may miss any field or carry odd types;
    extra keys are kept. Only docType and status drive review state.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = None
    doc_type: str = Field(default="", alias="docType")
    file_name: Optional[str] = Field(default=None, alias="fileName")
    url: Optional[str] = None
    uploaded_at: Optional[datetime] = Field(default=None, alias="uploadedAt")
    # raw value; unknown strings are kept as they were stored
    status: Optional[str] = None
    rejection_reason: Optional[str] = Field(default=None, alias="rejectionReason")

    @field_validator("doc_type", mode="before")
    @classmethod
    def _doc_type_text(cls, value: Any) -> str:
        return _text_or_none(value) or ""

    @field_validator("id", "file_name", "url", "rejection_reason", mode="before")
    @classmethod
    def _lenient_text(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)

    @field_validator("status", mode="before")
    @classmethod
    def _raw_status(cls, value: Any) -> Optional[str]:
        if isinstance(value, DocumentStatus):
            return value.value
        return _text_or_none(value)

    @field_validator("uploaded_at", mode="before")
    @classmethod
    def _lenient_timestamp(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                return None
        if value is None or isinstance(value, datetime):
            return value
        return None

    @property
    def effective_status(self) -> Optional[DocumentStatus]:
        """Unset means pending review; an unknown value maps to no state at all."""
        if not self.status:
            return DocumentStatus.PENDING_REVIEW
        try:
            return DocumentStatus(self.status)
        except ValueError:
            return None

    @classmethod
    def coerce(cls, item: Any) -> Optional["DocumentRecord"]:
        """Accept a record or a mapping; anything else is skipped (None)."""
        if isinstance(item, DocumentRecord):
            return item
        if not isinstance(item, Mapping):
            return None
        try:
            return cls.model_validate(dict(item))
        except ValidationError as e:
            # keep the fields that decide review state
            logger.warning("document record %r only partly readable: %s", item.get("id"), e)
            return cls(
                id=item.get("id"),
                doc_type=item.get("docType", item.get("doc_type")),
                status=item.get("status"),
            )


class CatalogEntry(_CamelModel):
    id: Optional[str] = None
    label: str = Field(validation_alias=AliasChoices("label", "label_ar"))
    sort_order: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("sort_order", "sortOrder")
    )

    @field_validator("id", "label", mode="before")
    @classmethod
    def _lenient_text(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)

    @field_validator("sort_order", mode="before")
    @classmethod
    def _lenient_sort_order(cls, value: Any) -> Optional[int]:
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @classmethod
    def coerce(cls, item: Any) -> Optional["CatalogEntry"]:
        """Entries without a usable label are skipped (None)."""
        if isinstance(item, CatalogEntry):
            return item
        if not isinstance(item, Mapping):
            return None
        try:
            return cls.model_validate(dict(item))
        except ValidationError as e:
            logger.warning("skipping catalog entry %r: %s", item.get("id"), e)
            return None


class DocumentSlot(_CamelModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    label: str
    is_extra: bool = Field(default=False, alias="isExtra")
    catalog_id: Optional[str] = Field(default=None, alias="catalogId")

    @property
    def key(self) -> SlotKey:
        if self.catalog_id is not None and not self.is_extra:
            return SlotKey.for_catalog(self.catalog_id)
        return SlotKey.for_label(self.label)


class SlotState(str, Enum):
    EMPTY = "empty"
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    MIXED = "mixed"  # accepted and rejected records side by side


class DocumentSlotStatus(_CamelModel):
    slot: DocumentSlot
    documents: List[DocumentRecord] = []
    has_accepted: bool = Field(default=False, alias="hasAccepted")
    has_pending_review: bool = Field(default=False, alias="hasPendingReview")
    has_rejected: bool = Field(default=False, alias="hasRejected")
    all_rejected: bool = Field(default=False, alias="allRejected")
    is_empty: bool = Field(default=True, alias="isEmpty")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def state(self) -> SlotState:
        if self.is_empty:
            return SlotState.EMPTY
        if self.has_rejected and self.has_accepted:
            return SlotState.MIXED
        if self.all_rejected:
            return SlotState.REJECTED
        if self.has_accepted:
            return SlotState.ACCEPTED
        return SlotState.PENDING


class AlertType(str, Enum):
    MISSING = "missing"
    REJECTED = "rejected"
    REJECTED_INFO = "rejected_info"
    ADMIN_REQUEST = "admin_request"


class AlertSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def needs_action(self) -> bool:
        return self in (AlertSeverity.CRITICAL, AlertSeverity.WARNING)


class AlertInfo(_CamelModel):
    type: AlertType
    severity: AlertSeverity
    slots: List[DocumentSlot] = []
    message: Optional[str] = None
    app_id: str = Field(default="", alias="appId")
    rejection_reasons: dict[str, str] = Field(default_factory=dict, alias="rejectionReasons")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def needs_action(self) -> bool:
        return self.severity.needs_action


class MessageKind(str, Enum):
    EMPTY = "empty"
    DOC_LIST_ONLY = "doc_list_only"
    DOC_LIST_WITH_NOTE = "doc_list_with_note"
    FREE_TEXT = "free_text"


class AdminMessageInfo(_CamelModel):
    has_content: bool = Field(default=False, alias="hasContent")
    is_just_doc_list: bool = Field(default=False, alias="isJustDocList")
    formatted_message: str = Field(default="", alias="formattedMessage")
    raw_message: Optional[str] = Field(default=None, alias="rawMessage")
    kind: MessageKind = MessageKind.EMPTY
    requested_labels: List[str] = Field(default_factory=list, alias="requestedLabels")


class ApplicationSnapshot(_CamelModel):
    """What the UI already fetched for one application."""

    id: str
    status: str = ApplicationStatus.PENDING.value
    admin_message: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "admin_message", "adminMessage", "documents_requested_message"
        ),
    )
    documents: List[DocumentRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("documents", "applicant_documents"),
    )
    catalog: List[CatalogEntry] = []

    @field_validator("id", mode="before")
    @classmethod
    def _id_text(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)

    @field_validator("documents", mode="before")
    @classmethod
    def _documents_list(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        return [r for r in (DocumentRecord.coerce(x) for x in value) if r is not None]

    @field_validator("catalog", mode="before")
    @classmethod
    def _catalog_list(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        return [e for e in (CatalogEntry.coerce(x) for x in value) if e is not None]


class SlotDocument(_CamelModel):
    slot: DocumentSlot
    document: Optional[DocumentRecord] = None
    state: SlotState = SlotState.EMPTY


class ApplicationDocumentSummary(_CamelModel):
    app_id: str = Field(alias="appId")
    slots: List[DocumentSlot] = []
    statuses: List[DocumentSlotStatus] = []
    alerts: List[AlertInfo] = []
    needs_action: bool = Field(default=False, alias="needsAction")
