from fastapi import APIRouter, HTTPException, status

from apps.api.schemas.documents import (
    AlertsOut,
    DocumentsOut,
    ParseMessageIn,
    RequestMessageIn,
    RequestMessageOut,
    ReviewIn,
    SlotsIn,
    StatusOut,
    UploadIn,
)
from domain.models import AdminMessageInfo, ApplicationSnapshot, DocumentSlot
from services.documents.alerts import summarize_application
from services.documents.message_parser import compose_request_message, parse_admin_message
from services.documents.review import (
    InvalidTransition,
    RecordNotFound,
    append_upload,
    apply_review_decision,
)
from services.documents.selector import select_documents
from services.documents.slot_status import get_slot_status
from services.documents.slots import get_document_slots
from services.documents.tones import alert_tone, slot_tone

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/messages/parse", response_model=AdminMessageInfo)
def parse_message(payload: ParseMessageIn):
    return parse_admin_message(payload.message)


@router.post("/messages/compose", response_model=RequestMessageOut)
def compose_message(payload: RequestMessageIn):
    return RequestMessageOut(message=compose_request_message(payload.labels, payload.note))


@router.post("/slots", response_model=list[DocumentSlot])
def document_slots(payload: SlotsIn):
    return get_document_slots(payload.catalog, payload.admin_message)


@router.post("/status", response_model=StatusOut)
def slot_status(snapshot: ApplicationSnapshot):
    slots = get_document_slots(snapshot.catalog, snapshot.admin_message)
    statuses = [get_slot_status(snapshot.documents, s) for s in slots]
    return StatusOut(
        app_id=snapshot.id,
        statuses=statuses,
        selected=select_documents(snapshot.documents, slots),
        slot_tones=[slot_tone(s) for s in statuses],
    )


@router.post("/alerts", response_model=AlertsOut)
def alerts(snapshot: ApplicationSnapshot):
    summary = summarize_application(snapshot)
    return AlertsOut(
        app_id=summary.app_id,
        alerts=summary.alerts,
        tones=[alert_tone(a) for a in summary.alerts],
        needs_action=summary.needs_action,
    )


@router.post("/upload", response_model=DocumentsOut, status_code=status.HTTP_201_CREATED)
def upload(payload: UploadIn):
    """Returns the next document array; the caller writes it back."""
    docs = append_upload(payload.documents, payload.doc_type, payload.file_name, payload.url)
    return DocumentsOut(documents=docs)


@router.post("/review", response_model=DocumentsOut)
def review(payload: ReviewIn):
    try:
        docs = apply_review_decision(
            payload.documents, payload.record_id, payload.status, payload.reason
        )
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return DocumentsOut(documents=docs)
