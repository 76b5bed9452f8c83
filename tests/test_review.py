import copy
from datetime import datetime, timezone

import pytest

from conftest import rec
from domain.models import DocumentRecord, DocumentSlot, DocumentStatus
from services.documents.review import (
    InvalidTransition,
    RecordNotFound,
    StaleDocumentList,
    append_upload,
    apply_review_decision,
    check_version,
)
from services.documents.slot_status import get_slot_status


def test_append_upload_keeps_history():
    records = [rec("A", "rejected", id="old")]
    when = datetime(2026, 1, 5, tzinfo=timezone.utc)
    out = append_upload(records, " A ", file_name="a.pdf", url="https://files/a.pdf", uploaded_at=when)
    assert len(out) == 2
    assert out[0] is records[0]
    new = out[1]
    assert new["docType"] == "A"
    assert new["status"] == "pending_review"
    assert new["fileName"] == "a.pdf"
    assert datetime.fromisoformat(new["uploadedAt"].replace("Z", "+00:00")) == when
    assert new["id"] and new["id"] != "old"
    assert len(records) == 1

    status = get_slot_status(out, DocumentSlot(label="A"))
    assert status.has_rejected and status.has_pending_review and not status.all_rejected


def test_append_upload_leaves_odd_records_byte_for_byte():
    records = [
        {"id": 17, "docType": "A", "status": "rejected", "uploadedAt": "last tuesday"},
        {"id": "x", "docType": "B", "status": "archived", "fileName": {"raw": 1}},
        "not even a record",
    ]
    before = copy.deepcopy(records)
    out = append_upload(records, "A", file_name="a.pdf")
    assert out[:3] == before
    assert records == before
    assert len(out) == 4


def test_parsed_records_are_written_back_in_stored_shape():
    parsed = DocumentRecord.model_validate(rec("A", "accepted", id="1", fileUrl="https://f/a"))
    out = append_upload([parsed], "B")
    assert out[0] == {"id": "1", "docType": "A", "status": "accepted", "fileUrl": "https://f/a"}


def test_reject_sets_reason_and_accept_clears_it():
    records = [rec("A", "pending_review", id="1"), rec("B", id="2")]
    rejected = apply_review_decision(records, "1", "rejected", reason="blurry scan")
    assert rejected[0]["status"] == "rejected"
    assert rejected[0]["rejectionReason"] == "blurry scan"
    assert rejected[1] is records[1]

    accepted = apply_review_decision(rejected, "1", DocumentStatus.ACCEPTED, reason="ignored")
    assert accepted[0]["status"] == "accepted"
    assert "rejectionReason" not in accepted[0]
    # input lists untouched
    assert rejected[0]["status"] == "rejected"
    assert records[0]["status"] == "pending_review"


def test_review_only_touches_status_fields():
    records = [{"id": 17, "docType": "A", "uploadedAt": "not a date", "fileName": {"raw": 1}}]
    out = apply_review_decision(records, "17", "accepted")
    assert out[0] == {"id": 17, "docType": "A", "uploadedAt": "not a date", "fileName": {"raw": 1}, "status": "accepted"}


def test_unknown_record():
    with pytest.raises(RecordNotFound):
        apply_review_decision([rec("A", id="1")], "nope", "accepted")


def test_unknown_target_status_is_a_review_error():
    with pytest.raises(InvalidTransition):
        apply_review_decision([rec("A", id="1")], "1", "maybe")


def test_cannot_move_back_to_pending():
    with pytest.raises(InvalidTransition):
        apply_review_decision([rec("A", "accepted", id="1")], "1", "pending_review")


def test_legacy_and_unknown_statuses_can_be_reviewed():
    out = apply_review_decision([rec("A", id="1"), rec("A", "archived", id="2")], "1", "accepted")
    assert out[0]["status"] == "accepted"
    out = apply_review_decision(out, "2", "rejected", reason="expired")
    assert out[1]["status"] == "rejected"


def test_transition_table():
    assert DocumentStatus.PENDING_REVIEW.can_transition_to(DocumentStatus.ACCEPTED)
    assert DocumentStatus.ACCEPTED.can_transition_to(DocumentStatus.REJECTED)
    assert DocumentStatus.REJECTED.can_transition_to(DocumentStatus.ACCEPTED)
    assert not DocumentStatus.REJECTED.can_transition_to(DocumentStatus.PENDING_REVIEW)


def test_check_version():
    check_version(3, 3)
    with pytest.raises(StaleDocumentList):
        check_version(3, 4)
