import pytest

from conftest import rec
from domain.models import DocumentSlot, DocumentStatus, SlotState
from services.documents.selector import select_documents
from services.documents.slot_status import (
    get_doc_for_slot,
    get_docs_for_slot,
    get_rejected_details,
    get_slot_status,
)

SLOT = DocumentSlot(label="CIN copy")


def test_matching_trims_both_sides_and_is_case_sensitive():
    records = [rec(" CIN copy "), rec("cin copy"), rec("Income certificate")]
    docs = get_docs_for_slot(records, "  CIN copy")
    assert [d.doc_type for d in docs] == [" CIN copy "]


@pytest.mark.parametrize("records", [None, "oops", 42, {"docType": "CIN copy"}])
def test_bad_record_collections_are_empty(records):
    status = get_slot_status(records, SLOT)
    assert status.is_empty is True
    assert status.documents == []


def test_non_dict_items_are_skipped():
    status = get_slot_status([None, "x", rec("CIN copy", "accepted")], SLOT)
    assert len(status.documents) == 1
    assert status.has_accepted


def test_empty_slot():
    status = get_slot_status([], SLOT)
    assert status.is_empty
    assert not (status.has_accepted or status.has_pending_review or status.has_rejected)
    assert status.all_rejected is False
    assert status.state is SlotState.EMPTY


def test_missing_status_counts_as_pending():
    status = get_slot_status([rec("CIN copy"), rec("CIN copy", "", id="blank")], SLOT)
    assert status.has_pending_review
    assert not status.has_accepted
    assert status.state is SlotState.PENDING
    assert all(d.effective_status is DocumentStatus.PENDING_REVIEW for d in status.documents)


def test_unknown_status_is_kept_and_counts_as_nothing():
    records = [rec("CIN copy", "rejected", id="a"), rec("CIN copy", "archived", id="b")]
    status = get_slot_status(records, SLOT)
    assert status.has_rejected
    assert not status.has_pending_review
    assert status.all_rejected is False
    archived = status.documents[1]
    assert archived.status == "archived"
    assert archived.effective_status is None
    assert get_doc_for_slot([rec("CIN copy", "archived", id="b")], "CIN copy").id == "b"


def test_all_rejected():
    status = get_slot_status([rec("CIN copy", "rejected", id="a"), rec("CIN copy", "rejected", id="b")], SLOT)
    assert status.all_rejected and status.has_rejected
    assert status.state is SlotState.REJECTED


def test_flags_are_not_exclusive():
    records = [rec("CIN copy", "accepted"), rec("CIN copy", "rejected"), rec("CIN copy", "pending_review")]
    status = get_slot_status(records, SLOT)
    assert status.has_accepted and status.has_rejected and status.has_pending_review
    assert status.all_rejected is False
    assert status.state is SlotState.MIXED


def test_resubmission_after_rejection_is_pending():
    status = get_slot_status([rec("CIN copy", "rejected"), rec("CIN copy", "pending_review")], SLOT)
    assert status.has_rejected and not status.all_rejected
    assert status.state is SlotState.PENDING


def test_representative_doc_prefers_rejected_over_accepted():
    records = [
        rec("CIN copy", "pending_review"),
        rec("CIN copy", "accepted"),
        rec("CIN copy", "rejected"),
    ]
    assert get_doc_for_slot(records, "CIN copy").id == "CIN copy-rejected"
    assert get_doc_for_slot(records[:2], "CIN copy").id == "CIN copy-accepted"
    assert get_doc_for_slot(records[:1], "CIN copy").id == "CIN copy-pending_review"
    assert get_doc_for_slot(records, "Other") is None


def test_representative_doc_unset_status_is_pending():
    records = [rec("CIN copy", id="legacy")]
    assert get_doc_for_slot(records, "CIN copy").id == "legacy"


def test_rejected_details():
    slots = [SLOT, DocumentSlot(label="Income certificate")]
    records = [
        rec("CIN copy", "rejected", id="a"),
        rec("CIN copy", "rejected", id="b", rejectionReason="blurry"),
        rec("Income certificate", "rejected", id="c"),
        rec("Income certificate", "accepted", id="d"),
    ]
    assert get_rejected_details(records, slots) == {"CIN copy": "blurry"}


def test_select_documents_one_row_per_slot():
    slots = [SLOT, DocumentSlot(label="Income certificate")]
    rows = select_documents([rec("CIN copy", "accepted")], slots)
    assert [r.slot.label for r in rows] == ["CIN copy", "Income certificate"]
    assert rows[0].document.id == "CIN copy-accepted"
    assert rows[0].state is SlotState.ACCEPTED
    assert rows[1].document is None
    assert rows[1].state is SlotState.EMPTY


def test_legacy_fields_are_tolerated():
    records = [rec("CIN copy", "accepted", uploadedAt="not a date", fileUrl="https://x/y.pdf")]
    doc = get_doc_for_slot(records, "CIN copy")
    assert doc.uploaded_at is None
    assert doc.model_dump(by_alias=True)["fileUrl"] == "https://x/y.pdf"


def test_odd_presentation_fields_do_not_drop_records():
    records = [
        {"id": 17, "docType": "CIN copy", "status": "accepted", "fileName": {"nested": True}},
        {"id": "ok", "docType": "CIN copy", "url": 42, "rejectionReason": ["x"]},
    ]
    status = get_slot_status(records, SLOT)
    assert [d.id for d in status.documents] == ["17", "ok"]
    assert status.has_accepted and status.has_pending_review
    assert status.documents[0].file_name is None
    assert status.documents[1].url == "42"
