import pytest

HEADER = "المطلوب:"


def rec(doc_type, status=None, **extra):
    data = {"id": extra.pop("id", f"{doc_type}-{status}"), "docType": doc_type}
    if status is not None:
        data["status"] = status
    data.update(extra)
    return data


@pytest.fixture
def catalog():
    return [
        {"id": "cin", "label": "CIN copy", "sort_order": 1},
        {"id": "income", "label": "Income certificate", "sort_order": 2},
    ]
