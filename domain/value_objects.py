import hashlib
from dataclasses import dataclass


@dataclass(frozen=True)
class SlotKey:
    """
    Stable identity for a document slot.

    Catalog slots use the catalog id; ad-hoc slots hash their trimmed label.
    Existing records only carry the label, so matching still goes through
    the label. The key is for callers that want to start carrying it
    through uploads.
    """

    value: str
    source: str = "label"  # "catalog" | "label"

    @classmethod
    def for_catalog(cls, catalog_id: str) -> "SlotKey":
        return cls(value=str(catalog_id), source="catalog")

    @classmethod
    def for_label(cls, label: str) -> "SlotKey":
        digest = hashlib.sha1(label.strip().encode("utf-8")).hexdigest()[:12]
        return cls(value=f"extra-{digest}", source="label")
