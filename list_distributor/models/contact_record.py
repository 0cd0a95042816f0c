from __future__ import annotations

from dataclasses import dataclass

"""ContactRecord model.

ContactRecord is the normalized shape every input row is reduced to after
column resolution. Rows without a first name or phone never become a
ContactRecord (see ingest.reader.resolve_row).
"""

__all__ = [
    "ContactRecord",
]


@dataclass(frozen=True)
class ContactRecord:
    """One normalized contact line from an uploaded file.

    Attributes:
        first_name: Trimmed first name, never empty
        phone: Trimmed phone / mobile number, never empty
        notes: Trimmed notes, "" when the file has no notes column or the cell is blank
    """
    first_name: str
    phone: str
    notes: str = ""

    def to_dict(self) -> dict[str, str]:
        """Storage shape (camelCase keys, as kept in the list documents)."""
        return {
            "firstName": self.first_name,
            "phone": self.phone,
            "notes": self.notes,
        }
