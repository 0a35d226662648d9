"""
KeyVersion record: the bookkeeping fields of one key in a keyset.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictBool, StrictInt

from keyset.enums import KeyStatus


class KeyVersion(BaseModel):
    """
    One key within a keyset, identified by its version number.

    Only the bookkeeping fields live here; the key material itself is stored
    elsewhere by the owning key-management system.
    """
    version_number: StrictInt = Field(ge=0, alias="versionNumber")
    status: KeyStatus = KeyStatus.ACTIVE
    exportable: StrictBool = False

    model_config = {"populate_by_name": True, "frozen": True}

    def to_json_dict(self) -> dict:
        """Export as JSON-serializable dictionary using wire field names."""
        return self.model_dump(mode="json", by_alias=True)
