"""
Keyset metadata registry.

A KeyMetadata describes one keyset: a string-valued name, a KeyPurpose,
a KeyType and the ordered set of KeyVersion records that belong to it.

Document schema:
  {
    "name": "signing-key",
    "purpose": "SIGN_AND_VERIFY",
    "type": "RSA_PRIV",
    "versions": [
      {"versionNumber": 1, "status": "PRIMARY", "exportable": false}
    ]
  }

The version list is the only stored form of the versions. The lookup map
keyed by version number is rebuilt from it whenever a document is read.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, StrictStr, ValidationError

from keyset.enums import KeyPurpose, KeyStatus, KeyType
from keyset.models import KeyVersion
from keyset.settings import Settings

logger = logging.getLogger(__name__)


class MalformedMetadataError(ValueError):
    """Raised when a metadata document cannot be decoded into a keyset."""
    pass


class _MetadataDocument(BaseModel):
    name: StrictStr
    purpose: KeyPurpose
    type: KeyType
    versions: List[KeyVersion]


def _describe(exc: ValidationError) -> str:
    errors = exc.errors()
    err = errors[0]
    loc = ".".join(str(part) for part in err["loc"]) or "<document>"
    msg = f"{loc}: {err['msg']}"
    if len(errors) > 1:
        msg += f" (and {len(errors) - 1} more)"
    return msg


class KeyMetadata:
    """
    Name, purpose, type and versions of a keyset.

    Versions are kept in insertion order, which is also the order they are
    written in. Version numbers are unique within a keyset.

    Usage:
        kmd = KeyMetadata("signing-key", KeyPurpose.SIGN_AND_VERIFY, KeyType.RSA_PRIV)
        kmd.add_version(KeyVersion(version_number=1, status=KeyStatus.PRIMARY))
        text = kmd.write()
        same = KeyMetadata.read(text)
    """

    def __init__(self, name: str, purpose: KeyPurpose, key_type: KeyType):
        self._name = name
        self._purpose = KeyPurpose(purpose)
        self._type = KeyType(key_type)
        self._versions: List[KeyVersion] = []
        self._version_map: Dict[int, KeyVersion] = {}  # version number -> version

    @property
    def name(self) -> str:
        return self._name

    @property
    def purpose(self) -> KeyPurpose:
        return self._purpose

    @property
    def type(self) -> KeyType:
        return self._type

    # ------------------------------------------------------------------
    # Versions
    # ------------------------------------------------------------------

    def add_version(self, version: KeyVersion) -> bool:
        """
        Append a key version to the keyset.

        Args:
            version: KeyVersion to be added

        Returns:
            True if added, False if the version number is already taken
        """
        number = version.version_number
        if number in self._version_map:
            logger.debug(f"Version {number} already present in keyset {self._name!r}")
            return False
        self._versions.append(version)
        self._version_map[number] = version
        return True

    def remove_version(self, version_number: int) -> bool:
        """
        Remove the key version with the given number.

        Returns:
            True if the version existed and was removed, False otherwise
        """
        version = self._version_map.get(version_number)
        if version is None:
            logger.debug(f"Version {version_number} not found in keyset {self._name!r}")
            return False
        for i, candidate in enumerate(self._versions):
            if candidate is version:
                del self._versions[i]
                break
        del self._version_map[version_number]
        return True

    def get_version(self, version_number: int) -> Optional[KeyVersion]:
        """Return the version with this number, or None if nonexistent."""
        return self._version_map.get(version_number)

    def get_versions(self) -> Tuple[KeyVersion, ...]:
        """Snapshot of all versions in insertion order."""
        return tuple(self._versions)

    def get_primary_version(self) -> Optional[KeyVersion]:
        """First version (in insertion order) whose status is PRIMARY."""
        for version in self._versions:
            if version.status == KeyStatus.PRIMARY:
                return version
        return None

    def __len__(self) -> int:
        return len(self._versions)

    def __iter__(self) -> Iterator[KeyVersion]:
        return iter(tuple(self._versions))

    def __contains__(self, version_number: object) -> bool:
        return version_number in self._version_map

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyMetadata):
            return NotImplemented
        return (
            self._name == other._name
            and self._purpose == other._purpose
            and self._type == other._type
            and self._versions == other._versions
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        numbers = [v.version_number for v in self._versions]
        return (
            f"KeyMetadata(name={self._name!r}, purpose={self._purpose.value}, "
            f"type={self._type.value}, versions={numbers})"
        )

    def __str__(self) -> str:
        return self.write()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Export as JSON-serializable dictionary (the version map is not included)."""
        return {
            "name": self._name,
            "purpose": self._purpose.value,
            "type": self._type.value,
            "versions": [v.to_json_dict() for v in self._versions],
        }

    def write(self, settings: Optional[Settings] = None) -> str:
        """
        Encode this keyset as a JSON document.

        Compact and unsorted unless settings are passed; hosts that want the
        environment-driven format pass Settings.load().
        """
        settings = settings or Settings()
        return json.dumps(
            self.to_dict(),
            indent=settings.JSON_INDENT,
            sort_keys=settings.JSON_SORT_KEYS,
        )

    @classmethod
    def from_dict(cls, data: Any) -> KeyMetadata:
        """
        Build a keyset from an already-decoded document.

        Raises:
            MalformedMetadataError: if a field is missing or invalid, or a
                version number appears more than once
        """
        if not isinstance(data, dict):
            logger.error(f"Keyset metadata must be an object, got {type(data).__name__}")
            raise MalformedMetadataError(
                f"Keyset metadata must be a JSON object, got {type(data).__name__}"
            )
        try:
            doc = _MetadataDocument.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid keyset metadata: {_describe(e)}")
            raise MalformedMetadataError(f"Invalid keyset metadata: {_describe(e)}") from e

        kmd = cls(doc.name, doc.purpose, doc.type)
        for version in doc.versions:
            # Duplicates are rejected rather than shadowed in the version map
            if not kmd.add_version(version):
                logger.error(f"Duplicate version {version.version_number} in keyset {doc.name!r}")
                raise MalformedMetadataError(
                    f"Duplicate version number {version.version_number} in keyset {doc.name!r}"
                )
        return kmd

    @classmethod
    def read(cls, json_string: str) -> KeyMetadata:
        """
        Decode a keyset from a JSON document.

        Raises:
            MalformedMetadataError: if the text is not valid JSON or does not
                describe a keyset
        """
        try:
            data = json.loads(json_string)
        except (TypeError, ValueError) as e:
            logger.error(f"Keyset metadata is not valid JSON: {e}")
            raise MalformedMetadataError(f"Keyset metadata is not valid JSON: {e}") from e
        kmd = cls.from_dict(data)
        logger.debug(f"Read keyset {kmd.name!r} with {len(kmd)} versions")
        return kmd
