"""
Keyset Metadata - bookkeeping for versioned families of cryptographic keys.

Tracks a keyset's name, purpose, type and key versions, and round-trips
that inventory through a JSON document. No key material is handled here.
"""

__version__ = "0.1.0"

from keyset.enums import KeyPurpose, KeyStatus, KeyType
from keyset.metadata import KeyMetadata, MalformedMetadataError
from keyset.models import KeyVersion
from keyset.settings import Settings

__all__ = [
    "KeyMetadata",
    "KeyPurpose",
    "KeyStatus",
    "KeyType",
    "KeyVersion",
    "MalformedMetadataError",
    "Settings",
]
