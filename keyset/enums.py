"""
Closed tag sets describing a keyset.

The enum values are the spellings written to and read from the metadata
document, so renaming a member's value breaks stored keysets.
"""

from __future__ import annotations

from enum import Enum


class KeyPurpose(str, Enum):
    """Intended use of every key in a keyset."""
    DECRYPT_AND_ENCRYPT = "DECRYPT_AND_ENCRYPT"
    ENCRYPT = "ENCRYPT"  # public-key encryption only
    SIGN_AND_VERIFY = "SIGN_AND_VERIFY"
    VERIFY = "VERIFY"  # public-key verification only
    TEST = "TEST"


class KeyType(str, Enum):
    """Algorithm family of the keys in a keyset."""
    AES = "AES"
    HMAC_SHA1 = "HMAC_SHA1"
    DSA_PRIV = "DSA_PRIV"
    DSA_PUB = "DSA_PUB"
    RSA_PRIV = "RSA_PRIV"
    RSA_PUB = "RSA_PUB"
    TEST = "TEST"


class KeyStatus(str, Enum):
    """
    Lifecycle status of a single key version.

    - PRIMARY: used for new signatures/ciphertexts
    - ACTIVE: still accepted for verification/decryption
    - INACTIVE: retained but scheduled for removal
    """
    PRIMARY = "PRIMARY"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
