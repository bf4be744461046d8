# -*- coding: utf-8 -*-
"""Content addresses for encoded records."""

import binascii
import hashlib

from .errors import InvalidKey


ALGORITHM = "md5"
DIGEST_SIZE = 16


def fingerprint(data: bytes) -> bytes:
    """Return the 16 byte digest of `data`.

    MD5 is used for speed and stability across platforms, not for collision
    resistance. Encodings sharing a digest are treated as the same record.
    """
    return hashlib.new(ALGORITHM, data).digest()


def to_hex(digest: bytes) -> str:
    """Return the lowercase hex form of `digest` used as the external key."""
    return binascii.hexlify(digest).decode("ascii")


def from_hex(key: str) -> bytes:
    """Parse an external record key back into raw digest bytes.

    Raises:
        InvalidKey: If `key` is not hex or is not exactly
            :data:`DIGEST_SIZE` bytes long.
    """
    try:
        digest = binascii.unhexlify(key)
    except (TypeError, ValueError):
        raise InvalidKey()

    if len(digest) != DIGEST_SIZE:
        raise InvalidKey()

    return digest
