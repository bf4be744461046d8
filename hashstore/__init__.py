# -*- coding: utf-8 -*-
"""HashStore is a content-addressable record store. Uploaded payloads, together
with their origin name and type, are saved under the hash of their canonical
encoding and served back by that key over HTTP.

Typical use cases for this kind of system are ones where:

- Payloads are written once and never change (e.g. attachments).
- It's desirable to have no duplicate payloads (e.g. user uploads).
- Keys are handed out and tracked elsewhere (e.g. in a database).
"""

from .__meta__ import (
    __title__,
    __summary__,
    __url__,
    __version__,
    __author__,
    __email__,
    __license__,
)

from .codec import Record
from .errors import (
    HashStoreError,
    InvalidKey,
    NotFound,
    RecordTooSmall,
    RecordTooBig,
    CorruptRecordError,
    StoreUnavailableError,
)
from .kv import KeyValueStore, FSKeyValueStore
from .service import RecordService


__all__ = (
    "Record",
    "RecordService",
    "KeyValueStore",
    "FSKeyValueStore",
    "HashStoreError",
    "InvalidKey",
    "NotFound",
    "RecordTooSmall",
    "RecordTooBig",
    "CorruptRecordError",
    "StoreUnavailableError",
)
