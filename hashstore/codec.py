# -*- coding: utf-8 -*-
"""Canonical encoding of records.

A record is serialized field by field in schema order (``origin_name``,
``origin_type``, ``content``). Every field is optional on the wire and is
written as a one byte presence tag followed, when present, by a little-endian
``u64`` length and the raw bytes. The same bytes are hashed for the record key
and persisted as the stored value, so the encoding must stay deterministic.
"""

from collections import namedtuple
import struct
from typing import Optional

from .errors import CorruptRecordError


ABSENT = b"\x00"
PRESENT = b"\x01"

_LENGTH = struct.Struct("<Q")


class Record(namedtuple("Record", ["origin_name", "origin_type", "content"])):
    """Stored unit: payload bytes plus advisory origin metadata.

    Attributes:
        origin_name (str, optional): Name the payload was uploaded under.
        origin_type (str, optional): Media type the payload was uploaded as.
        content (bytes): Payload.
    """

    __slots__ = ()

    def __new__(cls, origin_name=None, origin_type=None, content=b""):
        return super(Record, cls).__new__(cls, origin_name, origin_type, content)


def encode(record: Record) -> bytes:
    """Return the canonical byte encoding of `record`."""
    parts = []
    _write_field(parts, _text_to_bytes(record.origin_name))
    _write_field(parts, _text_to_bytes(record.origin_type))
    _write_field(parts, bytes(record.content))
    return b"".join(parts)


def decode(data: bytes) -> Record:
    """Rebuild a :class:`Record` from its canonical encoding.

    Raises:
        CorruptRecordError: If `data` does not match the record layout.
    """
    reader = _Reader(data)
    origin_name = _bytes_to_text(reader.field())
    origin_type = _bytes_to_text(reader.field())
    content = reader.field()

    if content is None:
        raise CorruptRecordError("Corrupt stored record [content is absent]")

    if not reader.exhausted:
        raise CorruptRecordError("Corrupt stored record [trailing bytes]")

    return Record(origin_name, origin_type, content)


def _write_field(parts, value):
    if value is None:
        parts.append(ABSENT)
    else:
        parts.append(PRESENT)
        parts.append(_LENGTH.pack(len(value)))
        parts.append(value)


def _text_to_bytes(text: Optional[str]) -> Optional[bytes]:
    if text is None:
        return None
    return text.encode("utf-8")


def _bytes_to_text(data: Optional[bytes]) -> Optional[str]:
    if data is None:
        return None

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise CorruptRecordError("Corrupt stored record [invalid utf-8]")


class _Reader(object):
    """Sequential reader over an encoded record."""

    def __init__(self, data):
        self._data = memoryview(bytes(data))
        self._pos = 0

    @property
    def exhausted(self):
        return self._pos == len(self._data)

    def take(self, size):
        end = self._pos + size
        if end > len(self._data):
            raise CorruptRecordError("Corrupt stored record [truncated]")

        chunk = self._data[self._pos : end].tobytes()
        self._pos = end
        return chunk

    def field(self):
        tag = self.take(1)

        if tag == ABSENT:
            return None
        if tag != PRESENT:
            raise CorruptRecordError("Corrupt stored record [unknown field tag]")

        (size,) = _LENGTH.unpack(self.take(_LENGTH.size))
        return self.take(size)
