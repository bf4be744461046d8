# -*- coding: utf-8 -*-

import struct

import pytest

from hashstore.codec import Record, decode, encode
from hashstore.errors import CorruptRecordError


@pytest.mark.parametrize(
    "record",
    [
        Record("a.txt", "text/plain", b"hello"),
        Record(None, None, b"\x00\x01\x02"),
        Record("", "", b"x"),
        Record(u"résumé.pdf", None, b"%PDF"),
        Record(None, "application/octet-stream", bytes(range(256)) * 4),
    ],
)
def test_codec_roundtrip(record):
    assert decode(encode(record)) == record


def test_codec_layout():
    data = encode(Record("ab", None, b"xyz"))

    assert data == (
        b"\x01" + struct.pack("<Q", 2) + b"ab"
        + b"\x00"
        + b"\x01" + struct.pack("<Q", 3) + b"xyz"
    )


def test_codec_deterministic():
    a = encode(Record("a.txt", "text/plain", b"hello"))
    b = encode(Record(origin_type="text/plain", content=b"hello", origin_name="a.txt"))

    assert a == b


def test_codec_absent_differs_from_empty():
    assert encode(Record(None, None, b"x")) != encode(Record("", "", b"x"))
    assert decode(encode(Record("", None, b"x"))).origin_name == ""
    assert decode(encode(Record(None, None, b"x"))).origin_name is None


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\x02",
        b"\x00\x00",
        b"\x00\x00\x00",
        b"\x00\x00\x01" + struct.pack("<Q", 10) + b"short",
        b"\x01" + struct.pack("<Q", 2) + b"\xff\xfe" + b"\x00\x01" + struct.pack("<Q", 1) + b"x",
        encode(Record(None, None, b"x")) + b"trailing",
    ],
)
def test_codec_decode_corrupt(data):
    with pytest.raises(CorruptRecordError):
        decode(data)
