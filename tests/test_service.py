# -*- coding: utf-8 -*-

import pytest

from hashstore import Record, RecordService
from hashstore.errors import (
    CorruptRecordError,
    InvalidKey,
    NotFound,
    RecordTooBig,
    RecordTooSmall,
    StoreUnavailableError,
)
from hashstore.fingerprint import DIGEST_SIZE, from_hex


def test_service_store_retrieve(service):
    key = service.store(b"hello", "a.txt", "text/plain")

    assert key == key.lower()
    assert len(key) == DIGEST_SIZE * 2
    assert service.retrieve(key) == Record("a.txt", "text/plain", b"hello")


def test_service_store_without_metadata(service):
    key = service.store(b"hello")

    record = service.retrieve(key)
    assert record.origin_name is None
    assert record.origin_type is None
    assert record.content == b"hello"


def test_service_store_idempotent(service, memfs):
    key_a = service.store(b"hello", "a.txt", "text/plain")
    stored = memfs.readbytes(service.kv._key_to_path(from_hex(key_a)))
    key_b = service.store(b"hello", "a.txt", "text/plain")

    assert key_a == key_b
    assert len(list(memfs.walk.files())) == 1
    assert memfs.readbytes(service.kv._key_to_path(from_hex(key_b))) == stored


def test_service_content_addressed(service):
    assert service.store(b"hello") != service.store(b"world")


def test_service_metadata_is_addressed(service):
    key_a = service.store(b"hello", "a.txt", "text/plain")
    key_b = service.store(b"hello", "b.txt", "text/plain")
    key_c = service.store(b"hello")

    assert len({key_a, key_b, key_c}) == 3
    assert service.retrieve(key_b).origin_name == "b.txt"


@pytest.mark.parametrize(
    "content,error",
    [
        (b"", RecordTooSmall),
        (b"x" * 65, RecordTooBig),
    ],
)
def test_service_store_size_policy(dictstore, content, error):
    service = RecordService(dictstore, max_record_size=64)

    with pytest.raises(error):
        service.store(content, "a.txt", "text/plain")

    assert dictstore.gets == 0
    assert dictstore.puts == 0


def test_service_store_max_size(dictstore):
    service = RecordService(dictstore, max_record_size=64)

    service.store(b"x" * 64)

    assert dictstore.puts == 1


@pytest.mark.parametrize("size", [0, -1])
def test_service_check_size_too_small(service, size):
    with pytest.raises(RecordTooSmall):
        service.check_size(size)


def test_service_retrieve_invalid_key(service):
    with pytest.raises(InvalidKey):
        service.retrieve("not-hex")


def test_service_retrieve_not_found(service):
    with pytest.raises(NotFound):
        service.retrieve("0" * DIGEST_SIZE * 2)


def test_service_retrieve_corrupt(service, memfs):
    key = service.store(b"hello")
    memfs.writebytes(service.kv._key_to_path(from_hex(key)), b"\x07garbage")

    with pytest.raises(CorruptRecordError) as excinfo:
        service.retrieve(key)

    assert excinfo.value.message == "Corrupt stored record [record key]"
    assert isinstance(excinfo.value.__cause__, CorruptRecordError)


def test_service_retrieve_store_error(service, memfs):
    key = service.store(b"hello")
    memfs.close()

    with pytest.raises(StoreUnavailableError):
        service.retrieve(key)
