# -*- coding: utf-8 -*-

import pytest
from fs.memoryfs import MemoryFS

from hashstore import FSKeyValueStore, KeyValueStore, RecordService


class DictStore(KeyValueStore):
    """In-memory store that counts calls, for asserting on store traffic."""

    def __init__(self, writes_are_atomic=False):
        self.data = {}
        self.gets = 0
        self.puts = 0
        self.writes_are_atomic = writes_are_atomic

    def get(self, key):
        self.gets += 1
        return self.data.get(key)

    def put(self, key, value):
        self.puts += 1
        self.data[key] = value


@pytest.fixture
def memfs():
    filesystem = MemoryFS()
    yield filesystem
    filesystem.close()


@pytest.fixture
def kv(memfs):
    return FSKeyValueStore(memfs)


@pytest.fixture
def dictstore():
    return DictStore()


@pytest.fixture
def service(kv):
    return RecordService(kv, max_record_size=64)
