"""Get-before-put deduplication on top of a key-value store."""

from collections import namedtuple
from contextlib import contextmanager
import logging
import threading
from typing import Optional

from .kv import KeyValueStore

logger = logging.getLogger(__name__)


class PutResult(namedtuple("PutResult", ["key", "created"])):
    """Outcome of :meth:`DedupStore.put_if_absent`.

    ``created`` is ``False`` when a value already existed under ``key`` and
    nothing was written.
    """

    pass


class KeyedLock(object):
    """Mutual exclusion scoped per key.

    Locks are created on first use and dropped once no thread holds or waits
    on them, so the table only grows with in-flight keys.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}

    @contextmanager
    def hold(self, key):
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if not entry[1]:
                    del self._locks[key]

    def __len__(self):
        return len(self._locks)


class DedupStore(object):
    """Keep at most one stored copy per fingerprint.

    Args:
        store (KeyValueStore): Backing store. Values must be a pure function of
            their key, which makes racing writes of one key idempotent.
        serialize_writes (bool, optional): Serialize writes per key. Defaults
            to ``not store.writes_are_atomic``.
    """

    def __init__(self,
                 store: KeyValueStore,
                 serialize_writes: Optional[bool] = None):
        self.store = store

        if serialize_writes is None:
            serialize_writes = not store.writes_are_atomic

        self._locks = KeyedLock() if serialize_writes else None

    def get(self, key: bytes) -> Optional[bytes]:
        return self.store.get(key)

    def put_if_absent(self, key: bytes, value: bytes) -> PutResult:
        """Write `value` under `key` unless something is already stored there.

        An existing value is assumed canonical for `key` and is not compared
        against `value`. Read or write failures propagate as
        :class:`StoreUnavailableError`; a failed read never leads to a write.
        """
        if self.store.get(key) is not None:
            return PutResult(key, False)

        if self._locks is None:
            self.store.put(key, value)
            return PutResult(key, True)

        with self._locks.hold(key):
            # Another writer may have finished while we waited.
            if self.store.get(key) is not None:
                return PutResult(key, False)

            self.store.put(key, value)

        return PutResult(key, True)
