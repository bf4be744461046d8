"""Module for the key-value stores records are persisted in."""

import binascii
import logging
import uuid
from typing import Optional, Union

import fs as pyfs
from fs.base import FS
from fs.permissions import Permissions

import hashstore.utils as u
from .errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class KeyValueStore(object):
    """Point read/write interface over an ordered persistent store.

    Implementations raise :class:`StoreUnavailableError` when the underlying
    engine fails. ``writes_are_atomic`` tells callers whether concurrent
    writers of the same key can be left unserialized.
    """

    writes_are_atomic = False

    def get(self, key: bytes) -> Optional[bytes]:
        """Return the value stored under `key`, or ``None`` if absent."""
        raise NotImplementedError

    def put(self, key: bytes, value: bytes) -> None:
        """Store `value` under `key`, replacing any existing value."""
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class FSKeyValueStore(KeyValueStore):
    """Key-value store laid out as sharded files on a pyfilesystem2 filesystem.

    Each key is hex encoded and split into nested folders, and its value is
    the content of the file at the end of that path.

    Attributes:
        root: Filesystem, FS URL or directory path used as root of storage
            space.
        depth (int, optional): Depth of subfolders to create when saving a
            value.
        width (int, optional): Width of each subfolder to create when saving a
            value.
        dmode (int, optional): Directory mode permission to set for
            subdirectories. Defaults to ``0o755``.
    """

    # Values are written to a temporary file and moved into place.
    writes_are_atomic = True

    def __init__(self,
                 root: Union[FS, str],
                 depth: Optional[int] = 2,
                 width: Optional[int] = 2,
                 dmode: Optional[int] = 0o755):

        self._owns_fs = not isinstance(root, FS)
        self.fs = u.load_fs(root)
        self.depth = depth
        self.width = width
        self.dmode = dmode

    def get(self, key: bytes) -> Optional[bytes]:
        path = self._key_to_path(key)

        try:
            return self.fs.readbytes(path)
        except pyfs.errors.ResourceNotFound:
            return None
        except (pyfs.errors.FSError, OSError) as exc:
            logger.warning("Read of %s failed: %s", path, exc)
            raise StoreUnavailableError("get") from exc

    def put(self, key: bytes, value: bytes) -> None:
        path = self._key_to_path(key)
        tmp_path = "{0}.{1}.tmp".format(path, uuid.uuid4().hex)

        try:
            self._makedirs(pyfs.path.dirname(path))
            self.fs.writebytes(tmp_path, value)
            self.fs.move(tmp_path, path, overwrite=True)
        except (pyfs.errors.FSError, OSError) as exc:
            logger.warning("Write of %s failed: %s", path, exc)
            self._discard(tmp_path)
            raise StoreUnavailableError("put") from exc

    def close(self) -> None:
        """Close the backing filesystem if this store opened it."""
        if self._owns_fs:
            self.fs.close()

    def __contains__(self, key: bytes) -> bool:
        return self.fs.isfile(self._key_to_path(key))

    def _makedirs(self, dir_path):
        """Physically create the folder path."""
        perms = Permissions.create(self.dmode)
        self.fs.makedirs(dir_path, permissions=perms, recreate=True)

    def _discard(self, path):
        try:
            self.fs.remove(path)
        except pyfs.errors.FSError:
            # Nothing was written, or the move already consumed it.
            return None

    def _key_to_path(self, key: bytes) -> str:
        """Build the relative file path for a given key."""
        hexkey = binascii.hexlify(key).decode("ascii")
        return pyfs.path.join(*u.shard(hexkey, self.depth, self.width))
