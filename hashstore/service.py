"""Module for RecordService class."""

import logging
from typing import Optional

from . import codec
from . import fingerprint as fp
from .codec import Record
from .dedup import DedupStore
from .errors import CorruptRecordError, NotFound, RecordTooBig, RecordTooSmall
from .kv import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_RECORD_SIZE = 100 * 1024 * 1024


class RecordService(object):
    """Content addressable record store.

    Records are keyed by the fingerprint of their canonical encoding, so
    storing the same payload and metadata twice yields the same key and a
    single stored copy.

    Attributes:
        kv (KeyValueStore): Injected backing store. Its lifecycle belongs
            to whoever constructed it.
        max_record_size (int): Largest accepted payload in bytes.
    """

    def __init__(self,
                 kv: KeyValueStore,
                 max_record_size: int = DEFAULT_MAX_RECORD_SIZE):
        self.kv = kv
        self.dedup = DedupStore(kv)
        self.max_record_size = max_record_size

    def check_size(self, size: int) -> None:
        """Apply the payload size policy to a payload or declared length.

        Raises:
            RecordTooSmall: If `size` is zero.
            RecordTooBig: If `size` exceeds :attr:`max_record_size`.
        """
        if size > self.max_record_size:
            raise RecordTooBig()
        if size <= 0:
            raise RecordTooSmall()

    def store(self,
              content: bytes,
              origin_name: Optional[str] = None,
              origin_type: Optional[str] = None) -> str:
        """Store `content` with its origin metadata and return its key.

        Args:
            content: Payload bytes.
            origin_name: Optional name the payload was uploaded under.
            origin_type: Optional media type of the payload.

        Returns:
            Lowercase hex fingerprint of the stored record.
        """
        self.check_size(len(content))

        data = codec.encode(Record(origin_name, origin_type, content))
        key = fp.fingerprint(data)
        result = self.dedup.put_if_absent(key, data)

        hexkey = fp.to_hex(key)
        if result.created:
            logger.info("Stored record %s (%d bytes)", hexkey, len(content))
        else:
            logger.debug("Record %s already stored", hexkey)

        return hexkey

    def retrieve(self, hexkey: str) -> Record:
        """Return the :class:`Record` stored under `hexkey`.

        Raises:
            InvalidKey: If `hexkey` is not a hex fingerprint.
            NotFound: If nothing is stored under `hexkey`.
            CorruptRecordError: If the stored bytes do not decode.
            StoreUnavailableError: If the store read fails.
        """
        key = fp.from_hex(hexkey)
        data = self.dedup.get(key)

        if data is None:
            raise NotFound()

        try:
            return codec.decode(data)
        except CorruptRecordError as exc:
            logger.error("Stored record %s does not decode: %s", hexkey, exc.message)
            raise CorruptRecordError() from exc
