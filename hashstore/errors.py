# -*- coding: utf-8 -*-
"""Exceptions raised by hashstore.

Every error carries the message and HTTP status the HTTP boundary reports for
it. Client input faults are 4xx; storage and data faults are 5xx.
"""


class HashStoreError(Exception):
    """Base class for all hashstore errors."""

    message = "Unhandled internal error"
    status_code = 500

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super(HashStoreError, self).__init__(self.message)

    @property
    def is_server_fault(self):
        return self.status_code >= 500


class InvalidKey(HashStoreError):
    """Record key is not a hex encoded fingerprint of the expected length."""

    message = "Invalid hex string [record key]"
    status_code = 400


class NotFound(HashStoreError):
    """Nothing is stored under the record key."""

    message = "Not found [record key]"
    status_code = 400


class RecordTooSmall(HashStoreError):
    """Payload is empty."""

    message = "Invalid stored record [size is too small]"
    status_code = 400


class RecordTooBig(HashStoreError):
    """Payload, declared or received, exceeds the size ceiling."""

    message = "Invalid stored record [size is too big]"
    status_code = 400


class HttpHeaderNotFound(HashStoreError):
    """Upload lacks a usable ``Content-Length`` header."""

    message = "Not found valid header [content-length]"
    status_code = 400


class HttpBodyReadError(HashStoreError):
    """Client went away while the upload body was streaming."""

    message = "Read body stream error"
    status_code = 500


class CorruptRecordError(HashStoreError):
    """Stored bytes do not decode as a record.

    This points at storage-layer corruption, not at the client.
    """

    message = "Corrupt stored record [record key]"
    status_code = 500


class StoreUnavailableError(HashStoreError):
    """The backing key-value store failed a read or a write.

    Args:
        operation (str): ``'get'`` or ``'put'``.
    """

    messages = {
        "get": "Get error [record key]",
        "put": "Put error [record]",
    }
    status_code = 500

    def __init__(self, operation="get", message=None):
        self.operation = operation
        if message is None:
            message = self.messages.get(operation, HashStoreError.message)
        super(StoreUnavailableError, self).__init__(message)
