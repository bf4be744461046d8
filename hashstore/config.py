"""Runtime settings read from the environment.

A ``.env`` file in the working directory is loaded first, so any variable
below can be set there.
"""

from collections import namedtuple
import os

from dotenv import load_dotenv

from .service import DEFAULT_MAX_RECORD_SIZE


class Settings(namedtuple("Settings", [
        "store_dir",
        "max_record_size",
        "host",
        "port",
        "request_timeout",
        "concurrency_limit",
        "log_dir",
        "log_level",
])):
    """Immutable server settings. Build with :meth:`from_env`."""

    __slots__ = ()

    @classmethod
    def from_env(cls, environ=None, dotenv=True):
        """Return settings from `environ` (defaults to ``os.environ``).

        Raises:
            ValueError: If a numeric variable does not parse.
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        return cls(
            store_dir=environ.get("OSS_STORE_DIR", "oss_store"),
            max_record_size=_int(environ, "OSS_MAX_RECORD_SIZE",
                                 DEFAULT_MAX_RECORD_SIZE),
            host=environ.get("OSS_HOST", "0.0.0.0"),
            port=_int(environ, "OSS_PORT", 3000),
            request_timeout=float(environ.get("OSS_REQUEST_TIMEOUT", "10")),
            concurrency_limit=_int(environ, "OSS_CONCURRENCY_LIMIT", 1024),
            log_dir=environ.get("OSS_LOG_DIR", "log"),
            log_level=environ.get("OSS_LOG_LEVEL", "DEBUG").upper(),
        )


def _int(environ, name, default):
    value = environ.get(name)
    if value is None or value == "":
        return default

    try:
        return int(value)
    except ValueError:
        raise ValueError("{0} must be an integer, got {1!r}".format(name, value))
