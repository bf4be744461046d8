"""Run the hashstore HTTP server.

Settings come from the environment (see :mod:`hashstore.config`).
"""

import logging

import uvicorn

from .api import create_app
from .config import Settings
from .kv import FSKeyValueStore
from .logs import init_logging
from .service import RecordService

logger = logging.getLogger("hashstore")


def main():
    settings = Settings.from_env()
    init_logging(settings)

    with FSKeyValueStore(settings.store_dir) as kv:
        service = RecordService(kv, max_record_size=settings.max_record_size)
        app = create_app(service,
                         request_timeout=settings.request_timeout,
                         concurrency_limit=settings.concurrency_limit)

        logger.info("listening on %s:%d, store at %s",
                    settings.host, settings.port, settings.store_dir)
        # uvicorn handles SIGINT/SIGTERM with a graceful shutdown.
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)

    logger.info("store closed, exiting")


if __name__ == "__main__":
    main()
