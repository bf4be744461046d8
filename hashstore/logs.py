"""Process logging setup."""

import logging
import os
import sys

LOG_FILE = "oss-server.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s:%(lineno)d] %(message)s"


def init_logging(settings, logger_name="hashstore"):
    """Send `logger_name` records to ``<log_dir>/oss-server.log`` and stdout.

    Calling this again replaces the handlers it installed before.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(settings.log_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    os.makedirs(settings.log_dir, exist_ok=True)
    file_handler = logging.FileHandler(os.path.join(settings.log_dir, LOG_FILE))
    stream_handler = logging.StreamHandler(sys.stdout)

    for handler in (file_handler, stream_handler):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
