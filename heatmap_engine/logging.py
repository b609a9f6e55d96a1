import logging
import os
from logging.handlers import RotatingFileHandler

from heatmap_engine import constants

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def default_log_folder():
    # Debug runs (tests, replays on a laptop) shouldn't need the device's log folder.
    if __debug__:
        return '/tmp/'
    return constants.LOG_FILES_FOLDER


def create_rotating_log(name, log_folder=None):
    """
    Logger for one app that writes to <log_folder>/<name>.log, rotating at 10 MB.
    Calling this again for the same name and folder reuses the existing handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    log_filename = os.path.abspath(
        os.path.join(log_folder or default_log_folder(), "{}.log".format(name))
    )
    for handler in logger.handlers:
        if getattr(handler, "baseFilename", None) == log_filename:
            return logger

    rh = RotatingFileHandler(log_filename, maxBytes=MAX_LOG_BYTES,
                             backupCount=LOG_BACKUP_COUNT)
    rh.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(rh)
    return logger
