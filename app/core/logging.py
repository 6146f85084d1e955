import logging
import os
from typing import Optional, Union

from colorlog import ColoredFormatter

# Libraries that are chatty at INFO; kept at WARNING unless LOG_LEVEL=DEBUG
QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "aiosqlite",
    "multipart",
    "urllib3",
    "google.auth",
    "cachecontrol",
)

LOG_FORMAT = (
    "%(log_color)s%(levelname)-8s%(reset)s | "
    "%(blue)s%(asctime)s%(reset)s | "
    "%(green)s%(name)s:%(lineno)d%(reset)s | "
    "%(white)s%(message)s"
)

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red,bg_white",
}


def setup_logger(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Configure the root logger once with a colored console handler.

    ``level`` defaults to LOG_LEVEL (INFO). Calling again replaces the
    handler instead of stacking a second one (uvicorn --reload).
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_cybershield", False):
            root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", log_colors=LOG_COLORS))
    console._cybershield = True
    root.addHandler(console)

    if root.getEffectiveLevel() > logging.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return root
