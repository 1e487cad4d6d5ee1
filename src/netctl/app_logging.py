"""Logging configuration helpers."""

import logging

_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route netctl logs to stderr at ``level``.

    ``level`` may be a number or a name such as ``"debug"``. Repeated calls
    only adjust the level. httpx request lines are shown at debug level only.
    """
    if isinstance(level, str):
        level = level.upper()
    logger = logging.getLogger("netctl")
    logger.setLevel(level)
    logging.getLogger("httpx").setLevel(
        logging.INFO if logger.level <= logging.DEBUG else logging.WARNING
    )
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
