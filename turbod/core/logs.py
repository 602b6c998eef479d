"""Logging setup for the turbod command line."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """
    Configure root logging once and return the "turbod" logger.

    Library code only calls logging.getLogger; handlers are set here,
    from the CLI.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
    return logging.getLogger("turbod")
