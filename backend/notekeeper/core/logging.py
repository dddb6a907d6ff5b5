"""
Logging setup for the application process.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Route all module loggers to stderr at the given level."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("notekeeper").setLevel(level.upper())
    # Request lines from httpx would log every text-assist call twice.
    logging.getLogger("httpx").setLevel(logging.WARNING)
