"""Root logger setup. Modules just use ``logging.getLogger(__name__)``."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure the root logger on stderr. No-op if it already has handlers."""
    logging.basicConfig(
        level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, stream=sys.stderr
    )
