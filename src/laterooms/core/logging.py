import logging

from laterooms.core.config import settings


def setup_logging() -> None:
    """Configure the root logger once at startup."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
