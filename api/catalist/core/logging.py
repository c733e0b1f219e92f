"""Process-wide logging setup."""

from __future__ import annotations

import logging

from catalist.core.config import settings

LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or settings.log_level, format=LOG_FORMAT, force=True)
    # httpx logs every request URL at INFO, including provider keys in query strings.
    logging.getLogger("httpx").setLevel(logging.WARNING)
