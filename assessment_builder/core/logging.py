"""Root logger setup: one stdout handler at the configured level."""
import logging
import sys

from assessment_builder.core.config import get_settings

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Attach a stdout handler to the root logger (no duplicates on repeat calls)."""
    root = logging.getLogger()
    handler = None
    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout:
            handler = h
            break
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    root.setLevel((level or get_settings().log_level).upper())
