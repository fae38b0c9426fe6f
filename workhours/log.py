from __future__ import annotations

import logging
from datetime import datetime, timezone

from .config import get_settings

_INITIALIZED = False


def configure_logging(level: str | None = None) -> None:
    """Configure console logging, plus a daily file when WORKHOURS_LOG_DIR is set."""

    global _INITIALIZED
    if _INITIALIZED:
        return

    settings = get_settings().log
    resolved_level = getattr(logging, (level or settings.level).upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.directory is not None:
        settings.directory.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d")
        handlers.append(
            logging.FileHandler(settings.directory / f"workhours-{stamp}.log", encoding="utf-8")
        )

    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(resolved_level))


__all__ = ["configure_logging"]
