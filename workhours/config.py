from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LogSettings:
    level: str
    directory: Path | None


@dataclass(frozen=True)
class ReportSettings:
    calendar_id: str | None
    include_all_day: bool
    timezone: str


@dataclass(frozen=True)
class GoogleSettings:
    credentials_path: Path | None
    token_path: Path | None

    @property
    def is_configured(self) -> bool:
        return self.credentials_path is not None and self.credentials_path.exists()


@dataclass(frozen=True)
class AppSettings:
    log: LogSettings
    report: ReportSettings
    google: GoogleSettings


def _path_from_env(name: str) -> Path | None:
    raw = os.getenv(name)
    return Path(raw).expanduser() if raw else None


def _bool_from_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    log = LogSettings(
        level=os.getenv("WORKHOURS_LOG_LEVEL", "INFO").upper(),
        directory=_path_from_env("WORKHOURS_LOG_DIR"),
    )

    report = ReportSettings(
        calendar_id=os.getenv("WORKHOURS_CALENDAR_ID") or None,
        include_all_day=_bool_from_env("WORKHOURS_INCLUDE_ALL_DAY"),
        timezone=os.getenv("WORKHOURS_TIMEZONE", "UTC"),
    )

    google = GoogleSettings(
        credentials_path=_path_from_env("GOOGLE_CREDENTIALS_PATH"),
        token_path=_path_from_env("GOOGLE_TOKEN_PATH"),
    )

    return AppSettings(log=log, report=report, google=google)
