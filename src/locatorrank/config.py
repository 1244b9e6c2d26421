from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from .models import GenerationOptions

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

DEFAULT_LAUNCH_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)


@dataclass(frozen=True, slots=True)
class BrowserSettings:
    headless: bool = True
    navigation_timeout_ms: int = 30000
    settle_ms: int = 2000
    executable_path: str | None = None
    launch_args: tuple[str, ...] = DEFAULT_LAUNCH_ARGS
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    viewport: tuple[int, int] = (1920, 1080)


@dataclass(frozen=True, slots=True)
class Settings:
    framework: str = "selenium"
    include_accessibility: bool = True
    log_level: str = "INFO"
    log_file: str | None = None
    browser: BrowserSettings = field(default_factory=BrowserSettings)

    def generation_options(self) -> GenerationOptions:
        return GenerationOptions(framework=self.framework, include_accessibility=self.include_accessibility)


def _parse_bool(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def _parse_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    value = raw.strip()
    if not value.isdigit() or int(value) <= 0:
        return default
    return int(value)


def _clean(raw: str | None) -> str | None:
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    browser = BrowserSettings(
        headless=_parse_bool(env.get("LOCATORRANK_HEADLESS"), True),
        navigation_timeout_ms=_parse_int(env.get("LOCATORRANK_NAV_TIMEOUT_MS"), 30000),
        settle_ms=_parse_int(env.get("LOCATORRANK_SETTLE_MS"), 2000),
        executable_path=_clean(env.get("CHROME_EXECUTABLE_PATH")),
    )
    return Settings(
        framework=(_clean(env.get("LOCATORRANK_FRAMEWORK")) or "selenium").lower(),
        include_accessibility=_parse_bool(env.get("LOCATORRANK_INCLUDE_ACCESSIBILITY"), True),
        log_level=(_clean(env.get("LOCATORRANK_LOG_LEVEL")) or "INFO").upper(),
        log_file=_clean(env.get("LOCATORRANK_LOG_FILE")),
        browser=browser,
    )
