from __future__ import annotations

import logging

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from .config import BrowserSettings
from .errors import PageFetchError

logger = logging.getLogger(__name__)

_MISSING_BROWSER_ERROR_HINTS = (
    "executable doesn't exist",
    "executable does not exist",
    "download new browsers",
    "playwright install",
    "could not find browser",
    "failed to launch chromium because executable",
)


def _is_missing_browser_error(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(hint in message for hint in _MISSING_BROWSER_ERROR_HINTS)


def normalize_url(raw_url: str) -> str:
    url = (raw_url or "").strip()
    if not url:
        return ""
    if url.startswith("http://") or url.startswith("https://") or url.startswith("file://"):
        return url
    return f"https://{url}"


def describe_fetch_error(exc: Exception, url: str, timeout_ms: int) -> str:
    message = str(exc)
    if isinstance(exc, PlaywrightTimeoutError):
        return f"Page load timeout: {url} took longer than {timeout_ms}ms"
    if "net::ERR_NAME_NOT_RESOLVED" in message:
        return f"Cannot resolve domain: {url}. Please check the URL."
    if "net::ERR_CONNECTION_REFUSED" in message:
        return f"Connection refused: {url} is not accessible."
    if _is_missing_browser_error(exc):
        return "Playwright browsers not found. Please run: playwright install chromium"
    if "permission denied" in message.lower():
        return "Browser permission denied. Try: playwright install-deps"
    return f"Failed to fetch {url}: {message}"


def fetch_page_content(
    url: str,
    settings: BrowserSettings | None = None,
    *,
    wait_for_selector: str | None = None,
) -> str:
    """Rendered HTML of ``url`` after network idle and a short settle delay."""
    browser_settings = settings or BrowserSettings()
    target = normalize_url(url)
    if not target:
        raise PageFetchError("Please provide a URL.")

    timeout_ms = browser_settings.navigation_timeout_ms
    width, height = browser_settings.viewport
    try:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(
                headless=browser_settings.headless,
                executable_path=browser_settings.executable_path,
                args=list(browser_settings.launch_args),
            )
            try:
                context = browser.new_context(
                    user_agent=browser_settings.user_agent,
                    viewport={"width": width, "height": height},
                )
                try:
                    page = context.new_page()
                    logger.info("Fetching page content: %s", target)
                    page.goto(target, wait_until="networkidle", timeout=timeout_ms)
                    page.wait_for_timeout(browser_settings.settle_ms)
                    if wait_for_selector:
                        page.wait_for_selector(wait_for_selector, timeout=10000)
                    html = page.content()
                finally:
                    context.close()
            finally:
                browser.close()
    except PageFetchError:
        raise
    except Exception as exc:
        logger.error("Error fetching page content from %s: %s", target, exc)
        raise PageFetchError(describe_fetch_error(exc, target, timeout_ms)) from exc

    logger.info("Fetched %d characters from %s", len(html), target)
    return html
