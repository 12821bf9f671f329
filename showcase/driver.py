from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from showcase.bus import EventLog
from showcase.config import CaptureConfig
from showcase.consent import BannerMatcher, DismissResult, default_matchers, dismiss_banners, error_message
from showcase.targets import CaptureTarget


@dataclass(slots=True)
class CaptureResult:
    target: CaptureTarget
    path: Path
    ok: bool
    error: str | None = None
    banner: DismissResult | None = None


class CaptureDriver:
    """Visits each configured target once and writes a full-page screenshot.

    Targets are processed sequentially. Any exception raised while opening,
    loading or capturing a target is reported and the run moves on to the
    next target; nothing is retried.
    """

    def __init__(
        self,
        config: CaptureConfig,
        matchers: Sequence[BannerMatcher] | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self.config = config
        self.matchers = list(matchers) if matchers is not None else default_matchers()
        self.event_log = event_log or EventLog()

    def run(self, browser: Any) -> list[CaptureResult]:
        self.config.output_dir.mkdir(parents=True, exist_ok=True)
        results: list[CaptureResult] = []
        shared_page = None
        if not self.config.isolate_targets:
            shared_page = browser.new_page(viewport=self.config.viewport)
        for target in self.config.targets:
            if shared_page is None:
                results.append(self._capture_in_new_context(browser, target))
            else:
                results.append(self.capture(shared_page, target))
        return results

    def capture(self, page: Any, target: CaptureTarget) -> CaptureResult:
        path = self.config.output_path(target)
        print(f"Capturing {target.source_address} → {path}")
        self.event_log.log(
            "capture_started",
            {"target": target.identifier, "url": target.source_address, "path": str(path)},
        )
        banner = None
        try:
            page.goto(
                target.source_address,
                wait_until="domcontentloaded",
                timeout=self.config.navigation_timeout_ms,
            )
            self._wait_for_quiescence(page, target)
            page.wait_for_timeout(target.settle_duration_ms)
            banner = dismiss_banners(
                page,
                self.matchers,
                timeout_ms=self.config.click_timeout_ms,
                event_log=self.event_log,
                target=target.identifier,
            )
            page.screenshot(path=str(path), full_page=True)
        except Exception as exc:
            return self._failed(target, path, exc, banner)
        self.event_log.log("capture_saved", {"target": target.identifier, "path": str(path)})
        return CaptureResult(target=target, path=path, ok=True, banner=banner)

    def _capture_in_new_context(self, browser: Any, target: CaptureTarget) -> CaptureResult:
        context = None
        try:
            context = browser.new_context(viewport=self.config.viewport)
            page = context.new_page()
        except Exception as exc:
            if context is not None:
                self._close_context(context, target)
            return self._failed(target, self.config.output_path(target), exc)
        try:
            return self.capture(page, target)
        finally:
            self._close_context(context, target)

    def _wait_for_quiescence(self, page: Any, target: CaptureTarget) -> None:
        try:
            page.wait_for_load_state("networkidle", timeout=self.config.navigation_timeout_ms)
        except PlaywrightTimeoutError:
            # long-polling pages never go idle
            self.event_log.log("quiescence_timeout", {"target": target.identifier})
        except PlaywrightError as exc:
            # client-side redirects destroy the execution context mid-wait
            self.event_log.log(
                "quiescence_failed",
                {"target": target.identifier, "error": error_message(exc)},
            )

    def _close_context(self, context: Any, target: CaptureTarget) -> None:
        try:
            context.close()
        except PlaywrightError as exc:
            self.event_log.log(
                "context_close_failed",
                {"target": target.identifier, "error": error_message(exc)},
            )

    def _failed(
        self,
        target: CaptureTarget,
        path: Path,
        exc: Exception,
        banner: DismissResult | None = None,
    ) -> CaptureResult:
        message = error_message(exc)
        print(f"Failed to capture {target.source_address}: {message}", file=sys.stderr)
        self.event_log.log(
            "capture_failed",
            {"target": target.identifier, "url": target.source_address, "error": message},
        )
        return CaptureResult(target=target, path=path, ok=False, error=message, banner=banner)


def capture_screenshots(
    config: CaptureConfig,
    matchers: Sequence[BannerMatcher] | None = None,
    event_log: EventLog | None = None,
) -> list[CaptureResult]:
    """Launch one browser, capture every target, and close the browser.

    A failure to launch the browser propagates to the caller.
    """
    config.validate()
    driver = CaptureDriver(config, matchers=matchers, event_log=event_log)
    with sync_playwright() as playwright:
        browser = getattr(playwright, config.browser).launch(headless=config.headless)
        try:
            return driver.run(browser)
        finally:
            browser.close()
