"""Best-effort dismissal of cookie-consent banners.

Banners differ from site to site, so dismissal runs an ordered list of
matchers: accessible-role button names first (most specific phrase first),
then selectors used by common consent-management platforms. The first
matcher whose click succeeds ends the search. Playwright errors raised while
locating or clicking are recorded on the result and never propagated.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from playwright.sync_api import Error as PlaywrightError

from showcase.bus import EventLog

ROLE_NAME_PATTERNS: tuple[str, ...] = ("accept all", "accept", "agree", "allow all", "continue")

FALLBACK_SELECTORS: tuple[str, ...] = (
    "#onetrust-accept-btn-handler",
    '[data-testid="uc-accept-all-button"]',
    "button.cookie-accept",
    'button[aria-label="Accept cookies"]',
    'button[title="Accept"]',
)

CLICK_TIMEOUT_MS = 2000

MISSING = "missing"
CLICKED = "clicked"
FAILED = "failed"


def error_message(exc: BaseException) -> str:
    text = str(exc).strip()
    if not text:
        return type(exc).__name__
    return text.splitlines()[0]


@dataclass(slots=True)
class MatchAttempt:
    matcher: str
    status: str
    error: str | None = None


@dataclass(slots=True)
class DismissResult:
    dismissed: bool = False
    matcher: str | None = None
    attempts: list[MatchAttempt] = field(default_factory=list)

    @property
    def banner_seen(self) -> bool:
        """True when some matcher found an element, whether or not the click worked."""
        return any(attempt.status != MISSING for attempt in self.attempts)


class BannerMatcher:
    label = "matcher"

    def locate(self, page: Any) -> Any:  # pragma: no cover - interface
        raise NotImplementedError

    def attempt(self, page: Any, timeout_ms: int) -> MatchAttempt:
        try:
            locator = self.locate(page)
            if not locator.count():
                return MatchAttempt(matcher=self.label, status=MISSING)
            locator.first.click(timeout=timeout_ms)
        except PlaywrightError as exc:
            return MatchAttempt(matcher=self.label, status=FAILED, error=error_message(exc))
        return MatchAttempt(matcher=self.label, status=CLICKED)


class RoleMatcher(BannerMatcher):
    """Matches controls by role and a case-insensitive substring of their accessible name."""

    def __init__(self, phrase: str, role: str = "button") -> None:
        self.phrase = phrase
        self.role = role
        self.label = f"role={role} name~{phrase!r}"
        self._pattern = re.compile(re.escape(phrase), re.IGNORECASE)

    def locate(self, page: Any) -> Any:
        return page.get_by_role(self.role, name=self._pattern)


class SelectorMatcher(BannerMatcher):
    def __init__(self, selector: str) -> None:
        self.selector = selector
        self.label = f"selector={selector}"

    def locate(self, page: Any) -> Any:
        return page.locator(self.selector)


def default_matchers() -> list[BannerMatcher]:
    matchers: list[BannerMatcher] = [RoleMatcher(phrase) for phrase in ROLE_NAME_PATTERNS]
    matchers.extend(SelectorMatcher(selector) for selector in FALLBACK_SELECTORS)
    return matchers


def dismiss_banners(
    page: Any,
    matchers: Sequence[BannerMatcher] | None = None,
    timeout_ms: int = CLICK_TIMEOUT_MS,
    event_log: EventLog | None = None,
    target: str | None = None,
) -> DismissResult:
    result = DismissResult()
    for matcher in matchers if matchers is not None else default_matchers():
        attempt = matcher.attempt(page, timeout_ms)
        result.attempts.append(attempt)
        if attempt.status == CLICKED:
            result.dismissed = True
            result.matcher = attempt.matcher
            if event_log is not None:
                event_log.log("banner_dismissed", {"target": target, "matcher": attempt.matcher})
            return result
        if attempt.status == FAILED and event_log is not None:
            event_log.log(
                "banner_click_failed",
                {"target": target, "matcher": attempt.matcher, "error": attempt.error},
            )
    if event_log is not None and not result.banner_seen:
        event_log.log("banner_not_found", {"target": target})
    return result
