"""Award site screenshot capture package."""

from .config import CaptureConfig
from .consent import DismissResult, dismiss_banners
from .driver import CaptureDriver, CaptureResult, capture_screenshots
from .targets import DEFAULT_TARGETS, CaptureTarget

__all__ = [
    "DEFAULT_TARGETS",
    "CaptureConfig",
    "CaptureDriver",
    "CaptureResult",
    "CaptureTarget",
    "DismissResult",
    "capture_screenshots",
    "dismiss_banners",
]
