from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from showcase.targets import DEFAULT_TARGETS, CaptureTarget

BROWSER_ENGINES = ("chromium", "firefox", "webkit")


@dataclass(slots=True)
class CaptureConfig:
    output_dir: Path
    targets: Sequence[CaptureTarget] = field(default_factory=lambda: list(DEFAULT_TARGETS))
    viewport_width: int = 1400
    viewport_height: int = 900
    navigation_timeout_ms: int = 90_000
    click_timeout_ms: int = 2_000
    isolate_targets: bool = True
    headless: bool = True
    browser: str = "chromium"
    image_extension: str = "png"

    @classmethod
    def from_base_dir(cls, base_dir: Path) -> "CaptureConfig":
        return cls(output_dir=base_dir / "inspiration" / "screenshots")

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    def output_path(self, target: CaptureTarget) -> Path:
        return self.output_dir / f"{target.identifier}.{self.image_extension}"

    def validate(self) -> None:
        if self.browser not in BROWSER_ENGINES:
            raise ValueError(
                f"Unknown browser engine: {self.browser} (expected one of {', '.join(BROWSER_ENGINES)})"
            )
        if self.navigation_timeout_ms < 0:
            raise ValueError("navigation_timeout_ms must be >= 0")
        if self.click_timeout_ms < 0:
            raise ValueError("click_timeout_ms must be >= 0")
