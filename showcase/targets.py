from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence
from urllib.parse import urlparse

DEFAULT_SETTLE_MS = 7000


@dataclass(frozen=True, slots=True)
class CaptureTarget:
    identifier: str
    source_address: str
    settle_duration_ms: int = DEFAULT_SETTLE_MS


DEFAULT_TARGETS: tuple[CaptureTarget, ...] = (
    CaptureTarget("cap-plastic-now", "https://capplasticproduction.org"),
    CaptureTarget("dvf", "https://www.dvf.com", 8000),
    CaptureTarget("schumacher-house", "https://www.awwwards.com/sites/schumacher-house"),
    CaptureTarget(
        "period-planet",
        "https://winners.webbyawards.com/winners/2024/websites-and-mobile-sites/"
        "general-websites/health/period-planet",
    ),
    CaptureTarget("more-nutrition", "https://www.awwwards.com/sites/more-nutrition"),
    CaptureTarget(
        "beyond-design-into-experience",
        "https://www.awwwards.com/sites/beyond-design-into-experience",
    ),
)


def normalize_targets(payload: dict[str, Any]) -> list[CaptureTarget]:
    if not isinstance(payload, dict):
        raise ValueError("Targets payload must be a JSON object")
    items = payload.get("targets")
    if not isinstance(items, list) or not items:
        raise ValueError("targets must be a non-empty list")

    targets: list[CaptureTarget] = []
    seen: set[str] = set()
    for item in items:
        if not isinstance(item, dict):
            raise ValueError("Each target must be an object")
        identifier = item.get("identifier")
        if not isinstance(identifier, str) or not identifier.strip():
            raise ValueError("identifier is required")
        identifier = identifier.strip()
        if "/" in identifier or "\\" in identifier or identifier in {".", ".."}:
            raise ValueError(f"identifier must be a plain filename stem: {identifier}")
        if identifier in seen:
            raise ValueError(f"duplicate identifier: {identifier}")
        address = item.get("source_address")
        if not isinstance(address, str) or urlparse(address).scheme not in {"http", "https"}:
            raise ValueError(f"source_address must be an http(s) URL for {identifier}")
        settle = item.get("settle_duration_ms", DEFAULT_SETTLE_MS)
        # bool is an int subclass
        if isinstance(settle, bool) or not isinstance(settle, int) or settle < 0:
            raise ValueError(f"settle_duration_ms must be a non-negative integer for {identifier}")
        seen.add(identifier)
        targets.append(CaptureTarget(identifier, address, settle))
    return targets


def load_targets(path: Path) -> list[CaptureTarget]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return normalize_targets(payload)


def select_targets(
    targets: Sequence[CaptureTarget], identifiers: Iterable[str]
) -> list[CaptureTarget]:
    """Keep the targets named in `identifiers`, preserving registry order."""
    wanted = set(identifiers)
    known = {target.identifier for target in targets}
    unknown = sorted(wanted - known)
    if unknown:
        raise ValueError(f"Unknown target identifier(s): {', '.join(unknown)}")
    return [target for target in targets if target.identifier in wanted]
