from __future__ import annotations

import argparse
from pathlib import Path

from showcase.bus import EventLog
from showcase.config import BROWSER_ENGINES, CaptureConfig
from showcase.driver import CaptureResult, capture_screenshots
from showcase.targets import load_targets, select_targets


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Capture full-page screenshots of award-winning websites."
    )
    parser.add_argument("-o", "--output-dir", type=str, default=None, help="Output directory")
    parser.add_argument(
        "--targets-file",
        type=str,
        default=None,
        help="JSON file with a 'targets' list to use instead of the built-in registry",
    )
    parser.add_argument(
        "--only",
        action="append",
        default=None,
        metavar="IDENTIFIER",
        help="Capture only this target (repeatable)",
    )
    parser.add_argument(
        "--browser",
        type=str,
        default=None,
        choices=list(BROWSER_ENGINES),
        help="Browser engine to launch",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument(
        "--no-isolation",
        action="store_true",
        help="Reuse one page for every target instead of a fresh context per target",
    )
    parser.add_argument(
        "--navigation-timeout", type=int, default=None, help="Navigation timeout (ms)"
    )
    parser.add_argument("--click-timeout", type=int, default=None, help="Banner click timeout (ms)")
    parser.add_argument("--verbose", action="store_true", help="Print banner diagnostics")
    return parser


def build_config(args: argparse.Namespace, base_dir: Path) -> CaptureConfig:
    config = CaptureConfig.from_base_dir(base_dir)
    if args.output_dir:
        config.output_dir = Path(args.output_dir)
    if args.targets_file:
        config.targets = load_targets(Path(args.targets_file))
    if args.only:
        config.targets = select_targets(config.targets, args.only)
    if args.browser:
        config.browser = args.browser
    if args.headed:
        config.headless = False
    if args.no_isolation:
        config.isolate_targets = False
    if args.navigation_timeout is not None:
        config.navigation_timeout_ms = args.navigation_timeout
    if args.click_timeout is not None:
        config.click_timeout_ms = args.click_timeout
    config.validate()
    return config


def describe_banner(result: CaptureResult) -> str:
    banner = result.banner
    if banner is None:
        return f"{result.target.identifier}: not attempted"
    if banner.dismissed:
        return f"{result.target.identifier}: dismissed via {banner.matcher}"
    if banner.banner_seen:
        failed = [attempt.matcher for attempt in banner.attempts if attempt.error]
        return f"{result.target.identifier}: banner found but clicks failed ({', '.join(failed)})"
    return f"{result.target.identifier}: no banner found"


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    base_dir = Path.cwd()
    try:
        config = build_config(args, base_dir)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))

    event_log = EventLog()
    results = capture_screenshots(config, event_log=event_log)

    if args.verbose:
        for result in results:
            print(describe_banner(result))
    captured = sum(1 for result in results if result.ok)
    print(f"Captured {captured}/{len(results)} targets → {config.output_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
