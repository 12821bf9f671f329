#!/usr/bin/env python3
"""Capture full-page screenshots of the built-in award site registry.

Requires: `playwright` and browser binaries (`playwright install chromium`).

Usage:
  scripts/capture_award_screenshots.py --only dvf -o inspiration/screenshots
"""
from __future__ import annotations

from showcase.main import main


if __name__ == "__main__":
    raise SystemExit(main())
