from __future__ import annotations

import json
from pathlib import Path

import pytest

from showcase import main as main_module
from showcase.consent import DismissResult, MatchAttempt
from showcase.driver import CaptureResult
from showcase.targets import CaptureTarget


def test_build_config_applies_overrides(tmp_path: Path) -> None:
    targets_file = tmp_path / "targets.json"
    targets_file.write_text(
        json.dumps(
            {
                "targets": [
                    {"identifier": "a", "source_address": "https://a.example"},
                    {"identifier": "b", "source_address": "https://b.example"},
                ]
            }
        ),
        encoding="utf-8",
    )
    args = main_module.build_parser().parse_args(
        [
            "-o",
            str(tmp_path / "out"),
            "--targets-file",
            str(targets_file),
            "--only",
            "b",
            "--browser",
            "webkit",
            "--headed",
            "--no-isolation",
            "--navigation-timeout",
            "30000",
            "--click-timeout",
            "500",
        ]
    )

    config = main_module.build_config(args, tmp_path)

    assert config.output_dir == tmp_path / "out"
    assert [target.identifier for target in config.targets] == ["b"]
    assert config.browser == "webkit"
    assert config.headless is False
    assert config.isolate_targets is False
    assert config.navigation_timeout_ms == 30000
    assert config.click_timeout_ms == 500


def test_main_exits_zero_when_every_target_fails(tmp_path: Path, monkeypatch, capsys) -> None:
    seen = {}

    def fake_capture(config, event_log=None):
        seen["config"] = config
        return [
            CaptureResult(target=target, path=config.output_path(target), ok=False, error="boom")
            for target in config.targets
        ]

    monkeypatch.setattr(main_module, "capture_screenshots", fake_capture)

    code = main_module.main(["-o", str(tmp_path), "--only", "dvf", "--only", "period-planet"])

    assert code == 0
    assert [target.identifier for target in seen["config"].targets] == ["dvf", "period-planet"]
    assert f"Captured 0/2 targets → {tmp_path}" in capsys.readouterr().out


def test_main_rejects_unknown_target(monkeypatch, capsys) -> None:
    monkeypatch.setattr(main_module, "capture_screenshots", lambda *a, **k: pytest.fail("ran"))

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--only", "missing-site"])

    assert excinfo.value.code == 2
    assert "missing-site" in capsys.readouterr().err


def test_describe_banner_distinguishes_outcomes(tmp_path: Path) -> None:
    target = CaptureTarget("site", "https://site.example")
    path = tmp_path / "site.png"

    def result(banner):
        return CaptureResult(target=target, path=path, ok=True, banner=banner)

    dismissed = DismissResult(dismissed=True, matcher="selector=#ok")
    unclickable = DismissResult(attempts=[MatchAttempt("role=button name~'accept'", "failed", "Timeout")])
    absent = DismissResult(attempts=[MatchAttempt("selector=#ok", "missing")])

    assert main_module.describe_banner(result(dismissed)) == "site: dismissed via selector=#ok"
    assert main_module.describe_banner(result(unclickable)) == (
        "site: banner found but clicks failed (role=button name~'accept')"
    )
    assert main_module.describe_banner(result(absent)) == "site: no banner found"
    assert main_module.describe_banner(result(None)) == "site: not attempted"


def test_main_defaults_output_under_working_directory(tmp_path: Path, monkeypatch, capsys) -> None:
    seen = {}

    def fake_capture(config, event_log=None):
        seen["config"] = config
        return []

    monkeypatch.setattr(main_module, "capture_screenshots", fake_capture)
    monkeypatch.chdir(tmp_path)

    assert main_module.main(["--only", "dvf"]) == 0

    expected = tmp_path / "inspiration" / "screenshots"
    assert seen["config"].output_dir == expected
    assert f"Captured 0/0 targets → {expected}" in capsys.readouterr().out
