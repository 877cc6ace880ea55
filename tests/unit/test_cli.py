"""Tests for the drafthtml-render and drafthtml-parse entry points."""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest

from drafthtml import cli
from drafthtml.config import LogConfig, Settings
from tests.conftest import raw_block, raw_content

_real_setup_logging = cli._setup_logging


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the commands from attaching handlers to the root logger."""
    monkeypatch.setattr(cli, "_setup_logging", lambda _: None)


class TestRender:
    def test_renders_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = tmp_path / "content.json"
        source.write_text(
            json.dumps(raw_content(raw_block("Hi", styles=[("BOLD", 0, 2)]))),
            encoding="utf-8",
        )
        assert cli.run_render([str(source)]) == 0
        assert capsys.readouterr().out.strip() == "<p><strong>Hi</strong></p>"

    def test_reads_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(
            "sys.stdin", io.StringIO(json.dumps(raw_content(raw_block("[x]"))))
        )
        assert cli.run_render(["-"]) == 0
        assert capsys.readouterr().out.strip() == "<p>[x]</p>"

    def test_missing_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert cli.run_render([str(tmp_path / "absent.json")]) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Cannot read" in captured.err

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cli.run_render(["--version"])
        assert excinfo.value.code == 0
        assert "0.1.0" in capsys.readouterr().out


class TestParse:
    def test_parses_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = tmp_path / "page.html"
        source.write_text(
            '<p>Visit <a href="https://google.com">Google</a></p>', encoding="utf-8"
        )
        assert cli.run_parse([str(source)]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["blocks"][0]["text"] == "Visit Google"
        assert output["blocks"][0]["entityRanges"] == [
            {"key": 0, "offset": 6, "length": 6}
        ]
        assert output["entityMap"]["0"]["data"] == {"url": "https://google.com"}

    def test_empty_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert cli.run_parse([]) == 0
        assert json.loads(capsys.readouterr().out) == {"blocks": [], "entityMap": {}}


class TestSetupLogging:
    """The real logging setup adds a console and an optional file handler."""

    def test_file_handler_created(self, tmp_path: Path) -> None:
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            log=LogConfig(level="WARNING", log_dir=tmp_path / "logs"),
        )
        try:
            _real_setup_logging(settings)
            added = [h for h in root.handlers if h not in before]
            assert len(added) == 2
            assert {h.level for h in added} == {logging.WARNING, logging.DEBUG}
            assert (tmp_path / "logs" / "drafthtml.log").exists()
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()
            root.setLevel(level)

    def test_repeated_setup_adds_handlers_once(self) -> None:
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        try:
            _real_setup_logging(settings)
            _real_setup_logging(settings)
            added = [h for h in root.handlers if h not in before]
            assert len(added) == 1
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()
            root.setLevel(level)
