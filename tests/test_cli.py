"""Tests for the command line entry point."""

import os
from unittest.mock import patch

from click.testing import CliRunner

from prompt_share.cli import main


def test_serve_passes_options(tmp_path, monkeypatch):
    # registered so the values the command writes are undone afterwards
    monkeypatch.setenv("PROMPT_SHARE_PROJECTS_PATH", "")
    monkeypatch.setenv("PROMPT_SHARE_ARCHIVE_PATH", "")
    projects = tmp_path / "projects"
    archive = tmp_path / "archive.json"

    with patch("prompt_share.cli.uvicorn.run") as run:
        result = CliRunner().invoke(main, [
            "serve", "--port", "9000",
            "--projects-dir", str(projects),
            "--archive-file", str(archive),
            "--log-level", "debug",
        ])
        assert os.environ["PROMPT_SHARE_PROJECTS_PATH"] == str(projects)
        assert os.environ["PROMPT_SHARE_ARCHIVE_PATH"] == str(archive)

    assert result.exit_code == 0, result.output
    assert "http://127.0.0.1:9000" in result.output
    run.assert_called_once_with(
        "prompt_share.server:app", host="127.0.0.1", port=9000, reload=False, log_level="debug"
    )


def test_serve_rejects_unknown_log_level():
    result = CliRunner().invoke(main, ["serve", "--log-level", "loud"])
    assert result.exit_code != 0
