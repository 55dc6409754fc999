"""Subprocess smoke tests for the CLI entrypoint."""

from __future__ import annotations

import os
import subprocess
import sys


PROJECT_ROOT = os.path.join(os.path.dirname(__file__), "..", "..")
SOURCE_DIR = os.path.join(PROJECT_ROOT, "src")


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [SOURCE_DIR, env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "filtex", *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        env=env,
    )


def test_cli_summary_smoke() -> None:
    """Ensure summary command runs via python -m filtex."""
    result = _run("summary", "--field", "Price", "1,2,3")

    assert result.returncode == 0
    assert result.stdout.strip() == "Price is 1 or 2 or 3"


def test_cli_parse_verbose_smoke() -> None:
    """Ensure verbose logging reaches stdout."""
    result = _run("--verbose", "parse", "--no-color", "--family", "date", "3 days ago")

    assert result.returncode == 0
    assert "Command arguments (parse):" in result.stdout
    assert "pastAgo 3 days ago" in result.stdout


def test_cli_malformed_config_smoke(tmp_path) -> None:
    """A malformed config file should stop the CLI with a usage error."""
    config_path = tmp_path / "bad.json"
    config_path.write_text("{bad json", encoding="utf-8")

    result = _run("summary", "--config", str(config_path), "5")

    assert result.returncode != 0
    assert "Malformed config" in result.stderr
