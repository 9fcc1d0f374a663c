import json
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # Keep developer / CI settings from leaking into tests
    for var in (
        "NPM_ADVISOR_CONFIG",
        "NPM_ADVISOR_REGISTRY",
        "NPM_ADVISOR_WARN_ONLY",
        "GITHUB_STEP_SUMMARY",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def write_manifest():
    """Write a package.json into the given directory and return its path."""

    def _write(directory: Path, data: dict) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "package.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
