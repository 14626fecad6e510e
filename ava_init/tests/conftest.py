"""Shared test fixtures and utilities."""

import json
import pytest
from pathlib import Path
from typing import Any, Callable, Dict


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty directory so no stray .env is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("AVA_INIT_CONFIG_PATH", raising=False)
    return tmp_path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create an empty project directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def write_pkg(project_dir: Path) -> Callable[[Dict[str, Any]], Path]:
    """Return a helper writing package.json contents into the project directory."""

    def _write(data: Dict[str, Any]) -> Path:
        path = project_dir / "package.json"
        path.write_text(json.dumps(data, indent=2))
        return path

    return _write
