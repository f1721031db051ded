from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


_CHIRPY_ENV = ("CHIRPY_DB_PATH", "CHIRPY_DEBUG_RESET_DB", "CHIRPY_LOG_OPERATIONS")


@pytest.fixture(autouse=True)
def clean_chirpy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Start every test without CHIRPY_* variables; whatever a test sets (or a
    dotenv file loads) is undone afterwards.
    """
    for name in _CHIRPY_ENV:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect persistence paths to a temp project directory so tests never touch real ./data.
    """
    import persistence.paths as paths

    def _project_root() -> Path:
        return tmp_path

    def _data_dir() -> Path:
        p = tmp_path / "data"
        p.mkdir(parents=True, exist_ok=True)
        return p

    monkeypatch.setattr(paths, "project_root", _project_root)
    monkeypatch.setattr(paths, "data_dir", _data_dir)
    return tmp_path


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "database.json"


@pytest.fixture
def store(db_path: Path):
    from persistence.chirp_store import DiskChirpStore

    return DiskChirpStore(db_path)
