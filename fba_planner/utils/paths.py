"""
Path resolver for fba-planner.

Rules
-----
* base_dir      → project root (directory holding the fba_planner package)
* data_dir      → base_dir/data  (portable first); fallback ~/FbaPlanner/data
* logs_dir      → base_dir/logs  (portable first); fallback ~/FbaPlanner/logs
* settings_path → $FBA_PLANNER_SETTINGS if set, else data_dir/settings.json

NEVER use os.getcwd() or relative Path("...") strings in runtime code;
always call one of the functions below.
"""

import os
from pathlib import Path

SETTINGS_ENV_VAR = "FBA_PLANNER_SETTINGS"

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _get_base_dir() -> Path:
    # fba_planner/utils/paths.py → parent.parent.parent = project root
    return Path(__file__).resolve().parent.parent.parent


def _try_writable(path: Path) -> bool:
    """
    Return True if *path* can be created and used as a writable directory.

    Creates the directory if it does not exist.  Uses a canary-file probe
    so we detect permission issues (e.g. site-packages installs).
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        canary = path / ".write_probe"
        canary.touch()
        canary.unlink()
        return True
    except (OSError, PermissionError):
        return False


def _home_dir(sub: str) -> Path:
    """Return ~/FbaPlanner/<sub>."""
    return Path.home() / "FbaPlanner" / sub


def _writable_or_home(sub: str) -> Path:
    primary = _get_base_dir() / sub
    if _try_writable(primary):
        return primary
    fallback = _home_dir(sub)
    fallback.mkdir(parents=True, exist_ok=True)
    return fallback


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_base_dir() -> Path:
    """Project root."""
    return _get_base_dir()


def get_data_dir() -> Path:
    """
    Portable data directory.

    Priority:
      1. <base_dir>/data
      2. ~/FbaPlanner/data  ← fallback if base_dir is read-only
    """
    return _writable_or_home("data")


def get_logs_dir() -> Path:
    """
    Portable logs directory.

    Priority:
      1. <base_dir>/logs
      2. ~/FbaPlanner/logs
    """
    return _writable_or_home("logs")


def get_settings_path() -> Path:
    """settings.json location (environment override first)."""
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override)
    return get_data_dir() / "settings.json"
