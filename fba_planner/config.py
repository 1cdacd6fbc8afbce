"""
Project configuration and constants.

Settings are read from settings.json (see utils.paths.get_settings_path);
anything missing or invalid falls back to the defaults below.

settings.json layout:
    {
      "transport": {
        "standard_shipping_days": 25,
        "standard_shelf_days": 10,
        "oversized_shipping_days": 35,
        "oversized_shelf_days": 10
      },
      "countdown_window_days": 60,
      "log_dir": null
    }
"""
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

from .domain.models import (
    TransportConfig,
    DEFAULT_STANDARD_SHIPPING_DAYS,
    DEFAULT_STANDARD_SHELF_DAYS,
    DEFAULT_OVERSIZED_SHIPPING_DAYS,
    DEFAULT_OVERSIZED_SHELF_DAYS,
)
from .analytics.dashboard import DEFAULT_COUNTDOWN_WINDOW_DAYS

logger = logging.getLogger(__name__)

DEFAULT_TRANSPORT = {
    "standard_shipping_days": DEFAULT_STANDARD_SHIPPING_DAYS,
    "standard_shelf_days": DEFAULT_STANDARD_SHELF_DAYS,
    "oversized_shipping_days": DEFAULT_OVERSIZED_SHIPPING_DAYS,
    "oversized_shelf_days": DEFAULT_OVERSIZED_SHELF_DAYS,
}


@dataclass(frozen=True)
class PlannerSettings:
    """Effective planner settings."""
    transport: TransportConfig = TransportConfig()
    countdown_window_days: int = DEFAULT_COUNTDOWN_WINDOW_DAYS
    log_dir: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transport": asdict(self.transport),
            "countdown_window_days": self.countdown_window_days,
            "log_dir": self.log_dir,
        }


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def transport_from_dict(raw: Optional[Dict[str, Any]]) -> TransportConfig:
    """
    Build a TransportConfig from a plain dict.

    Each of the four lead-time values falls back to its default when it is
    missing or not a positive integer.
    """
    raw = raw or {}
    values = {}
    for key, default in DEFAULT_TRANSPORT.items():
        value = raw.get(key)
        if value is None:
            values[key] = default
        elif _positive_int(value):
            values[key] = value
        else:
            logger.warning(f"Invalid transport setting {key}={value!r}, using default {default}")
            values[key] = default
    return TransportConfig(**values)


def load_settings(path: Optional[Path] = None) -> PlannerSettings:
    """
    Load settings.json.

    Args:
        path: Settings file (default: utils.paths.get_settings_path())

    Returns:
        PlannerSettings (defaults when the file is missing or unreadable)
    """
    if path is None:
        from .utils.paths import get_settings_path  # noqa: PLC0415
        path = get_settings_path()
    path = Path(path)

    if not path.exists():
        return PlannerSettings()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Could not read settings {path}: {e}; using defaults")
        return PlannerSettings()

    if not isinstance(settings, dict):
        logger.warning(f"Settings {path} is not a JSON object; using defaults")
        return PlannerSettings()

    window = settings.get("countdown_window_days", DEFAULT_COUNTDOWN_WINDOW_DAYS)
    if not _positive_int(window):
        logger.warning(f"Invalid countdown_window_days={window!r}, using default")
        window = DEFAULT_COUNTDOWN_WINDOW_DAYS

    log_dir = settings.get("log_dir")
    return PlannerSettings(
        transport=transport_from_dict(settings.get("transport")),
        countdown_window_days=window,
        log_dir=str(log_dir) if log_dir else None,
    )


def save_settings(settings: PlannerSettings, path: Optional[Path] = None) -> bool:
    """
    Write settings.json, keeping unrelated keys already in the file.

    Returns:
        True if successful, False otherwise
    """
    if path is None:
        from .utils.paths import get_settings_path  # noqa: PLC0415
        path = get_settings_path()
    path = Path(path)

    existing: Dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                existing = json.load(f)
        except (json.JSONDecodeError, IOError):
            existing = {}
        if not isinstance(existing, dict):
            existing = {}

    existing.update(settings.to_dict())
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(existing, f, indent=2)
        return True
    except IOError as e:
        logger.error(f"Could not write settings {path}: {e}")
        return False
