"""
Tests for settings.json loading and saving.
"""
import json

import pytest

from fba_planner.config import (
    PlannerSettings,
    load_settings,
    save_settings,
    transport_from_dict,
)
from fba_planner.domain.models import TransportConfig
from fba_planner.utils.paths import SETTINGS_ENV_VAR, get_settings_path


@pytest.fixture
def settings_file(tmp_path):
    return tmp_path / "settings.json"


def write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")


class TestLoadSettings:
    """Test settings loading and fallbacks."""

    def test_missing_file_gives_defaults(self, settings_file):
        settings = load_settings(settings_file)
        assert settings == PlannerSettings()
        assert settings.transport.standard_shipping_days == 25
        assert settings.countdown_window_days == 60
        assert settings.log_dir is None

    def test_custom_values(self, settings_file):
        write_json(settings_file, {
            "transport": {"standard_shipping_days": 20, "oversized_shelf_days": 5},
            "countdown_window_days": 30,
            "log_dir": "/tmp/fba-logs",
        })
        settings = load_settings(settings_file)
        assert settings.transport == TransportConfig(standard_shipping_days=20, oversized_shelf_days=5)
        assert settings.countdown_window_days == 30
        assert settings.log_dir == "/tmp/fba-logs"

    def test_invalid_json_gives_defaults(self, settings_file):
        settings_file.write_text("{not json", encoding="utf-8")
        assert load_settings(settings_file) == PlannerSettings()

    def test_non_object_gives_defaults(self, settings_file):
        write_json(settings_file, [1, 2, 3])
        assert load_settings(settings_file) == PlannerSettings()

    def test_invalid_window_falls_back(self, settings_file):
        write_json(settings_file, {"countdown_window_days": 0})
        assert load_settings(settings_file).countdown_window_days == 60

    def test_env_override(self, settings_file, monkeypatch):
        write_json(settings_file, {"countdown_window_days": 14})
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(settings_file))
        assert get_settings_path() == settings_file
        assert load_settings().countdown_window_days == 14


class TestTransportFromDict:
    """Test per-key fallback of lead-time values."""

    def test_empty(self):
        assert transport_from_dict(None) == TransportConfig()

    def test_invalid_values_use_defaults(self):
        config = transport_from_dict({
            "standard_shipping_days": -3,
            "standard_shelf_days": "ten",
            "oversized_shipping_days": True,
            "oversized_shelf_days": 12,
        })
        assert config == TransportConfig(oversized_shelf_days=12)


class TestSaveSettings:
    def test_save_then_load(self, settings_file):
        settings = PlannerSettings(transport=TransportConfig(standard_shipping_days=30), countdown_window_days=45)
        assert save_settings(settings, settings_file) is True
        assert load_settings(settings_file) == settings

    def test_keeps_unrelated_keys(self, settings_file):
        write_json(settings_file, {"theme": "dark", "countdown_window_days": 10})
        save_settings(PlannerSettings(), settings_file)
        with open(settings_file, encoding="utf-8") as f:
            data = json.load(f)
        assert data["theme"] == "dark"
        assert data["countdown_window_days"] == 60
        assert data["transport"]["oversized_shipping_days"] == 35
