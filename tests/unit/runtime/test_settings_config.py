"""Tests for persisted theme and preload settings."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from nestview import config


class ConfigPersistenceTests(unittest.TestCase):
    def test_theme_name_round_trips_through_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("nestview.config.CONFIG_PATH", config_path):
                config.save_theme_name(" ocean ")

                self.assertEqual(config.load_theme_name(), "ocean")
                self.assertEqual(json.loads(config_path.read_text(encoding="utf-8")), {"theme": "ocean"})

    def test_saving_theme_keeps_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("nestview.config.CONFIG_PATH", config_path):
                config.save_config({"preload_depth": 5})
                config.save_theme_name("default")

                self.assertEqual(config.load_config(), {"preload_depth": 5, "theme": "default"})

    def test_missing_or_malformed_config_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("nestview.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

                config_path.write_text("[1, 2]\n", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                self.assertIsNone(config.load_theme_name())

    def test_preload_depth_rejects_invalid_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("nestview.config.CONFIG_PATH", config_path):
                for value in (True, -1, "4", 2.5, None):
                    with self.subTest(value=value):
                        config.save_config({"preload_depth": value})
                        self.assertEqual(config.load_preload_depth(), 3)

                config.save_config({"preload_depth": 0})
                self.assertEqual(config.load_preload_depth(), 0)


class LoadSettingsTests(unittest.TestCase):
    def test_explicit_overrides_win_over_persisted_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("nestview.config.CONFIG_PATH", config_path):
                config.save_config({"theme": "ocean", "preload_depth": 5})

                persisted = config.load_settings()
                overridden = config.load_settings(theme="default", preload_depth=1, no_color=True, git_status=False)

        self.assertEqual(persisted, config.Settings(theme="ocean", preload_depth=5))
        self.assertEqual(
            overridden,
            config.Settings(theme="default", no_color=True, preload_depth=1, git_status=False),
        )

    def test_unknown_theme_falls_back_to_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("nestview.config.CONFIG_PATH", Path(tmp) / "config.json"):
                settings = config.load_settings(theme="neon")

        self.assertEqual(settings.theme, "default")
        self.assertEqual(settings.preload_depth, 3)
        self.assertTrue(settings.git_status)


if __name__ == "__main__":
    unittest.main()
