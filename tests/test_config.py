from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ftree import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("ftree.config.CONFIG_PATH", Path(tmp) / "config.json"):
                self.assertEqual(config.load_settings(), config.Settings())

    def test_malformed_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("ftree.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_settings(), config.Settings())

    def test_valid_values_override_defaults_and_invalid_ones_are_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(
                json.dumps(
                    {
                        "edge_padding": 4,
                        "theme": "OCEAN",
                        "git_refresh_seconds": True,
                        "preview_bytes_limit": 0,
                        "show_hidden": "yes",
                    }
                ),
                encoding="utf-8",
            )
            with mock.patch("ftree.config.CONFIG_PATH", config_path):
                settings = config.load_settings()

        self.assertEqual(settings.edge_padding, 4)
        self.assertEqual(settings.theme, "ocean")
        self.assertEqual(settings.git_refresh_seconds, config.Settings().git_refresh_seconds)
        self.assertEqual(settings.preview_bytes_limit, config.Settings().preview_bytes_limit)
        self.assertFalse(settings.show_hidden)

    def test_save_helpers_round_trip_through_settings(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("ftree.config.CONFIG_PATH", config_path):
                config.save_theme_name("ocean")
                config.save_edge_padding(5)
                settings = config.load_settings()
                saved = config.load_config()

        self.assertEqual(settings.theme, "ocean")
        self.assertEqual(settings.edge_padding, 5)
        self.assertEqual(saved, {"theme": "ocean", "edge_padding": 5})


if __name__ == "__main__":
    unittest.main()
