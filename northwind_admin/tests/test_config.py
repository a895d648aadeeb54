import json
import os
import tempfile
import unittest
from unittest.mock import patch

from northwind_admin.config import DEFAULT_CONFIG, load_config, save_config
from northwind_admin.errors import ConfigError
from simple_logger import LogLevel, Slogger


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "config.json")

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, data):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def test_defaults_without_file(self):
        config = load_config(self.path, use_env=False)
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertIsNot(config["ui"], DEFAULT_CONFIG["ui"])

    def test_file_values_are_merged_into_defaults(self):
        self.write({"ui": {"per_page": 50}, "sqlite": {"db_path": "/tmp/nw.db"}})
        config = load_config(self.path, use_env=False)
        self.assertEqual(config["ui"]["per_page"], 50)
        self.assertEqual(config["ui"]["max_visible_pages"], 5)
        self.assertEqual(config["sqlite"]["db_path"], "/tmp/nw.db")

    def test_broken_file(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(ConfigError):
            load_config(self.path, use_env=False)

    def test_invalid_values(self):
        self.write({"ui": {"per_page": 0}})
        with self.assertRaises(ConfigError):
            load_config(self.path, use_env=False)
        self.write({"cache": {"stale_seconds": -1}})
        with self.assertRaises(ConfigError):
            load_config(self.path, use_env=False)
        self.write({"logging": {"level": "chatty"}})
        with self.assertRaises(ConfigError):
            load_config(self.path, use_env=False)

    def test_environment_overrides_file(self):
        self.write({"ui": {"per_page": 50}})
        env = {"NORTHWIND_PER_PAGE": "10", "NORTHWIND_DB_PATH": "/data/other.db"}
        with patch.dict(os.environ, env):
            config = load_config(self.path)
        self.assertEqual(config["ui"]["per_page"], 10)
        self.assertEqual(config["sqlite"]["db_path"], "/data/other.db")

    def test_bad_environment_value(self):
        with patch.dict(os.environ, {"NORTHWIND_MAX_VISIBLE_PAGES": "lots"}):
            with self.assertRaises(ConfigError):
                load_config(self.path)

    def test_save_then_load(self):
        config = load_config(self.path, use_env=False)
        config["ui"]["date_format"] = "%d/%m/%Y"
        save_config(config, self.path)
        self.assertEqual(load_config(self.path, use_env=False)["ui"]["date_format"], "%d/%m/%Y")

    def test_save_to_missing_directory(self):
        with self.assertRaises(ConfigError):
            save_config(DEFAULT_CONFIG, os.path.join(self.tmp.name, "missing", "config.json"))


class TestLogLevel(unittest.TestCase):
    def test_parse(self):
        self.assertIs(LogLevel.parse("warning"), LogLevel.WARNING)
        self.assertIs(LogLevel.parse(LogLevel.DEBUG), LogLevel.DEBUG)
        with self.assertRaises(ValueError):
            LogLevel.parse("loud")

    def test_ranks_are_ordered(self):
        ranks = [level.rank for level in (LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARNING, LogLevel.ERROR)]
        self.assertEqual(ranks, sorted(ranks))

    def test_messages_below_level_are_dropped(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "app.log")
            previous = (Slogger.log_path, Slogger.min_level)
            Slogger.configure(path, "warning")
            try:
                Slogger.info("quiet")
                Slogger.warning("loud")
            finally:
                Slogger.configure(*previous)
            with open(path, encoding="utf-8") as f:
                content = f.read()
        self.assertNotIn("quiet", content)
        self.assertIn("loud", content)


if __name__ == "__main__":
    unittest.main()
