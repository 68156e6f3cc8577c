import json
import logging
import os
import unittest
from unittest.mock import patch

from config.logging_config import JsonFormatter, configure_logging, log_level_from_env


class LoggingConfigTests(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.handlers[:], root.level, logging.getLogger("httpx").level)

    def tearDown(self):
        root = logging.getLogger()
        root.handlers, level, httpx_level = self._saved
        root.setLevel(level)
        logging.getLogger("httpx").setLevel(httpx_level)

    def test_level_from_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            self.assertEqual(log_level_from_env(), logging.DEBUG)
        with patch.dict(os.environ, {"LOG_LEVEL": "chatty"}):
            self.assertEqual(log_level_from_env(), logging.INFO)

    def test_json_handler_and_quiet_loggers(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG", "LOG_JSON": "true"}):
            configure_logging()

        root = logging.getLogger()
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JsonFormatter)
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(logging.getLogger("httpx").level, logging.WARNING)

    def test_json_formatter_output(self):
        record = logging.LogRecord("services.news", logging.WARNING, __file__, 1, "user_id=%s", (7,), None)
        entry = json.loads(JsonFormatter().format(record))
        self.assertEqual(entry["level"], "warning")
        self.assertEqual(entry["logger"], "services.news")
        self.assertEqual(entry["msg"], "user_id=7")
        self.assertNotIn("exc", entry)


if __name__ == "__main__":
    unittest.main()
