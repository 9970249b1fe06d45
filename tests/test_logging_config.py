"""Unit tests for app.core.logging_config: extra= fields reach the log line."""

import logging
import sys
import unittest

from app.core.logging_config import LOG_DATEFMT, LOG_FORMAT, ExtraFieldsFormatter


def _record(msg: str = "Item created", exc_info=None, **extra: object) -> logging.LogRecord:
    logger = logging.getLogger("app.services.items")
    return logger.makeRecord(
        logger.name, logging.INFO, __file__, 1, msg, None, exc_info, extra=extra or None
    )


class TestExtraFieldsFormatter(unittest.TestCase):
    def setUp(self) -> None:
        self.formatter = ExtraFieldsFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    def test_extra_fields_appended_sorted(self) -> None:
        line = self.formatter.format(_record(item_id=3, user_id=7))
        self.assertTrue(line.endswith("Item created item_id=3 user_id=7"), line)

    def test_no_extras_leaves_line_unchanged(self) -> None:
        line = self.formatter.format(_record())
        self.assertTrue(line.endswith("INFO app.services.items Item created"), line)

    def test_fields_stay_on_first_line_before_traceback(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()
        line = self.formatter.format(_record("Request failed", exc_info, reason="db"))
        first, _, rest = line.partition("\n")
        self.assertTrue(first.endswith("Request failed reason=db"), first)
        self.assertIn("RuntimeError: boom", rest)


if __name__ == "__main__":
    unittest.main()
