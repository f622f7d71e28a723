from __future__ import annotations

import json
import logging

from bearenglish.logging_setup import JsonLineFormatter, setup_logging


def test_json_formatter_includes_extra_fields() -> None:
	record = logging.LogRecord("bearenglish.test", logging.WARNING, __file__, 1, "Chunk failed", None, None)
	record.chunk_index = 2
	record.attempt = 3
	payload = json.loads(JsonLineFormatter().format(record))
	assert payload["message"] == "Chunk failed"
	assert payload["level"] == "WARNING"
	assert payload["chunk_index"] == 2
	assert payload["attempt"] == 3
	assert "pathname" not in payload


def test_setup_logging_installs_single_handler() -> None:
	logger = setup_logging("debug", name="bearenglish.test_setup")
	setup_logging("debug", name="bearenglish.test_setup")
	assert len(logger.handlers) == 1
	assert logger.level == logging.DEBUG
	assert logging.getLogger("httpx").level == logging.WARNING
