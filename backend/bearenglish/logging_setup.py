from __future__ import annotations

import json
import logging
import sys

_RESERVED_FIELDS = {
	"name",
	"msg",
	"args",
	"levelname",
	"levelno",
	"pathname",
	"filename",
	"module",
	"exc_info",
	"exc_text",
	"stack_info",
	"lineno",
	"funcName",
	"created",
	"msecs",
	"relativeCreated",
	"thread",
	"threadName",
	"processName",
	"process",
	"taskName",
	"color_message",
}


class JsonLineFormatter(logging.Formatter):
	def format(self, record: logging.LogRecord) -> str:
		payload: dict[str, object] = {
			"ts": self.formatTime(record, self.datefmt),
			"level": record.levelname,
			"logger": record.name,
			"message": record.getMessage(),
		}
		for key, value in record.__dict__.items():
			if key in _RESERVED_FIELDS or key.startswith("_"):
				continue
			payload[key] = value
		if record.exc_info:
			payload["exc_info"] = self.formatException(record.exc_info)
		return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", *, json_lines: bool = True, name: str = "bearenglish") -> logging.Logger:
	logger = logging.getLogger(name)
	logger.setLevel(level.upper())
	logger.propagate = False
	logger.handlers.clear()

	handler = logging.StreamHandler(sys.stderr)
	if json_lines:
		handler.setFormatter(JsonLineFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
	else:
		handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
	logger.addHandler(handler)

	# Request lines from the provider clients are not useful at INFO
	for noisy in ("httpx", "httpcore"):
		logging.getLogger(noisy).setLevel(logging.WARNING)
	return logger
