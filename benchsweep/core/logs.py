"""benchsweep.core.logs

stdlib logging only. Event names are snake_case messages; context rides in `extra`.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from benchsweep.core.config import LoggingConfig

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED}


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, sort_keys=True)


class PlainFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = _extra_fields(record)
        if extra:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(extra.items()))
        return line


class StderrHandler(logging.StreamHandler):
    """Writes to whatever sys.stderr is at emit time."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def configure_logging(cfg: LoggingConfig | None = None) -> logging.Logger:
    """Install a single stderr handler on the `benchsweep` logger. Idempotent."""

    cfg = cfg or LoggingConfig()
    logger = logging.getLogger("benchsweep")

    level = logging.getLevelName(cfg.level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    for h in list(logger.handlers):
        if getattr(h, "_benchsweep", False):
            logger.removeHandler(h)

    handler = StderrHandler()
    if cfg.json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(PlainFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    handler._benchsweep = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
