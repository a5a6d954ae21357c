from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


EXTRA_WHITELIST = {"url", "status", "latency_ms", "command"}

_DEFAULT_LEVEL = "WARNING"


class JsonFormatter(logging.Formatter):
    """Formatter JSON con supporto campi extra selezionati."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        # Extra whitelisted
        for key in EXTRA_WHITELIST:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _level_from_env() -> int:
    raw = (os.getenv("FOOTBALLSCORE_LOG_LEVEL") or _DEFAULT_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName restituisce una stringa se il nome non è noto
    return level if isinstance(level, int) else logging.WARNING


def get_logger(name: str) -> logging.Logger:
    # stderr: stdout è riservato all'output renderizzato della CLI
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
        logger.setLevel(_level_from_env())
        logger.propagate = False
    return logger


def set_level(level: Optional[str]) -> None:
    """
    Applica il livello configurato (es. Settings.log_level) a tutti i logger
    già creati tramite get_logger.
    """
    if not level:
        return
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        return
    for logger in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger, logging.Logger) and any(
            isinstance(h.formatter, JsonFormatter) for h in logger.handlers
        ):
            logger.setLevel(resolved)


__all__ = ["JsonFormatter", "get_logger", "set_level"]
