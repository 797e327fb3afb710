import json
import os
import sys
import time
from datetime import datetime, date
from enum import Enum
from typing import Any, Dict, Iterable, Optional, TextIO

from .config import config

LEVELS = {"debug": 10, "info": 20, "warn": 30, "warning": 30, "error": 40}
_REDACT_KEYS = {"api_key", "authorization", "password", "secret", "token", "access_token", "refresh_token"}
SERVICE_NAME = "summary-service"


def _safe_default(o: Any) -> Any:
    """Fallback serializer for non-JSON-serializable types."""
    if isinstance(o, (datetime, date)):
        return o.isoformat()
    if isinstance(o, Enum):
        return o.value
    if isinstance(o, (set, frozenset, tuple)):
        return list(o)
    if isinstance(o, Exception):
        return {"type": o.__class__.__name__, "message": str(o)}
    # pydantic models
    dump = getattr(o, "model_dump", None)
    if callable(dump):
        return dump(mode="json")
    return str(o)


def _scrub(obj: Any, redact_keys: Iterable[str]) -> Any:
    """Recursively scrub sensitive fields by key name (case-insensitive)."""
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if isinstance(k, str) and k.lower() in redact_keys:
                out[k] = "[REDACTED]"
            else:
                out[k] = _scrub(v, redact_keys)
        return out
    if isinstance(obj, list):
        return [_scrub(v, redact_keys) for v in obj]
    return obj


class JsonLogger:
    """One JSON object per line: ts, event, level, pid, svc plus bound and call fields."""

    def __init__(self, level: str = "info", stream: Optional[TextIO] = None, **context: Any) -> None:
        self.level = LEVELS.get(level.lower(), 20)
        self._stream = stream
        self._pid = os.getpid()
        self._context = context

    def bind(self, **fields: Any) -> "JsonLogger":
        child = JsonLogger.__new__(JsonLogger)
        child.level = self.level
        child._stream = self._stream
        child._pid = self._pid
        child._context = {**self._context, **fields}
        return child

    def set_level(self, level: str) -> None:
        self.level = LEVELS.get(level.lower(), 20)

    def _emit(self, level_name: str, event: str, **fields: Any) -> None:
        if LEVELS.get(level_name, 20) < self.level:
            return
        rec: Dict[str, Any] = {
            "ts": int(time.time() * 1000),
            "event": event,
            "level": level_name.upper() if level_name != "warning" else "WARN",
            "pid": self._pid,
            "svc": SERVICE_NAME,
        }
        rec.update(self._context)
        rec.update(fields)
        rec = _scrub(rec, _REDACT_KEYS)

        # resolve at call time so pytest's capsys sees the output
        out = self._stream or sys.stdout
        try:
            out.write(json.dumps(rec, default=_safe_default, ensure_ascii=False) + "\n")
            out.flush()
        except Exception as e:
            # never crash a request because logging failed
            fallback = {
                "ts": rec.get("ts"),
                "event": "logger.error",
                "level": "ERROR",
                "orig_event": event,
                "error": str(e),
            }
            out.write(json.dumps(fallback, default=str) + "\n")
            out.flush()

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("debug", event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit("info", event, **fields)

    def warn(self, event: str, **fields: Any) -> None:
        self._emit("warn", event, **fields)

    # compatibility with std logging API
    def warning(self, event: str, **fields: Any) -> None:
        self._emit("warn", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit("error", event, **fields)


logger = JsonLogger(config.LOG_LEVEL)
__all__ = ["logger", "JsonLogger", "_safe_default"]
