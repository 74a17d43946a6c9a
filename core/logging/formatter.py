from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict

from .context import get_context

_LEVEL_COLORS = {
    "TRACE": "\033[90m",
    "DEBUG": "\033[37m",
    "INFO": "\033[36m",
    "SUCCESS": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"

# Field names whose values are credentials and must never reach a log sink.
_SECRET_FIELDS = frozenset({"token", "key", "secret", "cookie", "cookies", "password", "authorization"})

_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime", "service", "classname", "execution_time_ms", "context"}


def mask(value: Any) -> str:
    text = str(value)
    if len(text) <= 8:
        return "***"
    return f"{text[:4]}***{text[-2:]}"


def redact(payload: Any) -> Any:
    if isinstance(payload, dict):
        return {
            k: (mask(v) if str(k).lower() in _SECRET_FIELDS and v else redact(v))
            for k, v in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [redact(v) for v in payload]
    return payload


def _record_metadata(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime(record.created)),
        "level": record.levelname,
        "service": getattr(record, "service", None),
        "module": record.module,
        "function": record.funcName,
        "line_number": record.lineno,
    }


def _record_extra(record: logging.LogRecord) -> Dict[str, Any]:
    extra = {k: v for k, v in vars(record).items() if k not in _RESERVED}
    return redact(extra)


class ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        try:
            md = _record_metadata(record)
            lvl = record.levelname
            parts = [
                md["timestamp"],
                lvl,
                md["service"] or "-",
                f"{md['module']}:{md['function']}:{md['line_number']}",
                record.getMessage(),
            ]
            extra = _record_extra(record)
            if extra:
                parts.append(" ".join(f"{k}={v}" for k, v in extra.items()))
            ctx = redact(getattr(record, "context", None) or get_context())
            if ctx:
                parts.append(f"{ctx}")
            if record.exc_info:
                parts.append(self.formatException(record.exc_info))
            return f"{_LEVEL_COLORS.get(lvl, '')}{' | '.join(parts)}{_RESET}"
        except Exception:
            return record.getMessage()


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        try:
            payload: Dict[str, Any] = _record_metadata(record)
            payload["message"] = record.getMessage()
            extra = _record_extra(record)
            if extra:
                payload["extra"] = extra
            ctx = redact(getattr(record, "context", None) or get_context())
            if ctx:
                payload["context"] = ctx
            exec_ms = getattr(record, "execution_time_ms", None)
            if exec_ms is not None:
                payload["execution_time_ms"] = exec_ms
            if record.exc_info:
                payload["exception"] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str, separators=(",", ":"))
        except Exception:
            return json.dumps({"message": "log format error"}, separators=(",", ":"))
