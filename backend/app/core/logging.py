"""
Logging setup for the ShortsStudio backend

Two renderings of the same records:
- JSON lines (JSON_LOGS=true, and always for LOG_FILE) for collection
- A compact colored line for local development

Every line carries the HTTP request id and, once a report id is assigned,
the generation job id. Values under credential-looking keys are redacted.
"""

import json
import logging
import sys
import time
from contextvars import ContextVar
from datetime import datetime, UTC
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

REDACTED = "***REDACTED***"
SENSITIVE_KEY_TOKENS = ("secret", "token", "api_key", "apikey", "authorization", "x-goog-api-key")

# Context fields shown in the development line when present on a record
DEV_CONTEXT_FIELDS = ("component", "phase", "progress", "error_kind", "branch")

QUIET_LOGGERS = ("httpx", "httpcore", "google_genai", "asyncio", "uvicorn.access")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
job_id_var: ContextVar[Optional[str]] = ContextVar("job_id", default=None)

# Attributes every LogRecord has; anything else arrived through `extra=`
_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def redact(key: str, value: Any) -> Any:
    """Replace values stored under credential-looking keys, recursively."""
    if any(token in key.lower() for token in SENSITIVE_KEY_TOKENS):
        return REDACTED
    if isinstance(value, dict):
        return {k: redact(str(k), v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [redact(key, item) for item in value]
    return value


def record_extra(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


def _correlation() -> Dict[str, str]:
    ids = {"request_id": request_id_var.get(), "job_id": job_id_var.get()}
    return {key: value for key, value in ids.items() if value}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_correlation(),
        }
        extra = record_extra(record)
        if extra:
            entry["extra"] = redact("extra", extra)
        if record.exc_info:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }
        return json.dumps(entry, default=str)


class DevelopmentFormatter(logging.Formatter):
    """HH:MM:SS LEVEL logger [req, job] message (component=..., phase=...)"""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        ids = _correlation()
        tags = []
        if "request_id" in ids:
            tags.append(f"req:{ids['request_id'][:8]}")
        if "job_id" in ids:
            tags.append(f"job:{ids['job_id']}")
        tag_text = f" [{', '.join(tags)}]" if tags else ""

        extra = record_extra(record)
        fields = [f"{name}={extra[name]}" for name in DEV_CONTEXT_FIELDS if name in extra]
        field_text = f" ({', '.join(fields)})" if fields else ""

        line = f"{color}{stamp} {record.levelname:<7}{self.RESET} {record.name}{tag_text} {record.getMessage()}{field_text}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class LoggerAdapter(logging.LoggerAdapter):
    """Merges the adapter's bound fields with the per-call `extra`"""

    def process(self, msg: str, kwargs: Any) -> tuple:
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    use_json: bool = False,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name
        log_file: Optional rotating file, always written as JSON lines
        use_json: JSON lines on stdout instead of the development line
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(StructuredFormatter() if use_json else DevelopmentFormatter())
    root.addHandler(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> LoggerAdapter:
    """
    Get a logger with bound fields

    Example:
        logger = get_logger(__name__, component="orchestrator")
        logger.info("Phase changed", extra={"phase": "scripting"})
    """
    return LoggerAdapter(logging.getLogger(name), extra)


def set_request_id(request_id: Optional[str]) -> None:
    request_id_var.set(request_id)


def set_job_id(job_id: Optional[str]) -> None:
    """Bind the report job id to subsequent log lines in this context"""
    job_id_var.set(job_id)


def clear_context() -> None:
    request_id_var.set(None)
    job_id_var.set(None)


class LogTimer:
    """Logs the start and end of a pipeline step with its duration"""

    def __init__(self, logger: logging.LoggerAdapter, operation: str, level: int = logging.INFO):
        self.logger = logger
        self.operation = operation
        self.level = level
        self._started = 0.0

    def __enter__(self) -> "LogTimer":
        self._started = time.perf_counter()
        self.logger.log(self.level, f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb) -> None:
        duration = round(time.perf_counter() - self._started, 3)
        if exc_type is None:
            self.logger.log(self.level, f"Completed: {self.operation}", extra={"duration_seconds": duration})
        elif issubclass(exc_type, Exception):
            self.logger.warning(
                f"Failed: {self.operation}",
                extra={"duration_seconds": duration, "error": str(exc_val)},
            )
