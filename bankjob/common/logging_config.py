import logging
import json
import os
import datetime
import traceback
from typing import Any, Optional, Union
from threading import local

# Thread-local storage for context (the id of the current run)
_context = local()


class JSONFormatter(logging.Formatter):
    """
    Custom formatter that outputs JSON records.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "run_id": getattr(_context, "run_id", "GLOBAL"),
        }

        # Add extra fields if they exist
        if hasattr(record, "extra_fields") and isinstance(record.extra_fields, dict):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
            log_data["stack_trace"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(log_level: Union[int, str] = logging.WARNING, log_file: Optional[str] = None):
    """
    Configure global logging settings.

    Args:
        log_level: level number or name ("DEBUG", "INFO", ...)
        log_file: optional path of a JSON log file, created with its directory
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown log level: {log_level}")

    if log_file and os.path.dirname(log_file):
        os.makedirs(os.path.dirname(log_file), exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug(
        "Logging infrastructure initialized.", extra={"extra_fields": {"status": "ready"}}
    )


def set_run_id(run_id: str):
    """Set the current run ID in context."""
    _context.run_id = run_id


def clear_run_id():
    """Forget the current run ID."""
    if hasattr(_context, "run_id"):
        del _context.run_id


class BankjobLoggerAdapter(logging.LoggerAdapter):
    """
    Adapter that allows passing extra context easily.
    """
    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = kwargs.get("extra", {})
        if "extra_fields" not in extra:
            extra["extra_fields"] = {}

        # Merge keyword args into extra_fields if they aren't part of Logger.log
        standard_args = {'exc_info', 'stack_info', 'stacklevel', 'extra'}
        new_kwargs = {}
        for key, value in kwargs.items():
            if key in standard_args:
                new_kwargs[key] = value
            else:
                extra["extra_fields"][key] = value

        new_kwargs["extra"] = extra
        return msg, new_kwargs


def get_logger(name: str) -> BankjobLoggerAdapter:
    """
    Return a structured logger for the given name.
    """
    return BankjobLoggerAdapter(logging.getLogger(name), {})
