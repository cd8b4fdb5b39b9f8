"""Root logger setup for the CLI and library callers.

Two output formats are supported: a single human-readable line per
record ("standard") or one JSON object per line ("json"). Fields bound
with LogContext appear as extra JSON keys.
"""

import json
import logging
import logging.handlers
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from timesheet_engine.config.settings import TimesheetSettings
from timesheet_engine.utils.logging_utils import _ContextFilter

STANDARD_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
STANDARD_DATEFMT = "%Y-%m-%d %H:%M:%S"

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Attributes every LogRecord carries; anything else came in via extra={}
# or a LogContext and is emitted as a structured field.
_RESERVED_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Renders a record as one JSON line, context fields included."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RESERVED_RECORD_FIELDS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class LoggingConfig(BaseModel):
    """
    Where and how log records are written.

    Attributes:
        log_level: Root level name
        log_format: "standard" or "json"
        log_file: Rotating log file path; no file output when None
        enable_console: Also write to stderr
        max_file_size: Rotation threshold in bytes
        backup_count: Rotated files kept
    """

    log_level: str = "INFO"
    log_format: str = "standard"
    log_file: Optional[str] = None
    enable_console: bool = True
    max_file_size: int = Field(5 * 1024 * 1024, gt=0)
    backup_count: int = Field(3, ge=0)

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        if v.upper() not in LEVEL_NAMES:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of {', '.join(LEVEL_NAMES)}"
            )
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ("standard", "json"):
            raise ValueError(f"Invalid log format: {v}. Must be 'standard' or 'json'")
        return v

    @classmethod
    def from_settings(
        cls,
        settings: TimesheetSettings,
        log_format: Literal["standard", "json"] = "standard",
    ) -> "LoggingConfig":
        """Build from application settings; DEBUG=true forces the DEBUG level."""
        return cls(
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_format=log_format,
        )

    def build_formatter(self) -> logging.Formatter:
        if self.log_format == "json":
            return JSONFormatter()
        return logging.Formatter(fmt=STANDARD_FORMAT, datefmt=STANDARD_DATEFMT)

    def build_handlers(self) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []
        if self.enable_console:
            handlers.append(logging.StreamHandler())
        if self.log_file:
            Path(self.log_file).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                logging.handlers.RotatingFileHandler(
                    self.log_file,
                    maxBytes=self.max_file_size,
                    backupCount=self.backup_count,
                    encoding="utf-8",
                )
            )
        return handlers


def _drop_root_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def configure_logging(config: LoggingConfig) -> None:
    """
    Replace the root logger's handlers according to ``config``.

    Safe to call repeatedly: previous handlers are closed first.
    """
    root = logging.getLogger()
    _drop_root_handlers(root)

    level = logging.getLevelName(config.log_level)
    root.setLevel(level)

    formatter = config.build_formatter()
    context_filter = _ContextFilter()
    for handler in config.build_handlers():
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)


def reset_logging() -> None:
    """Remove all root handlers and restore the default WARNING level."""
    root = logging.getLogger()
    _drop_root_handlers(root)
    root.setLevel(logging.WARNING)
