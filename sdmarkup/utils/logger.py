"""
Logging for sdmarkup runs.

MarkupLogger wraps the "sdmarkup" logger: every record gets a millisecond
timestamp and the call site, keyword arguments are appended as key=value
pairs, and warnings/errors are kept so a CLI run can report them at the end.

Library modules only call logging.getLogger(__name__); their records reach
the handlers installed here because "sdmarkup.*" loggers propagate to it.
"""

import logging
import sys
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(filename)s:%(lineno)d | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S,%f"

# Third-party loggers that should share the format above
EXTERNAL_LOGGERS = ["bs4", "extruct", "rdflib"]


class MillisecondsFormatter(logging.Formatter):
    """Formatter whose ',%f' date directive renders as 3-digit milliseconds."""

    def formatTime(self, record, datefmt=None):  # noqa: N802 - overrides logging.Formatter
        created = datetime.fromtimestamp(record.created)
        fmt = datefmt or LOG_DATE_FORMAT
        if ",%f" not in fmt:
            return created.strftime(fmt)
        return f"{created.strftime(fmt.replace(',%f', ''))},{int(record.msecs):03d}"


def _level(name: str) -> int:
    return getattr(logging, name.upper())


def _with_fields(message: str, fields: dict) -> str:
    if not fields:
        return message
    return f"{message} [{' '.join(f'{k}={v}' for k, v in fields.items())}]"


@dataclass
class LoggedIssue:
    """A warning or error kept for the end-of-run summary."""

    level: str
    message: str
    exception: Optional[str] = None
    data: dict = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


class MarkupLogger:
    """Structured logger with issue tracking."""

    def __init__(
        self,
        name: str = "sdmarkup",
        log_level: str = "INFO",
        log_file: Optional[str] = None,
        log_dir: Optional[Path] = None,
        stream: Optional[TextIO] = None,
    ):
        """
        Args:
            name: Logger name
            log_level: DEBUG, INFO, WARNING or ERROR
            log_file: Also write every record (DEBUG and up) to this file
            log_dir: Directory for log_file, defaults to ./logs
            stream: Console stream, defaults to stderr so rewritten HTML can use stdout
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(_level(log_level))
        self.logger.propagate = False  # handlers live here, not on root
        self.logger.handlers.clear()

        formatter = MillisecondsFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        console = logging.StreamHandler(stream or sys.stderr)
        console.setLevel(_level(log_level))
        console.setFormatter(formatter)
        self.logger.addHandler(console)

        self.issues: list[LoggedIssue] = []
        self.documents_rewritten = 0

        if log_file:
            log_path = (log_dir or Path.cwd() / "logs") / log_file
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

            self.info("Logging to file", path=log_path)

    @property
    def errors(self) -> list[LoggedIssue]:
        return [i for i in self.issues if i.level == "ERROR"]

    @property
    def warnings(self) -> list[LoggedIssue]:
        return [i for i in self.issues if i.level == "WARNING"]

    def debug(self, message: str, **kwargs):
        self.logger.debug(_with_fields(message, kwargs), stacklevel=2)

    def info(self, message: str, **kwargs):
        self.logger.info(_with_fields(message, kwargs), stacklevel=2)

    def warning(self, message: str, **kwargs):
        """Log a warning and keep it for get_error_summary()."""
        text = _with_fields(message, kwargs)
        self.logger.warning(text, stacklevel=2)
        self.issues.append(LoggedIssue("WARNING", text, data=kwargs))

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log an error (with traceback when an exception is given) and keep it."""
        if exception is not None:
            message = f"{message} | Exception: {exception}"
        text = _with_fields(message, kwargs)
        self.logger.error(text, exc_info=exception is not None, stacklevel=2)
        self.issues.append(
            LoggedIssue("ERROR", text, exception=str(exception) if exception is not None else None, data=kwargs)
        )

    def log_document_rewritten(self, source: str, semantic: str, size_in: int, size_out: int):
        self.documents_rewritten += 1
        self.info("Rewrote document", source=source, semantic=semantic, bytes_in=size_in, bytes_out=size_out)

    @contextmanager
    def time_operation(self, operation: str, **context):
        """
        Time a block, logging start/finish at debug level and failures as errors.

        Usage:
            with logger.time_operation("rewrite", source="index.html"):
                result = parser.parse(html)
        """
        started = datetime.now()
        self.debug(f"Starting {operation}", **context)
        try:
            yield
        except Exception as e:
            elapsed = round((datetime.now() - started).total_seconds(), 3)
            self.error(f"Failed {operation}", exception=e, duration_seconds=elapsed, **context)
            raise
        elapsed = round((datetime.now() - started).total_seconds(), 3)
        self.debug(f"Completed {operation}", duration_seconds=elapsed, **context)

    def get_error_summary(self) -> dict:
        errors, warnings = self.errors, self.warnings
        return {
            "total_errors": len(errors),
            "total_warnings": len(warnings),
            "documents_rewritten": self.documents_rewritten,
            "errors": [asdict(i) for i in errors],
            "warnings": [asdict(i) for i in warnings],
        }

    def clear_tracking(self):
        self.issues = []
        self.documents_rewritten = 0


_default_logger: Optional[MarkupLogger] = None


def get_logger(name: str = "sdmarkup", log_level: str = "INFO", log_file: Optional[str] = None) -> MarkupLogger:
    """Return the process-wide MarkupLogger, creating it on first call."""
    global _default_logger

    if _default_logger is None:
        _default_logger = MarkupLogger(name=name, log_level=log_level, log_file=log_file)
    return _default_logger


def configure_global_logging(log_level: str = "INFO"):
    """
    Route root and third-party records (bs4, extruct, rdflib) through one
    stderr handler with the sdmarkup format. Call once at startup.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level(log_level))
    handler.setFormatter(MillisecondsFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(_level(log_level))
    root.handlers.clear()
    root.addHandler(handler)

    for lib_name in EXTERNAL_LOGGERS:
        lib_logger = logging.getLogger(lib_name)
        lib_logger.handlers.clear()
        lib_logger.setLevel(_level(log_level))
        lib_logger.propagate = True
