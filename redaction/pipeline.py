"""
Logging pipeline assembly.

Wires a standard ``logging.Logger`` to a RedactingWriter so every formatted
record is scrubbed before it reaches stdout/stderr (or any other byte sink).
Call sites keep using the ordinary logging API.

Example:
    from redaction.config import LoggerConfig
    from redaction.pipeline import build_logger

    log = build_logger(LoggerConfig.from_env())
    log.info('login body={"password": "hunter2"}')
    # ... INFO    app    login body={"password": "*"}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from .config import ENCODINGS, LoggerConfig
from .writer import RedactingWriter

logger = logging.getLogger(__name__)

LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}


def _iso_time(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).astimezone().isoformat(timespec="milliseconds")


def _level_name(record: logging.LogRecord) -> str:
    return LEVEL_NAMES.get(record.levelno, record.levelname)


def _caller(record: logging.LogRecord) -> str:
    return f"{record.filename}:{record.lineno}"


class ConsoleFormatter(logging.Formatter):
    """Tab-separated ``time LEVEL logger [caller] msg`` lines."""

    def __init__(self, caller_key: str = ""):
        super().__init__()
        self.caller_key = caller_key

    def format(self, record: logging.LogRecord) -> str:
        fields = [_iso_time(record), _level_name(record), record.name]
        if self.caller_key:
            fields.append(_caller(record))
        fields.append(record.getMessage())
        line = "\t".join(fields)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, [caller], msg, [stacktrace]."""

    def __init__(self, caller_key: str = ""):
        super().__init__()
        self.caller_key = caller_key

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": _iso_time(record),
            "level": _level_name(record),
            "logger": record.name,
        }
        if self.caller_key:
            entry[self.caller_key] = _caller(record)
        entry["msg"] = record.getMessage()
        if record.exc_info:
            entry["stacktrace"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class RedactingHandler(logging.StreamHandler):
    """
    StreamHandler whose stream is a RedactingWriter.

    Records are encoded to bytes before the write, so the rule chain always
    sees raw bytes. The handler lock serializes writes to the sink.
    """

    def __init__(self, writer: RedactingWriter, encoding: str = "utf-8"):
        super().__init__(writer)
        self.encoding = encoding

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record) + self.terminator
            self.stream.write(msg.encode(self.encoding, "backslashreplace"))
            self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def make_formatter(config: LoggerConfig) -> logging.Formatter:
    if config.encoding not in ENCODINGS:
        raise ValueError(f"Unknown log encoding {config.encoding!r}; expected one of {ENCODINGS}")
    if config.encoding == "json":
        return JsonFormatter(config.caller_key)
    return ConsoleFormatter(config.caller_key)


def build_logger(config: LoggerConfig, sink: Optional[Any] = None) -> logging.Logger:
    """
    Build (or rebuild) the named logger described by ``config``.

    Args:
        config: Logger configuration.
        sink: Byte sink for the RedactingWriter. Defaults to stdout's buffer
              for debug/info/warn and stderr's buffer for higher levels.

    Returns:
        The configured ``logging.Logger``. Existing handlers on it are
        replaced and propagation to the root logger is disabled.

    Raises:
        ValueError: If ``config.encoding`` is not console or json.
    """
    formatter = make_formatter(config)

    if sink is None:
        sink = sys.stderr.buffer if config.uses_stderr() else sys.stdout.buffer

    handler = RedactingHandler(RedactingWriter(sink, config.build_chain()))
    handler.setFormatter(formatter)

    log = logging.getLogger(config.name)
    for old in list(log.handlers):
        log.removeHandler(old)
        old.close()
    log.addHandler(handler)
    log.setLevel(config.level_number())
    log.propagate = False

    logger.debug(f"Built logger {config.name!r} at level {config.level!r} ({config.encoding})")
    return log
