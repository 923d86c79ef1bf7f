"""
Logging for the translation tools.

Everything logs under the ``mdtranslate`` namespace. Console output goes to
stderr; stdout is left for the run summary and the debug checklist.

Usage:
    from mdtranslate.utils.logger import get_logger, setup_logging

    logger = get_logger(__name__)
    logger.info("Scanning docs/")

    setup_logging(level="DEBUG", log_file="logs/translate.log")
"""
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

ROOT_LOGGER = "mdtranslate"

LEVEL_COLORS = {
    logging.DEBUG: '\033[36m',     # Cyan
    logging.INFO: '\033[32m',      # Green
    logging.WARNING: '\033[33m',   # Yellow
    logging.ERROR: '\033[31m',     # Red
    logging.CRITICAL: '\033[35m',  # Magenta
}
RESET = '\033[0m'
DIM = '\033[2m'


def _short_name(name: str) -> str:
    prefix = ROOT_LOGGER + '.'
    return name[len(prefix):] if name.startswith(prefix) else name


class ColoredFormatter(logging.Formatter):
    """``HH:MM:SS [LEVEL] module: message``, colored when the stream is a terminal."""

    def __init__(self, stream=None):
        super().__init__(datefmt="%H:%M:%S")
        stream = stream if stream is not None else sys.stderr
        self.use_color = hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        stamp = self.formatTime(record, self.datefmt)
        level = f"[{record.levelname:7}]"
        if self.use_color:
            stamp = f"{DIM}{stamp}{RESET}"
            level = f"{LEVEL_COLORS.get(record.levelno, '')}{level}{RESET}"

        text = f"{stamp} {level} {_short_name(record.name)}: {record.getMessage()}"
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


class FileFormatter(logging.Formatter):
    """Plain lines with full timestamps."""

    def __init__(self):
        super().__init__('%(asctime)s [%(levelname)-7s] %(name)s: %(message)s', '%Y-%m-%d %H:%M:%S')


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


_configured = False


def _file_handler(log_file: str, json_format: bool) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(JSONFormatter() if json_format else FileFormatter())
    return handler


def setup_logging(
    level: LogLevel = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    quiet: bool = False
) -> None:
    """
    Configure the package logger. Calling it again replaces earlier handlers.

    Args:
        level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Also write every record, DEBUG included, to this file
        json_format: JSON lines instead of plain text in the log file
        quiet: No console output
    """
    global _configured

    console_level = getattr(logging, level.upper())

    root = logging.getLogger(ROOT_LOGGER)
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if not quiet:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(console_level)
        console.setFormatter(ColoredFormatter(sys.stderr))
        root.addHandler(console)

    if log_file:
        root.addHandler(_file_handler(log_file, json_format))

    root.setLevel(logging.DEBUG if log_file else console_level)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Logger inside the package namespace; sets up defaults on first use.

    Example:
        >>> get_logger("scanner").name
        'mdtranslate.scanner'
    """
    if not _configured:
        setup_logging()

    if name in ('__main__', ROOT_LOGGER):
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER + '.'):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)


def set_level(level: LogLevel) -> None:
    """Change log level at runtime."""
    log_level = getattr(logging, level.upper())
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(log_level)
    for handler in root.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(log_level)
