"""Logging setup: shared handlers and named loggers for the command trees."""

import logging

from .ansi import LogStyles, make_style, should_colorize
from .debug import is_debug, set_debug

__all__ = [
    "LogObjects",
    "get_logger",
    "init_logger",
]

FILE_FORMAT = r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"


class LogObjects:
    """Handlers attached to every logger returned by `get_logger`."""

    handlers: list[logging.Handler] = []


class ScreenLogFormatter(logging.Formatter):
    """Colors warnings and errors when the terminal supports it."""

    def __init__(self) -> None:
        super().__init__()
        fmt = r"%(name)25s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        styles = {
            logging.WARNING: LogStyles.WARNING,
            logging.ERROR: LogStyles.ERROR,
            logging.CRITICAL: LogStyles.CRITICAL,
        }
        colored = should_colorize()
        self._formatters: dict[int, logging.Formatter] = {}
        for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL):
            before, after = make_style(*styles[level]) if colored and level in styles else ("", "")
            self._formatters[level] = logging.Formatter(before + fmt + after)

    def format(self, record: logging.LogRecord) -> str:
        return self._formatters.get(record.levelno, self._formatters[logging.INFO]).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """(Re)build the shared handlers.

    Args:
        filename: Also log to this file when set
        force_debug: Turn debug mode on
    """
    if force_debug:
        set_debug(True)

    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter())
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "cmdtree", level: int | None = None) -> logging.Logger:
    """Return a named logger wired to the shared handlers.

    Calling it twice with the same name returns the same logger without
    attaching the handlers a second time.

    Args:
        name: Logger name
        level: Logger level, DEBUG in debug mode and WARNING otherwise when not set

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        level = logging.DEBUG if is_debug() else logging.WARNING
    logger.setLevel(level)
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.debug('Logger "%s" initialized', name)
    return logger
