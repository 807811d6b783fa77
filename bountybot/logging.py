"""Bot-wide logging on top of femtologging.

Levels carry a fixed meaning across the bot:

- ``DEBUG``: a handler stopped early because a prerequisite was missing
  (no assignees, no time label, no price).
- ``INFO``: progress worth seeing in production (deliveries received,
  comments posted, rows written).
- ``WARNING``: a store failure or a handler reporting a failed result.
- ``ERROR``: a handler raised; :func:`log_exception` attaches the exception.

Messages are formatted here with percent-style interpolation before they
reach femtologging, whose loggers take a finished string.

Usage
-----
>>> from bountybot.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Posting deadline on #%s", 42)

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "LogLevel",
    "configure_logging",
    "format_log_message",
    "get_logger",
    "log_debug",
    "log_error",
    "log_exception",
    "log_info",
    "log_warning",
    "normalize_log_level",
]


class LogLevel(enum.StrEnum):
    """Level names femtologging accepts."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_LOG_LEVEL = LogLevel.INFO


class _SupportsLog(typ.Protocol):
    """The part of a femtologging logger the helpers call."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Map a ``BOUNTYBOT_LOG_LEVEL`` value onto a femtologging level.

    Matching ignores case and surrounding whitespace. Unset, blank or
    unknown values fall back to :data:`DEFAULT_LOG_LEVEL`.

    Returns
    -------
    tuple[str, bool]
        The level to use and whether the input had to be replaced.

    """
    candidate = (level or "").strip().upper()
    if candidate in LogLevel.__members__:
        return (str(LogLevel[candidate]), False)
    return (str(DEFAULT_LOG_LEVEL), True)


def configure_logging(level: str, *, force: bool = False) -> tuple[str, bool]:
    """Install femtologging's root handler at the normalised ``level``.

    Returns the same pair as :func:`normalize_log_level`, so the caller can
    warn about a replaced level once logging is up.
    """
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


def format_log_message(template: str, *args: object) -> str:
    """Interpolate ``args`` into ``template`` percent-style."""
    return template % args


def _emit(
    logger: _SupportsLog,
    level: LogLevel,
    message: str,
    exc_info: object | None = None,
) -> None:
    logger.log(str(level), message, exc_info=exc_info, stack_info=False)


def log_debug(logger: _SupportsLog, template: str, *args: object) -> None:
    """Record a validation gap that ended a handler early."""
    _emit(logger, LogLevel.DEBUG, format_log_message(template, *args))


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Record routine progress.

    Parameters
    ----------
    logger
        Logger obtained from :func:`get_logger`.
    template
        Percent-style template, e.g. ``"Posting deadline on #%s"``.
    *args
        Values interpolated into ``template``.
    exc_info
        Optional exception to attach.

    """
    _emit(logger, LogLevel.INFO, format_log_message(template, *args), exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Record a store failure or a failed handler result."""
    _emit(logger, LogLevel.WARNING, format_log_message(template, *args), exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Record a fault the process cannot recover from on its own."""
    _emit(logger, LogLevel.ERROR, format_log_message(template, *args), exc_info)


def log_exception(logger: _SupportsLog, message: str, exc: BaseException) -> None:
    """Record a raised exception at ERROR.

    ``message`` is logged as given, without interpolation, so handler names
    or payload text containing ``%`` are safe to include.
    """
    _emit(logger, LogLevel.ERROR, message, exc)
