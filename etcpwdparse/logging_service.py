"""Logging layer for etcpwdparse.

A small structured logger on top of ``rich``: colored lines on stderr,
optional plain-text file output, key=value context and scoped loggers.

Typical use::

    from etcpwdparse.logging_service import configure_logging, get_logger

    configure_logging()  # optional: applies get_config().logging
    log = get_logger()
    log.info("Cache ready", entries=42)

    with log.step("Reload passwd", path="/etc/passwd"):
        ...

    scoped = log.bind(path="/etc/passwd")
    scoped.debug("Skipped malformed line", line_number=3)
"""

from __future__ import annotations

import atexit
import dataclasses
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from rich.console import Console
from rich.text import Text
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

from etcpwdparse.config import get_config
from etcpwdparse.config.constants import LEVEL_VALUES
from etcpwdparse.config.models import LoggerConfig

_DEFAULT_THEME = Theme(
    {
        "log.time": "cyan dim",
        "log.debug": "dim",
        "log.info": "white",
        "log.success": "bold green",
        "log.warning": "yellow",
        "log.error": "bold red",
        "log.critical": "white on red",
        "log.context": "bright_black",
    }
)

_TRACEBACK_INSTALLED = False


def _resolve_level(value: str | int) -> int:
    """Convert a level name or number into its numeric value."""

    if isinstance(value, int):
        return value
    return LEVEL_VALUES.get(value.upper(), LEVEL_VALUES["INFO"])


class PasswdLogger:
    """Main logger implementation."""

    def __init__(self, config: Optional[LoggerConfig] = None) -> None:
        self._config = LoggerConfig()
        self._console = Console(theme=_DEFAULT_THEME, highlight=False, stderr=True)
        self._min_level = _resolve_level(self._config.min_level)
        self._file_handle = None
        self._atexit_registered = False
        if config is not None:
            self.configure(config)

    # ------------------------------------------------------------------
    # Configuration and context
    # ------------------------------------------------------------------

    @property
    def config(self) -> LoggerConfig:
        """Active configuration."""

        return self._config

    def configure(self, config: LoggerConfig) -> None:
        """Apply a new configuration.

        Args:
            config: Ready :class:`LoggerConfig` instance.
        """

        global _TRACEBACK_INSTALLED

        self._config = config
        self._min_level = _resolve_level(config.min_level)

        if config.use_colors:
            self._console = Console(theme=_DEFAULT_THEME, highlight=False, stderr=True)
        else:
            self._console = Console(theme=_DEFAULT_THEME, highlight=False, stderr=True, no_color=True)

        self.close()

        if config.rich_traceback and not _TRACEBACK_INSTALLED:
            install_rich_traceback(show_locals=False)
            _TRACEBACK_INSTALLED = True

    def bind(self, **data: Any) -> "_ScopedLogger":
        """Return a derived logger that adds ``data`` to every line.

        Args:
            **data: Context merged into each message.

        Returns:
            A :class:`_ScopedLogger` sharing this logger's sinks.
        """

        return _ScopedLogger(self, self._filter_data(data))

    def is_enabled_for(self, level: str) -> bool:
        """Return True when messages at ``level`` would be emitted."""

        return _resolve_level(level) >= self._min_level

    # ------------------------------------------------------------------
    # Public logging API
    # ------------------------------------------------------------------

    def debug(self, message: str, **data: Any) -> None:
        self._log("debug", message, data, None)

    def info(self, message: str, **data: Any) -> None:
        self._log("info", message, data, None)

    def success(self, message: str, **data: Any) -> None:
        """Log at SUCCESS (25)."""
        self._log("success", message, data, None)

    def warning(self, message: str, **data: Any) -> None:
        self._log("warning", message, data, None)

    def error(self, message: str, **data: Any) -> None:
        self._log("error", message, data, None)

    def critical(self, message: str, **data: Any) -> None:
        self._log("critical", message, data, None)

    @contextmanager
    def step(
        self,
        title: str,
        start_message: Optional[str] = None,
        success_message: Optional[str] = None,
        failure_message: Optional[str] = None,
        **data: Any,
    ):
        """Context manager logging the start, success and failure of a step.

        Exceptions raised inside the block are logged and re-raised.
        """

        with self._step_context(
            None, title, start_message, success_message, failure_message, self._filter_data(data)
        ):
            yield

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _filter_data(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Drop pairs whose value is ``None``."""

        return {k: v for k, v in data.items() if v is not None}

    def _log(
        self,
        level: str,
        message: str,
        data: Mapping[str, Any],
        extra_context: Optional[Mapping[str, Any]],
    ) -> None:
        if not self.is_enabled_for(level):
            return

        clean_data = self._filter_data(data)
        context = self._filter_data(extra_context or {})

        self._emit_console(level, message, context, clean_data)
        self._emit_file(level, message, context, clean_data)

    def _emit_console(
        self,
        level: str,
        message: str,
        context: Mapping[str, Any],
        data: Mapping[str, Any],
    ) -> None:
        text = Text()
        if self._config.show_time:
            text.append(self._now(), style="log.time")
            text.append("  ")

        style = f"log.{level}"
        text.append(f"[{level.upper()}]", style=style)
        text.append("  ")
        text.append(message, style=style)

        extras = self._format_extras(context, data)
        if extras:
            text.append("  ")
            text.append(extras, style="log.context")

        self._console.print(text)

    def _emit_file(
        self,
        level: str,
        message: str,
        context: Mapping[str, Any],
        data: Mapping[str, Any],
    ) -> None:
        if not self._config.log_file:
            return

        handle = self._get_handle()
        handle.write(self._file_line(level, message, context, data) + "\n")
        handle.flush()

    def _get_handle(self):
        """Open the log file on first use."""

        if self._file_handle is None:
            path = Path(self._config.log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            mode = "w" if self._config.overwrite_file else "a"
            self._file_handle = path.open(mode, encoding="utf-8")
            if not self._atexit_registered:
                atexit.register(self.close)
                self._atexit_registered = True
        return self._file_handle

    def _format_extras(self, context: Mapping[str, Any], data: Mapping[str, Any]) -> str:
        parts: list[str] = []
        if context:
            parts.extend(self._format_dict(context))
        if data:
            parts.extend(self._format_dict(data))
        return " ".join(parts)

    def _format_dict(self, values: Mapping[str, Any]) -> Iterable[str]:
        for key in sorted(values):
            yield f"{key}={self._format_value(values[key])}"

    def _format_value(self, value: Any) -> str:
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            if value.strip() == value and " " not in value and value:
                return value
            return repr(value)
        return repr(value)

    def _file_line(
        self,
        level: str,
        message: str,
        context: Mapping[str, Any],
        data: Mapping[str, Any],
    ) -> str:
        parts = [self._now(with_date=True), self._config.name, level.upper(), message]
        if context:
            parts.append("context=" + ",".join(self._format_dict(context)))
        if data:
            parts.append("data=" + ",".join(self._format_dict(data)))
        return " | ".join(parts)

    def _now(self, with_date: bool = False) -> str:
        fmt = "%Y-%m-%d %H:%M:%S" if with_date else "%H:%M:%S"
        return datetime.now().strftime(fmt)

    def close(self) -> None:
        """Close the log file, if one is open."""

        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None

    def _step_context(
        self,
        extra_context: Optional[Mapping[str, Any]],
        title: str,
        start_message: Optional[str],
        success_message: Optional[str],
        failure_message: Optional[str],
        data: Mapping[str, Any],
    ):
        @contextmanager
        def _ctx():
            self._log("info", start_message or f"Starting: {title}", data, extra_context)
            try:
                yield
            except Exception:
                self._log("error", failure_message or f"Failed: {title}", data, extra_context)
                raise
            else:
                self._log("success", success_message or f"Done: {title}", data, extra_context)

        return _ctx()


class _ScopedLogger:
    """Thin wrapper adding fixed context to an existing logger."""

    def __init__(self, base: PasswdLogger, context: Mapping[str, Any]) -> None:
        self._base = base
        self._context = dict(context)

    def bind(self, **data: Any) -> "_ScopedLogger":
        """Return a new scope accumulating more context."""

        merged = dict(self._context)
        merged.update(self._base._filter_data(data))
        return _ScopedLogger(self._base, merged)

    def debug(self, message: str, **data: Any) -> None:
        self._base._log("debug", message, data, self._context)

    def info(self, message: str, **data: Any) -> None:
        self._base._log("info", message, data, self._context)

    def success(self, message: str, **data: Any) -> None:
        self._base._log("success", message, data, self._context)

    def warning(self, message: str, **data: Any) -> None:
        self._base._log("warning", message, data, self._context)

    def error(self, message: str, **data: Any) -> None:
        self._base._log("error", message, data, self._context)

    def critical(self, message: str, **data: Any) -> None:
        self._base._log("critical", message, data, self._context)

    @contextmanager
    def step(
        self,
        title: str,
        start_message: Optional[str] = None,
        success_message: Optional[str] = None,
        failure_message: Optional[str] = None,
        **data: Any,
    ):
        """Same as :meth:`PasswdLogger.step`, keeping this scope's context."""

        with self._base._step_context(
            self._context,
            title,
            start_message,
            success_message,
            failure_message,
            self._base._filter_data(data),
        ):
            yield


# Process-wide instance ---------------------------------------------------

_logger_instance: Optional[PasswdLogger] = None


def get_logger() -> PasswdLogger:
    """Return the singleton logger."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = PasswdLogger()
    return _logger_instance


def configure_logging(config: Optional[LoggerConfig] = None, **overrides: Any) -> PasswdLogger:
    """Configure the global logger and return it.

    When no configuration is given, the ``logging`` section of
    :func:`etcpwdparse.config.get_config` is used.

    Args:
        config: Optional configuration to apply.
        **overrides: Fields replaced on the final configuration.
    """

    if config is None:
        config = get_config().logging
    if overrides:
        config = dataclasses.replace(config, **overrides)
    logger = get_logger()
    logger.configure(config)
    return logger


__all__ = ["PasswdLogger", "get_logger", "configure_logging"]
