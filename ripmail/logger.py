"""Small logging front end that can write to stderr, stdout, a file or syslog."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field
from typing import TextIO

try:
    import syslog as _syslog
except ImportError:  # pragma: no cover - platforms without syslog
    _syslog = None

_WHITESPACE = " \t\n\v\f\r"
_WRAP_BREAKS = "\t\r\n\v "


class LogMode(enum.IntEnum):
    """Where log messages are sent."""

    STDERR = 1
    STDOUT = 2
    FILE = 3
    SYSLOG = 4
    NULL = 5


def _default_mode() -> LogMode:
    return LogMode.SYSLOG if _syslog is not None else LogMode.STDERR


def _default_priority() -> int:
    if _syslog is None:
        return 0
    return _syslog.LOG_MAIL | _syslog.LOG_INFO


@dataclass
class Logger:
    """Writes messages to the destination chosen by ``mode``.

    Messages are cleaned before output: every ``%`` is doubled and, when
    ``wrap`` is set, lines are broken at roughly ``wrap_length`` characters.
    """

    mode: LogMode = field(default_factory=_default_mode)
    syslog_priority: int = field(default_factory=_default_priority)
    wrap: bool = False
    wrap_length: int = 0
    output: TextIO | None = None

    def __post_init__(self) -> None:
        self.mode = LogMode(self.mode)
        if self.wrap_length < 0:
            raise ValueError("wrap_length must not be negative")

    def clean_output(self, text: str) -> str:
        """Return ``text`` with ``%`` doubled and wrapping applied."""
        max_size = len(text) * 2
        out: list[str] = []
        written = 0
        line_size = 0
        wrapping = bool(self.wrap)

        for index, char in enumerate(text):
            if wrapping:
                if char in _WHITESPACE:
                    next_space = _find_any(text, _WRAP_BREAKS, index + 1)
                    if next_space is not None and (
                        line_size + (next_space - index) >= self.wrap_length
                    ):
                        out.append("\n")
                        written += 1
                        line_size = 0
                if line_size >= self.wrap_length:
                    out.append("\n")
                    written += 1
                    line_size = 0

            if char == "%":
                out.append("%")
                written += 1

            out.append(char)
            written += 1
            line_size += 1

            if written > max_size - 1:
                break

        return "".join(out)

    def log(self, message: str) -> None:
        """Clean ``message`` and send it to the configured destination."""
        text = self.clean_output(message)
        line_end = "" if text.endswith("\n") else "\n"

        if self.mode is LogMode.STDERR:
            sys.stderr.write(text + line_end)
        elif self.mode is LogMode.STDOUT:
            sys.stdout.write(text + line_end)
            sys.stdout.flush()
        elif self.mode is LogMode.FILE:
            if self.output is None:
                raise RuntimeError("no log file is open")
            self.output.write(text + line_end)
            self.output.flush()
        elif self.mode is LogMode.SYSLOG:
            if _syslog is None:
                raise RuntimeError("syslog is not available on this platform")
            _syslog.syslog(self.syslog_priority, text)
        # LogMode.NULL discards everything.

    def open_logfile(self, path: str) -> None:
        """Open ``path`` for appending and use it as the file output."""
        self.close()
        self.output = open(path, "a", encoding="utf-8")

    def close(self) -> None:
        """Close the file output, if one is open."""
        if self.output is not None:
            self.output.close()
            self.output = None


def _find_any(text: str, chars: str, start: int) -> int | None:
    for position in range(start, len(text)):
        if text[position] in chars:
            return position
    return None


_default_logger = Logger()


def get_logger() -> Logger:
    """Return the shared logger used by the package."""
    return _default_logger


def log(message: str) -> None:
    """Log ``message`` through the shared logger."""
    _default_logger.log(message)