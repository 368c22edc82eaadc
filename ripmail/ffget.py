"""Buffered line reader for mail files that copes with mixed line endings.

Lines may end with ``\\n``, ``\\r``, ``\\r\\n`` or ``\\n\\r``. A ``\\r\\r``
sequence or a lone ``\\r`` switches the reader into single-delimiter mode,
where every ``\\r`` and ``\\n`` ends a line, so that a message can be read
the way lenient mail clients read it.
"""

from __future__ import annotations

import enum
import io
import re
from typing import BinaryIO, Iterator

BUFFER_MAX = 8192
BUFFER_PADDING = 1
BLOCK_SIZE = BUFFER_MAX - BUFFER_PADDING
MAX_LINE_LEN = 1024

_LF = 0x0A
_CR = 0x0D
_SDL_DELIMITERS = re.compile(rb"[\n\r]")
_NORMAL_DELIMITERS = re.compile(rb"\n")


class LineBreak(enum.IntFlag):
    """Which characters ended the last line read."""

    NONE = 0
    LF = 1
    CR = 2


class LineReader:
    """Reads lines, single bytes or raw chunks from a binary stream.

    ``allow_nul`` keeps NUL bytes; otherwise they are turned into spaces.
    ``watch_sdl`` makes ``\\r`` a line delimiter from the start.
    Closing the reader does not close the underlying stream.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        allow_nul: bool = False,
        watch_sdl: bool = False,
    ) -> None:
        self.allow_nul = allow_nul
        self.watch_sdl = watch_sdl
        self.sdl_mode = False
        self.double_cr = False
        self.line_break = LineBreak.NONE
        self.last_break = b""
        self.true_blank = False
        self.line_count = 0
        self.bytes_read = 0

        self._stream: BinaryIO | None = stream
        self._buffer = b""
        self._pos = 0
        self._block_start = _initial_position(stream)
        self._file_end = False
        self._eof = False
        self._pushback: bytes | None = None
        self._last_char = b""

    # -- context manager and iteration ------------------------------------

    def __enter__(self) -> "LineReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[bytes]:
        while (line := self.readline()) is not None:
            yield line

    @property
    def eof(self) -> bool:
        """True once a read has found no more data."""
        return self._eof

    # -- buffer management -------------------------------------------------

    def _read_block(self) -> bool:
        if self._stream is None or self._file_end:
            return False
        data = self._stream.read(BLOCK_SIZE) or b""
        if len(data) < BLOCK_SIZE:
            self._file_end = True
        if not data:
            return False
        if not self.allow_nul:
            data = data.replace(b"\0", b" ")
        self._buffer += data
        self.bytes_read += len(data)
        return True

    def _ensure(self, index: int) -> bool:
        while index >= len(self._buffer):
            if not self._read_block():
                return False
        return True

    def _byte_at(self, index: int) -> int | None:
        return self._buffer[index] if self._ensure(index) else None

    def _compact(self) -> None:
        if self._pos:
            self._block_start += self._pos
            self._buffer = self._buffer[self._pos :]
            self._pos = 0

    # -- line reading ------------------------------------------------------

    def _find_delimiter(self, pattern: re.Pattern[bytes], limit: int) -> int | None:
        start = self._pos
        while True:
            match = pattern.search(self._buffer, start)
            if match:
                return match.start()
            if len(self._buffer) - self._pos >= limit:
                return None
            start = len(self._buffer)
            if not self._read_block():
                return None

    def _pair_break(self, end: int) -> int:
        """Return the index of the last byte of the line break starting at ``end``."""
        following = self._byte_at(end + 1)
        if following is None:
            return end

        if self._buffer[end] == _LF:
            self.line_break = LineBreak.LF
            self.last_break = b"\n"
            if following == _CR:
                self.line_break |= LineBreak.CR
                self.last_break = b"\n\r"
                end += 1
                following = self._byte_at(end + 1)

        if self._buffer[end] == _CR:
            self.line_break = LineBreak.CR
            self.last_break = b"\r"
            if following == _CR:
                self.double_cr = True
                self.sdl_mode = True
                end += 1
            elif following == _LF:
                self.last_break = b"\r\n"
                self.line_break |= LineBreak.LF
                if not self.sdl_mode:
                    end += 1
            else:
                self.sdl_mode = True
        return end

    def readline(self, max_size: int = MAX_LINE_LEN) -> bytes | None:
        """Return the next line with its line break, or None at end of input.

        A line holds at most ``max_size - 1`` bytes; longer lines are
        returned in pieces.
        """
        if max_size < 2:
            raise ValueError("max_size must be at least 2")

        self.true_blank = False
        self.line_break = LineBreak.NONE
        self.last_break = b""

        if self._eof:
            return None
        self._compact()
        if not self._ensure(self._pos):
            self._eof = True
            return None

        limit = max_size - 1
        if self.watch_sdl or self.sdl_mode:
            pattern = _SDL_DELIMITERS
        else:
            pattern = _NORMAL_DELIMITERS

        delimiter = self._find_delimiter(pattern, limit)
        if delimiter is None:
            end = len(self._buffer)
        else:
            end = self._pair_break(delimiter) + 1
        end = min(end, self._pos + limit)

        line = self._buffer[self._pos : end]
        self._pos = end

        if self._last_char in (b"\n", b"\r") and line[:1] in (b"\n", b"\r"):
            self.true_blank = True
        self._last_char = line[-1:]
        self.line_count += 1
        return line

    # -- byte and raw reading ----------------------------------------------

    def getc(self) -> bytes:
        """Return the next byte, or b"" at end of input."""
        if self._pushback is not None:
            char, self._pushback = self._pushback, None
            return char
        self._compact()
        if self._eof or not self._ensure(self._pos):
            self._eof = True
            return b""
        char = self._buffer[self._pos : self._pos + 1]
        self._pos += 1
        return char

    def ungetc(self, char: bytes | int) -> None:
        """Push back one byte to be returned by the next ``getc``."""
        if isinstance(char, int):
            char = bytes([char])
        if len(char) != 1:
            raise ValueError("ungetc takes exactly one byte")
        self._pushback = bytes(char)

    def read_raw(self, max_size: int) -> bytes:
        """Read up to ``max_size`` bytes, stopping after a run of line breaks."""
        self._compact()
        out = bytearray()
        while len(out) < max_size:
            if not self._ensure(self._pos):
                self._eof = True
                break
            char = self._buffer[self._pos]
            self._pos += 1
            out.append(char)
            if char in (_LF, _CR):
                following = self._byte_at(self._pos)
                if following not in (_LF, _CR):
                    break
        return bytes(out)

    # -- positioning -------------------------------------------------------

    def tell(self) -> int:
        """Return the stream offset of the next byte to be read."""
        return self._block_start + self._pos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move to ``offset`` and load a new block; return its size."""
        if self._stream is None:
            raise ValueError("reader is closed")
        position = self._stream.seek(offset, whence)
        self._buffer = b""
        self._pos = 0
        self._block_start = position
        self._file_end = False
        self._eof = False
        self._read_block()
        return len(self._buffer)

    def close(self) -> None:
        """Detach the stream; later reads report end of input."""
        self._stream = None
        self._buffer = b""
        self._pos = 0
        self._file_end = True


def _initial_position(stream: BinaryIO) -> int:
    try:
        return stream.tell()
    except (OSError, AttributeError):
        return 0