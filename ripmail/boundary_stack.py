"""Stack of MIME boundary strings with nested-boundary matching."""

from __future__ import annotations

from dataclasses import dataclass, field

_STRLEN_MAX = 1024
_DEFAULT_DETECT_LIMIT = 4
_TESTSPACE_CHARS = 126


def non_hyphen_length(boundary: str) -> int:
    """Return how many ASCII letters and digits ``boundary`` holds."""
    return sum(1 for char in boundary if char.isascii() and char.isalnum())


@dataclass(frozen=True)
class _Entry:
    boundary: str
    length: int
    nhl: int

    @classmethod
    def of(cls, boundary: str) -> "_Entry":
        return cls(boundary, len(boundary), non_hyphen_length(boundary))


@dataclass
class BoundaryStack:
    """Boundaries of nested multipart sections, innermost on top.

    ``detect_limit`` is how many starting offsets into a line are tried
    when looking for a boundary; ``hold_limit`` caps how many boundaries
    are kept (0 means no cap).
    """

    detect_limit: int = _DEFAULT_DETECT_LIMIT
    hold_limit: int = 0
    _entries: list[_Entry] = field(default_factory=list, init=False, repr=False)
    _smallest_length: int = field(default=-1, init=False, repr=False)
    _have_empty_boundary: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0 < self.detect_limit < _STRLEN_MAX:
            raise ValueError(
                f"detect_limit must be between 1 and {_STRLEN_MAX - 1}"
            )
        if self.hold_limit < 0:
            raise ValueError("hold_limit must not be negative")

    def push(self, boundary: str) -> None:
        """Put ``boundary`` on top; ignored once ``hold_limit`` is reached."""
        if self.hold_limit > 0 and len(self._entries) >= self.hold_limit:
            return
        entry = _Entry.of(boundary)
        self._entries.append(entry)
        if entry.length == 0:
            self._have_empty_boundary = True
        if self._smallest_length == -1 or entry.length < self._smallest_length:
            self._smallest_length = entry.length

    def pop(self) -> str:
        """Remove and return the top boundary; IndexError when empty."""
        if not self._entries:
            raise IndexError("pop from an empty boundary stack")
        return self._entries.pop().boundary

    def top(self) -> str | None:
        """Return the top boundary, or None when the stack is empty."""
        return self._entries[-1].boundary if self._entries else None

    def clear(self) -> None:
        """Drop every boundary."""
        self._entries.clear()
        self._smallest_length = -1

    def __len__(self) -> int:
        return len(self._entries)

    def is_long_enough(self, length: int) -> bool:
        """Whether a line of ``length`` could hold the shortest boundary."""
        if self._smallest_length == -1:
            return False
        return length >= self._smallest_length

    def detect(self, haystack: str, needle: str) -> bool:
        """Look for ``needle`` at the first ``detect_limit`` offsets of ``haystack``."""
        if not needle:
            if self._have_empty_boundary:
                return haystack.startswith("--")
            return False

        size = len(needle)
        for start in range(min(self.detect_limit, len(haystack))):
            if haystack[start : start + size] == needle:
                return True
        return False

    def matches(self, line: str) -> bool:
        """Whether ``line`` is one of the held boundaries.

        On a hit, every boundary above the matching one is discarded,
        as nested MIME sections end with their enclosing one.
        """
        if not self._entries:
            return False
        if not self.is_long_enough(len(line)):
            return False

        nhl = non_hyphen_length(line)
        test_space = line[:_TESTSPACE_CHARS]

        for index in range(len(self._entries) - 1, -1, -1):
            entry = self._entries[index]
            if entry.nhl == nhl and self.detect(test_space, entry.boundary):
                del self._entries[index + 1 :]
                return True
        return False