"""Zero-copy views into a source document.

A :class:`SourceView` stands for ``source[start:stop]`` without slicing the
string. Views compare equal to, and hash like, the text they cover, so they can
key dictionaries that are later queried with plain strings.
"""

from typing import Any, Optional


class SourceView:
    """Read-only view of a character range of a source string."""

    __slots__ = ("source", "start", "stop", "_hash")

    def __init__(self, source: str, start: int, stop: int) -> None:
        if not (0 <= start <= stop <= len(source)):
            raise ValueError(
                f"View range {start}:{stop} outside source of length {len(source)}"
            )
        self.source = source
        self.start = start
        self.stop = stop
        self._hash: Optional[int] = None

    def __str__(self) -> str:
        return self.source[self.start:self.stop]

    def __repr__(self) -> str:
        return f"SourceView({str(self)!r}, {self.start}:{self.stop})"

    def __len__(self) -> int:
        return self.stop - self.start

    def __bool__(self) -> bool:
        return self.stop > self.start

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SourceView):
            if len(self) != len(other):
                return False
            if self.source is other.source and self.start == other.start:
                return True
            return str(self) == str(other)
        if isinstance(other, str):
            return len(other) == len(self) and self.source.startswith(
                other, self.start
            )
        return NotImplemented

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(str(self))
        return self._hash

    def __add__(self, other: Any) -> str:
        if isinstance(other, (str, SourceView)):
            return str(self) + str(other)
        return NotImplemented

    def __radd__(self, other: Any) -> str:
        if isinstance(other, str):
            return other + str(self)
        return NotImplemented
