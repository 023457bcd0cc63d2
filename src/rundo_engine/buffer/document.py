"""Line-based text storage for the in-memory buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Text held as a list of lines; every edit yields a new version.

    Offsets are ``str`` indices into the text joined with ``"\\n"``.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str, *, version: int = 0) -> "BufferDocument":
        return cls(_lines=text.split("\n"), version=version)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def length(self) -> int:
        return sum(len(line) for line in self._lines) + len(self._lines) - 1

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def splice(self, start: int, end: int, replacement: str) -> "BufferDocument":
        """Return a document with ``[start, end)`` replaced by ``replacement``."""

        text = self.text
        return BufferDocument.from_text(
            text[:start] + replacement + text[end:], version=self.version + 1
        )
