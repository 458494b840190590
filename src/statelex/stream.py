"""Immutable text buffer paired with a scan cursor."""

from __future__ import annotations

from dataclasses import dataclass

from statelex.errors import OutOfRangeAdvanceError
from statelex.tokens import Position, position_at


@dataclass(frozen=True, slots=True)
class Stream:
    """The text being scanned and how far the scan has got.

    Advancing never mutates a stream; it returns a new one sharing the same
    text, so a rule attempt that fails leaves the caller's stream untouched.
    """

    text: str
    position: int = 0

    @property
    def is_exhausted(self) -> bool:
        return self.position == len(self.text)

    def remainder(self) -> str:
        """Return the unmatched suffix of the text."""
        return self.text[self.position :]

    def advance(self, count: int) -> Stream:
        """Return a stream whose cursor is *count* characters further on."""
        if count < 0 or self.position + count > len(self.text):
            raise OutOfRangeAdvanceError(count, self.location(), self.text)
        return Stream(self.text, self.position + count)

    def snippet(self, limit: int = 20) -> str:
        """Return at most *limit* characters of the remainder."""
        return self.text[self.position : self.position + limit]

    def location(self) -> Position:
        return position_at(self.text, self.position)
