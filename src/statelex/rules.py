"""Rules: an anchored pattern, a token action, and a state directive."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from statelex.stream import Stream

# An action turns the matched text into a token, or None to emit nothing.
Action = Callable[[str], Any]


@dataclass(frozen=True, slots=True)
class Stay:
    """Keep scanning with the current state's rules."""

    def __str__(self) -> str:
        return "stay"


@dataclass(frozen=True, slots=True)
class Pop:
    """Drop the current state and resume the one beneath it."""

    def __str__(self) -> str:
        return "pop"


@dataclass(frozen=True, slots=True)
class Push:
    """Enter *state* until a rule pops it."""

    state: str

    def __str__(self) -> str:
        return f"push {self.state}"


NextState = Stay | Pop | Push

STAY = Stay()
POP = Pop()


@dataclass(frozen=True, slots=True)
class Match:
    """Outcome of a rule that matched: the advanced stream, its token, and where to go next."""

    stream: Stream
    token: Any
    next: NextState
    text: str


@dataclass(frozen=True, slots=True)
class Rule:
    pattern: re.Pattern[str]
    action: Action | None = None
    next: NextState = STAY

    def try_match(self, stream: Stream) -> Match | None:
        """Match the pattern at the stream's cursor, or return None.

        ``Pattern.match`` with a start position only matches there, so a rule
        can never skip ahead to a later occurrence.
        """
        m = self.pattern.match(stream.text, stream.position)
        if m is None:
            return None
        text = m.group(0)
        token = self.action(text) if self.action is not None else None
        return Match(stream.advance(len(text)), token, self.next, text)


def rule(
    pattern: str | re.Pattern[str],
    action: Action | None = None,
    *,
    next: NextState = STAY,
    flags: int = 0,
) -> Rule:
    """Build a Rule from pattern text (or a compiled pattern)."""
    if isinstance(pattern, str):
        pattern = re.compile(pattern, flags)
    elif flags:
        raise ValueError("flags cannot be applied to an already compiled pattern")
    return Rule(pattern, action, next)
