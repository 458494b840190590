"""State-stack scanner: drives a Stream through per-state rule lists."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from statelex.errors import (
    EmptyMatchError,
    EmptyStackError,
    UnknownStateError,
    UnmatchedInputError,
    UnterminatedStateError,
)
from statelex.rules import Match, NextState, Pop, Push, Rule, Stay
from statelex.stream import Stream

RuleTable = dict[str, tuple[Rule, ...]]


@dataclass(frozen=True, slots=True)
class TraceEvent:
    """One successful match, as reported to a scanner's trace hook."""

    offset: int
    state: str
    text: str
    next: NextState
    stack: tuple[str, ...]


Trace = Callable[[TraceEvent], None]


class Scanner:
    """Tokenize text by trying the active state's rules in declared order.

    The first rule whose pattern matches at the cursor wins; later rules are
    never consulted, even for a longer match.
    """

    def __init__(
        self,
        text: str,
        *,
        initial_state: str = "root",
        rules: Mapping[str, Iterable[Rule]] | None = None,
        strict: bool = False,
        preview: int = 20,
        trace: Trace | None = None,
    ) -> None:
        self._stream = Stream(text)
        self._initial_state = initial_state
        self._states: RuleTable = {}
        self._stack: list[str] = [initial_state]
        self._tokens: list[Any] = []
        self._strict = strict
        self._preview = preview
        self._trace = trace
        self._started = False
        if rules is not None:
            for name, ruleset in rules.items():
                self.register_state(name, ruleset)

    def register_state(self, name: str, rules: Iterable[Rule]) -> None:
        """Set the rule list for *name*, replacing any earlier registration."""
        if self._started:
            raise RuntimeError("cannot register states after the scan has started")
        self._states[name] = tuple(rules)

    @property
    def position(self) -> int:
        return self._stream.position

    @property
    def state(self) -> str:
        return self._stack[-1]

    @property
    def stack(self) -> tuple[str, ...]:
        return tuple(self._stack)

    @property
    def tokens(self) -> list[Any]:
        return list(self._tokens)

    def run(self) -> list[Any]:
        """Scan the whole text and return the emitted tokens in source order."""
        if self._started:
            raise RuntimeError("a scanner can only be run once")
        self._started = True

        ruleset = self._lookup(self.state)
        empty_limit = max(64, len(self._states) * 4)
        empty_run = 0

        while not self._stream.is_exhausted:
            found = self._match_once(ruleset)
            if found is None:
                raise UnmatchedInputError(
                    self._stream.location(),
                    self._stream.text,
                    self.state,
                    self._stream.snippet(self._preview),
                )
            winner, match = found

            if match.text:
                empty_run = 0
            else:
                empty_run += 1
                if isinstance(match.next, Stay) or empty_run > empty_limit:
                    raise EmptyMatchError(
                        winner.pattern.pattern,
                        self._stream.location(),
                        self._stream.text,
                        self.state,
                    )

            offset = self._stream.position
            state = self.state

            # Validate the directive before committing the step
            if isinstance(match.next, Pop):
                if len(self._stack) == 1:
                    raise EmptyStackError(self._stream.location(), self._stream.text, state)
                ruleset = self._lookup(self._stack[-2])
            elif isinstance(match.next, Push):
                ruleset = self._lookup(match.next.state, state)

            self._stream = match.stream
            if match.token is not None:
                self._tokens.append(match.token)
            if isinstance(match.next, Pop):
                self._stack.pop()
            elif isinstance(match.next, Push):
                self._stack.append(match.next.state)

            if self._trace is not None:
                self._trace(TraceEvent(offset, state, match.text, match.next, self.stack))

        if self._strict and len(self._stack) > 1:
            raise UnterminatedStateError(self.stack, self._stream.location(), self._stream.text)

        return list(self._tokens)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lookup(self, name: str, pushed_from: str | None = None) -> tuple[Rule, ...]:
        try:
            return self._states[name]
        except KeyError:
            raise UnknownStateError(
                name, self._stream.location(), self._stream.text, pushed_from
            ) from None

    def _match_once(self, ruleset: tuple[Rule, ...]) -> tuple[Rule, Match] | None:
        for r in ruleset:
            match = r.try_match(self._stream)
            if match is not None:
                return r, match
        return None


def scan(text: str, rules: Mapping[str, Iterable[Rule]], **kwargs: Any) -> list[Any]:
    """Convenience function: scan text with a rule table and return the tokens."""
    return Scanner(text, rules=rules, **kwargs).run()
