"""--debug state trace and token dumps to stderr."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from typing import Any, TextIO

from statelex.scanner import TraceEvent
from statelex.tokens import position_at


class TraceWriter:
    """Scanner trace hook that prints one line per match to *file*."""

    def __init__(self, source: str, *, file: TextIO = sys.stderr) -> None:
        self._source = source
        self._file = file

    def __call__(self, event: TraceEvent) -> None:
        self._file.write(format_event(event, self._source) + "\n")


def format_event(event: TraceEvent, source: str) -> str:
    pos = position_at(source, event.offset)
    stack = " ".join(event.stack)
    return f"{pos.line}:{pos.column} {event.state}  {event.text!r}  {event.next}  [{stack}]"


def dump_tokens(
    tokens: Iterable[Any],
    describe: Callable[[Any], str] = str,
    *,
    file: TextIO = sys.stderr,
) -> None:
    for token in tokens:
        file.write(describe(token) + "\n")
