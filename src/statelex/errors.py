"""Error types with formatted source context."""

from __future__ import annotations

from statelex.tokens import Position


class LexicalError(Exception):
    """Base for every failure of a scan, with position and source context."""

    def __init__(self, message: str, position: Position, source: str, state: str | None = None) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.state = state
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        # Lines split on "\n" only, as position_at counts them
        lines = self.source.split("\n")
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (drop the CR of a CRLF ending)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\r")
        else:
            source_line = ""

        # At least 1 char, but stay within line
        underline_len = max(1, min(2, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        result = (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )
        if self.state is not None:
            result += f"\n  in state: {self.state}"
        return result


class UnmatchedInputError(LexicalError):
    """No rule of the active state matched while input remained."""

    def __init__(self, position: Position, source: str, state: str, snippet: str) -> None:
        self.snippet = snippet
        super().__init__(f"no rule matched at {snippet!r}", position, source, state)


class UnknownStateError(LexicalError):
    """The initial state or a pushed state has no registered rules."""

    def __init__(self, name: str, position: Position, source: str, state: str | None = None) -> None:
        self.name = name
        super().__init__(f"unknown state '{name}'", position, source, state)


class EmptyStackError(LexicalError):
    """A rule popped the last remaining state."""

    def __init__(self, position: Position, source: str, state: str) -> None:
        super().__init__(f"cannot pop the last state '{state}'", position, source, state)


class EmptyMatchError(LexicalError):
    """A rule matched the empty string without changing state."""

    def __init__(self, pattern: str, position: Position, source: str, state: str) -> None:
        self.pattern = pattern
        super().__init__(
            f"rule {pattern!r} matched the empty string and made no progress",
            position,
            source,
            state,
        )


class UnterminatedStateError(LexicalError):
    """Input ended while a state other than the initial one was active."""

    def __init__(self, stack: tuple[str, ...], position: Position, source: str) -> None:
        self.stack = stack
        super().__init__(
            f"unexpected end of input in state '{stack[-1]}'", position, source, stack[-1]
        )


class OutOfRangeAdvanceError(LexicalError):
    """The cursor would move outside the text."""

    def __init__(self, count: int, position: Position, source: str) -> None:
        self.count = count
        remaining = len(source) - position.offset
        super().__init__(
            f"cannot advance by {count} with {remaining} characters remaining", position, source
        )
