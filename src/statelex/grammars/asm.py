"""Rule table for the lodoovka assembly dialect."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from statelex.rules import POP, Push, rule
from statelex.scanner import RuleTable, Scanner


class TokenType(Enum):
    NEWLINE = auto()
    ARROW = auto()  # ->
    LABEL = auto()  # name: (value excludes the colon)
    SYMBOL = auto()  # bare word
    MACRO = auto()  # @name (value excludes the @)
    STRING = auto()  # text between double quotes
    NUMBER = auto()  # hex, binary or decimal literal, decoded


@dataclass(frozen=True, slots=True)
class Token:
    """A token of the assembly dialect with its decoded payload."""

    type: TokenType
    value: str | int | None = None

    def __str__(self) -> str:
        if self.type is TokenType.LABEL:
            return f"LABEL {self.value}:"
        if self.type is TokenType.STRING:
            return f'STRING "{self.value}"'
        if self.value is None:
            return self.type.name
        return f"{self.type.name} {self.value}"


NEWLINE = Token(TokenType.NEWLINE)
ARROW = Token(TokenType.ARROW)


def build_rules() -> RuleTable:
    """Return the root and string rule lists, most specific patterns first."""
    return {
        "root": (
            rule(r"\n", lambda _: NEWLINE),
            rule(r"[^\S\n]+"),
            # comment
            rule(r";.*?(?=\n|\Z)"),
            rule(r"0x[0-9a-fA-F]+", lambda s: Token(TokenType.NUMBER, int(s[2:], 16))),
            rule(r"0b[01]+", lambda s: Token(TokenType.NUMBER, int(s[2:], 2))),
            rule(r"\d+", lambda s: Token(TokenType.NUMBER, int(s))),
            rule(r"->", lambda _: ARROW),
            rule(r'"', next=Push("string")),
            rule(r"[a-zA-Z_]+:", lambda s: Token(TokenType.LABEL, s[:-1])),
            rule(r"@[a-zA-Z_]+", lambda s: Token(TokenType.MACRO, s[1:])),
            rule(r"[a-zA-Z_]+", lambda s: Token(TokenType.SYMBOL, s)),
        ),
        "string": (
            rule(r'[^"]+', lambda s: Token(TokenType.STRING, s)),
            rule(r'"', next=POP),
        ),
    }


RULES = build_rules()


def describe(token: Token) -> str:
    return str(token)


def tokenize(source: str, *, strict: bool = False) -> list[Token]:
    """Convenience function: tokenize assembly source and return the token list."""
    return Scanner(source, rules=RULES, strict=strict).run()
