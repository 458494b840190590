"""State-stack driven lexical scanner."""

from __future__ import annotations

from statelex.errors import (
    EmptyMatchError,
    EmptyStackError,
    LexicalError,
    OutOfRangeAdvanceError,
    UnknownStateError,
    UnmatchedInputError,
    UnterminatedStateError,
)
from statelex.rules import POP, STAY, NextState, Pop, Push, Rule, Stay, rule
from statelex.scanner import RuleTable, Scanner, scan
from statelex.stream import Stream

__version__ = "0.1.0"

__all__ = [
    "POP",
    "STAY",
    "EmptyMatchError",
    "EmptyStackError",
    "LexicalError",
    "NextState",
    "OutOfRangeAdvanceError",
    "Pop",
    "Push",
    "Rule",
    "RuleTable",
    "Scanner",
    "Stay",
    "Stream",
    "UnknownStateError",
    "UnmatchedInputError",
    "UnterminatedStateError",
    "rule",
    "scan",
]
