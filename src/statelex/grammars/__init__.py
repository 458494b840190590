"""Bundled grammars, looked up by name."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from statelex.grammars import asm
from statelex.scanner import RuleTable


@dataclass(frozen=True, slots=True)
class Grammar:
    """A named rule table and the renderer for the tokens it produces."""

    name: str
    rules: RuleTable
    describe: Callable[[Any], str]
    initial_state: str = "root"


_GRAMMARS: dict[str, Grammar] = {
    "asm": Grammar("asm", asm.RULES, asm.describe),
}


def available() -> list[str]:
    return sorted(_GRAMMARS)


def get_grammar(name: str) -> Grammar:
    """Return the grammar registered as *name*; raise KeyError if there is none."""
    try:
        return _GRAMMARS[name]
    except KeyError:
        raise KeyError(f"unknown grammar '{name}' (available: {', '.join(available())})") from None
