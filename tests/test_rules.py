"""Test rule construction, anchored matching, and directives."""

import re

import pytest

from statelex.rules import POP, STAY, Pop, Push, Stay, rule
from statelex.stream import Stream


class TestAnchoring:
    def test_matches_at_cursor(self):
        m = rule(r"\d+", int).try_match(Stream("123abc"))
        assert m is not None
        assert m.token == 123
        assert m.text == "123"
        assert m.stream.position == 3

    def test_does_not_match_later_in_text(self):
        assert rule(r"\d+", int).try_match(Stream("abc123")) is None

    def test_matches_from_advanced_cursor(self):
        m = rule(r"\d+", int).try_match(Stream("abc123", 3))
        assert m is not None
        assert m.token == 123
        assert m.stream.position == 6

    def test_input_stream_unchanged(self):
        s = Stream("42")
        rule(r"\d+").try_match(s)
        assert s.position == 0


class TestActions:
    def test_no_action_emits_nothing(self):
        m = rule(r"\s+").try_match(Stream("   x"))
        assert m is not None
        assert m.token is None
        assert m.stream.position == 3

    def test_action_returning_none(self):
        m = rule(r"#.*", lambda _: None).try_match(Stream("# note"))
        assert m is not None
        assert m.token is None

    def test_action_sees_exact_match(self):
        seen = []
        rule(r"[a-z]+", seen.append).try_match(Stream("abc def"))
        assert seen == ["abc"]

    def test_action_not_called_without_match(self):
        seen = []
        assert rule(r"[a-z]+", seen.append).try_match(Stream("123")) is None
        assert seen == []


class TestDirectives:
    def test_default_is_stay(self):
        assert rule("a").next == STAY
        assert isinstance(rule("a").next, Stay)

    def test_pop(self):
        m = rule('"', next=POP).try_match(Stream('"'))
        assert isinstance(m.next, Pop)

    def test_push_carries_state(self):
        m = rule('"', next=Push("string")).try_match(Stream('"'))
        assert m.next == Push("string")

    def test_str(self):
        assert str(STAY) == "stay"
        assert str(POP) == "pop"
        assert str(Push("string")) == "push string"


class TestConstruction:
    def test_compiled_pattern(self):
        r = rule(re.compile("abc", re.IGNORECASE))
        assert r.try_match(Stream("ABC")) is not None

    def test_flags(self):
        r = rule("abc", flags=re.IGNORECASE)
        assert r.try_match(Stream("AbC")) is not None

    def test_flags_with_compiled_pattern_rejected(self):
        with pytest.raises(ValueError):
            rule(re.compile("abc"), flags=re.IGNORECASE)

    def test_rules_are_immutable(self):
        r = rule("a")
        with pytest.raises(AttributeError):
            r.next = POP
