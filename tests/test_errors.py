"""Test error messages, position accuracy, and context snippets."""

import pytest

from statelex.errors import LexicalError, UnmatchedInputError
from statelex.grammars.asm import tokenize


class TestErrorPositions:
    def test_position_on_first_line(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("mov $")
        err = exc_info.value
        assert err.position.line == 1
        assert err.position.column == 5

    def test_error_on_second_line(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("line one\n%")
        err = exc_info.value
        assert err.position.line == 2
        assert err.position.column == 1

    def test_all_errors_share_base(self):
        with pytest.raises(LexicalError):
            tokenize("!")


class TestErrorFormatting:
    def test_format_contains_line(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("push 1 $ pop")
        assert "push 1 $ pop" in exc_info.value.format()

    def test_format_contains_carets(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("$")
        assert "^" in exc_info.value.format()

    def test_format_contains_error_prefix(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("$")
        assert exc_info.value.format().startswith("error:")

    def test_format_contains_position(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("ok\n  $")
        assert "2:3" in exc_info.value.format()

    def test_format_with_custom_filename(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("$")
        assert "prog.asm" in exc_info.value.format("prog.asm")

    def test_format_names_state(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("$")
        assert "in state: root" in exc_info.value.format()

    def test_message_shows_snippet(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("$abc")
        assert "'$abc'" in exc_info.value.message

    def test_default_filename_is_neutral(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("$")
        assert "--> <input>:1:1" in exc_info.value.format()

    def test_form_feed_does_not_split_lines(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("a\x0cb\n$")
        formatted = exc_info.value.format()
        assert "2:1" in formatted
        assert "2 | $" in formatted

    def test_crlf_line_shown_without_cr(self):
        with pytest.raises(UnmatchedInputError) as exc_info:
            tokenize("ok $\r\nnext")
        assert "1 | ok $\n" in exc_info.value.format()
