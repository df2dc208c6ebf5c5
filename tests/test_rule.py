"""
Tests for Rule compilation and application.

Tests cover:
- Replace-all semantics (leftmost-first, non-overlapping)
- $-style replacement templates
- CompileError on bad patterns
- Injected regex engines
"""

import dataclasses
import re

import pytest

from redaction import CompileError, Rule, compile_rule


class TestApply:
    """Replace-all behaviour of Rule.apply."""

    def test_replaces_every_match(self):
        """Should replace all matches, not just the first."""
        rule = compile_rule(r'a', 'b')
        assert rule.apply(b"banana") == b"bbnbnb"

    def test_matches_do_not_overlap(self):
        """Scanning resumes after each match."""
        rule = compile_rule(r'aa', 'x')
        assert rule.apply(b"aaaaa") == b"xxa"

    def test_replaced_text_is_not_rescanned(self):
        """Replacement output is never matched again in the same call."""
        rule = compile_rule(r'a', 'aa')
        assert rule.apply(b"a-a") == b"aa-aa"

    def test_no_match_returns_input(self):
        rule = compile_rule(r'secret', '*')
        assert rule.apply(b"nothing to see") == b"nothing to see"

    def test_empty_input(self):
        rule = compile_rule(r'secret', '*')
        assert rule.apply(b"") == b""

    def test_text_pattern_is_utf8_encoded(self):
        """Text patterns match their UTF-8 bytes."""
        rule = compile_rule('é', 'e')
        assert rule.apply("café".encode("utf-8")) == b"cafe"


class TestTemplates:
    """Replacement template expansion."""

    def test_numbered_group(self):
        rule = compile_rule(r'key:(\s*)\w+', 'key:$1*')
        assert rule.apply(b"key:  abc") == b"key:  *"

    def test_braced_group(self):
        """${1} allows text to follow a reference directly."""
        rule = compile_rule(r'(a)', '${1}0')
        assert rule.apply(b"a") == b"a0"

    def test_named_group(self):
        rule = compile_rule(r'(?P<k>\w+)=\w+', '$k=* ${k}')
        assert rule.apply(b"user=bob") == b"user=* user"

    def test_whole_match_group_zero(self):
        rule = compile_rule(r'\d+', '<$0>')
        assert rule.apply(b"id 42") == b"id <42>"

    def test_dollar_escape(self):
        rule = compile_rule(r'price', '$$')
        assert rule.apply(b"price: 5") == b"$: 5"

    def test_unknown_group_is_literal(self):
        """References to undefined groups stay as written."""
        rule = compile_rule(r'(a)', '$9')
        assert rule.apply(b"a") == b"$9"

    def test_multi_digit_reference_is_one_name(self):
        """$10 means group 10, not group 1 followed by '0'."""
        rule = compile_rule(r'(a)', '$10')
        assert rule.apply(b"a") == b"$10"

    def test_unknown_named_group_is_literal(self):
        rule = compile_rule(r'(a)', '${missing}')
        assert rule.apply(b"a") == b"${missing}"

    def test_unmatched_group_expands_empty(self):
        """A group that did not take part in the match contributes nothing."""
        rule = compile_rule(r'(a)|b', '[$1]')
        assert rule.apply(b"ab") == b"[a][]"

    def test_backslashes_are_literal(self):
        rule = compile_rule(r'x', r'\1\n')
        assert rule.apply(b"x") == b"\\1\\n"

    def test_trailing_dollar_is_literal(self):
        rule = compile_rule(r'x', 'cost$')
        assert rule.apply(b"x") == b"cost$"

    def test_replacement_stored_verbatim(self):
        rule = compile_rule(r'(a)', '$1-$9')
        assert rule.replacement == b"$1-$9"


class TestCompile:
    """Rule construction."""

    def test_invalid_pattern_raises_compile_error(self):
        """Should raise CompileError carrying the pattern and cause."""
        with pytest.raises(CompileError) as exc_info:
            compile_rule(r'(unclosed', 'x')

        assert exc_info.value.pattern == b"(unclosed"
        assert isinstance(exc_info.value.error, re.error)
        assert "(unclosed" in str(exc_info.value)

    def test_rule_is_immutable(self):
        rule = compile_rule(r'a', 'b')
        with pytest.raises(dataclasses.FrozenInstanceError):
            rule.replacement = b"c"

    def test_name_and_description(self):
        rule = compile_rule(r'a', 'b', name="letter", description="Letter a")
        assert rule.name == "letter"
        assert rule.description == "Letter a"
        assert "letter" in repr(rule)

    def test_injected_engine(self):
        """Should compile through the supplied engine."""

        class RecordingEngine:
            def __init__(self):
                self.compiled = []

            def compile(self, pattern):
                self.compiled.append(pattern)
                return re.compile(pattern)

        engine = RecordingEngine()
        rule = compile_rule(r'a+', 'b', engine=engine)

        assert engine.compiled == [b"a+"]
        assert rule.apply(b"caaat") == b"cbt"

    def test_engine_errors_are_wrapped(self):
        """Any engine failure becomes a CompileError."""

        class BrokenEngine:
            def compile(self, pattern):
                raise ValueError("unsupported syntax")

        with pytest.raises(CompileError) as exc_info:
            compile_rule(r'a', 'b', engine=BrokenEngine())

        assert isinstance(exc_info.value.error, ValueError)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_rule_is_a_rule(self):
        assert isinstance(compile_rule(r'a', 'b'), Rule)
