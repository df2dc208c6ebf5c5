"""
RuleChain - Ordered, immutable sequence of redaction rules.

A chain is built once at startup, either from a profile (the defaults) or
from operator-supplied specification strings of the form::

    <pattern>==><replacement>

``==>`` is reserved: there is no way to escape it inside a pattern or a
replacement.

Rules run in chain order and each rule sees the output of the previous one,
so order is part of a chain's meaning. Nothing is deduplicated or reordered.
"""

import logging
import re
from functools import lru_cache
from typing import Iterable, Iterator, Optional

from .base_profile import RuleProfile
from .profiles import DEFAULT_PROFILE
from .rule import CompileError, RegexEngine, Rule, compile_rule

logger = logging.getLogger(__name__)

SPEC_DELIMITER = "==>"


class RuleChain:
    """
    Immutable ordered collection of rules.

    Rules only need an ``apply(bytes) -> bytes`` method, so detector-backed
    rules (see detectors.py) can sit in the same chain as regex rules.

    Thread Safety:
        A chain never changes after construction and may be shared freely.
        ``extend`` returns a new chain.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable = ()):
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple:
        return self._rules

    def names(self) -> list[str]:
        """Return rule names in chain order."""
        return [getattr(rule, "name", "") for rule in self._rules]

    def apply(self, data: bytes) -> bytes:
        """Run ``data`` through every rule, in order."""
        for rule in self._rules:
            data = rule.apply(data)
        return data

    def extend(self, other: Iterable) -> "RuleChain":
        """Return a new chain with ``other``'s rules after this chain's."""
        return RuleChain(self._rules + tuple(other))

    def __iter__(self) -> Iterator:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RuleChain):
            return NotImplemented
        return self._rules == other._rules

    def __hash__(self) -> int:
        return hash(self._rules)

    def __repr__(self) -> str:
        return f"<RuleChain: {self.names()}>"


@lru_cache(maxsize=None)
def default_chain(profile: RuleProfile = DEFAULT_PROFILE) -> RuleChain:
    """
    Build the chain for a built-in profile.

    Compiled once per profile; later calls return the same shared chain.

    Raises:
        CompileError: If a built-in rule does not compile. This is a broken
                      build and must abort startup.
    """
    return RuleChain(profile.get_rules())


def build_chain(specs: Iterable[str], engine: RegexEngine = re) -> RuleChain:
    """
    Build a chain from ``pattern==>replacement`` specification strings.

    Malformed specs (not exactly one ``==>``) and specs whose pattern does not
    compile are skipped with a warning; they never abort construction. The
    skipped rule's secret shape is then left unredacted, so the warning is
    the only signal an operator gets.

    Args:
        specs: Specification strings, in the order the rules should run.
        engine: Regex engine passed through to ``compile_rule``.

    Returns:
        A chain holding one rule per accepted spec, in input order. May be
        empty.
    """
    rules = []

    for index, spec in enumerate(specs):
        words = spec.split(SPEC_DELIMITER)
        if len(words) != 2:
            logger.warning(f"Skipping invalid filter spec {spec!r}: expected exactly one '{SPEC_DELIMITER}'")
            continue

        try:
            rules.append(compile_rule(words[0], words[1], name=f"spec[{index}]", engine=engine))
        except CompileError as e:
            logger.warning(f"Skipping filter spec {spec!r}: {e.error}")

    return RuleChain(rules)


def configured_chain(
    specs: Optional[Iterable[str]] = None,
    extend_default: bool = False,
    engine: RegexEngine = re,
) -> RuleChain:
    """
    Resolve the chain a logging pipeline should use.

    - No specs, or no spec accepted: the default chain.
    - ``extend_default=False``: the user chain replaces the defaults.
    - ``extend_default=True``: defaults first, then the user chain.
    """
    user = build_chain(specs or [], engine=engine)
    if not user:
        return default_chain()
    if extend_default:
        return default_chain().extend(user)
    return user
