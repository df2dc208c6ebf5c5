"""
Rule - A single compiled redaction pattern and its replacement template.

A Rule is the smallest unit of redaction: one regular expression over raw
bytes plus a template describing what each match becomes. Rules are built
once at startup and never change afterwards, so a single Rule can be shared
by every writer and thread in the process.

Replacement templates use ``$`` references:
    - ``$1`` / ``${1}``       capture group by number
    - ``$name`` / ``${name}`` capture group by name
    - ``$$``                  a literal dollar sign

A reference to a group the pattern does not define is kept as literal text.
Backslashes in templates are literal as well.

Example:
    rule = compile_rule(r'token=(\\s*)\\w+', 'token=$1*')
    rule.apply(b'token= abc123 ok')
    # b'token= * ok'
"""

import re
from dataclasses import dataclass, field
from typing import Any, Protocol, Union

# Bytes that may appear in a bare ``$name`` reference.
_NAME_CHARS = frozenset(b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_")


class RegexEngine(Protocol):
    """Anything with a ``re``-compatible ``compile``."""

    def compile(self, pattern: bytes) -> Any:
        ...


class CompileError(Exception):
    """Raised when a redaction pattern is not a valid regular expression."""

    def __init__(self, pattern: bytes, error: Exception):
        self.pattern = pattern
        self.error = error
        super().__init__(
            f"invalid redaction pattern {pattern.decode('utf-8', 'replace')!r}: {error}"
        )


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _parse_template(template: bytes, pattern: Any) -> tuple:
    """
    Split a replacement template into literal chunks and group references.

    Returns a tuple whose items are either ``bytes`` (copied as-is) or an
    ``int``/``str`` group key resolved against ``pattern``.
    """
    parts: list = []
    literal = bytearray()
    i = 0
    n = len(template)

    while i < n:
        ch = template[i]
        if ch != 0x24 or i + 1 >= n:  # '$'
            literal.append(ch)
            i += 1
            continue

        nxt = template[i + 1]
        if nxt == 0x24:
            literal.append(0x24)
            i += 2
            continue

        if nxt == 0x7B:  # '{'
            end = template.find(b"}", i + 2)
            name = template[i + 2:end] if end != -1 else b""
            if not name or any(c not in _NAME_CHARS for c in name):
                literal.append(ch)
                i += 1
                continue
            raw = template[i:end + 1]
            i = end + 1
        else:
            j = i + 1
            while j < n and template[j] in _NAME_CHARS:
                j += 1
            if j == i + 1:
                literal.append(ch)
                i += 1
                continue
            name = template[i + 1:j]
            raw = template[i:j]
            i = j

        key = _resolve_group(name.decode("ascii"), pattern)
        if key is None:
            literal.extend(raw)
            continue
        if literal:
            parts.append(bytes(literal))
            literal.clear()
        parts.append(key)

    if literal:
        parts.append(bytes(literal))
    return tuple(parts)


def _resolve_group(name: str, pattern: Any) -> Union[int, str, None]:
    if name.isdigit():
        index = int(name)
        return index if index <= pattern.groups else None
    if name in pattern.groupindex:
        return name
    return None


@dataclass(frozen=True)
class Rule:
    """A single redaction rule: compiled pattern plus replacement template."""
    name: str  # e.g., "password_json", "spec[0]"
    pattern: Any  # Compiled bytes regex
    replacement: bytes  # Template, stored verbatim
    description: str = ""  # Human-readable description
    _parts: tuple = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_parts", _parse_template(self.replacement, self.pattern))

    def apply(self, data: bytes) -> bytes:
        """Replace every non-overlapping match in ``data``, scanning left to right."""
        return self.pattern.sub(self._expand, data)

    def _expand(self, match) -> bytes:
        out = []
        for part in self._parts:
            if isinstance(part, bytes):
                out.append(part)
            else:
                out.append(match.group(part) or b"")
        return b"".join(out)

    def __repr__(self) -> str:
        return f"<Rule: {self.name or self.pattern.pattern!r}>"


def compile_rule(
    pattern: Union[str, bytes],
    replacement: Union[str, bytes],
    name: str = "",
    description: str = "",
    engine: RegexEngine = re,
) -> Rule:
    """
    Compile a pattern and replacement template into a Rule.

    Args:
        pattern: Regular expression, matched against raw bytes.
        replacement: ``$``-style template, see module docstring.
        name: Identifier used in diagnostics.
        description: Human-readable description.
        engine: Regex engine to compile with. Defaults to the ``re`` module;
                any module exposing a compatible ``compile`` (e.g. ``regex``)
                may be passed instead.

    Raises:
        CompileError: If the engine rejects the pattern.
    """
    raw = _to_bytes(pattern)
    try:
        compiled = engine.compile(raw)
    except Exception as e:
        raise CompileError(raw, e) from e

    return Rule(
        name=name,
        pattern=compiled,
        replacement=_to_bytes(replacement),
        description=description,
    )
