"""
Redaction Module - Log-line redaction for logging sinks

This module masks sensitive values (passwords by default) in every buffer a
logger writes, before the bytes reach a file, terminal or remote collector.

Architecture:
    - Rule: One compiled pattern plus a ``$``-style replacement template
    - RuleChain: Ordered, immutable rules; each rule sees the previous output
    - RedactingWriter: Byte-sink wrapper applying a chain on every write
    - RuleProfile: Abstract base class for bundled rule sets
    - profiles/: Built-in profiles (the default password rules)

Example:
    import io
    from redaction import RedactingWriter, build_chain

    sink = io.BytesIO()
    writer = RedactingWriter(sink, build_chain([r'token=\\w+==>token=*']))
    writer.write(b"GET /?token=abc")
    # sink.getvalue(): b"GET /?token=*"
"""

from .rule import CompileError, Rule, compile_rule
from .chain import RuleChain, build_chain, configured_chain, default_chain
from .writer import RedactingWriter
from .base_profile import RuleProfile

__all__ = [
    "CompileError",
    "Rule",
    "compile_rule",
    "RuleChain",
    "build_chain",
    "configured_chain",
    "default_chain",
    "RedactingWriter",
    "RuleProfile",
]
