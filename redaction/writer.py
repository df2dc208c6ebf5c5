"""
RedactingWriter - Byte sink wrapper that redacts every write.

The writer sits between a log formatter and the real output stream. Each
``write`` runs the buffer through a RuleChain and hands the result to the
sink; ``flush`` is passed straight through.

Byte counts:
    ``write`` returns whatever the sink's ``write`` returns, i.e. the number
    of *redacted* bytes the sink accepted. Redaction changes buffer length,
    so callers must not compare the result with ``len(data)``.
"""

import logging
from typing import Any, Iterable, Optional, Union

from .chain import RuleChain, default_chain

logger = logging.getLogger(__name__)


class RedactingWriter:
    """
    Writer that applies a RuleChain to each buffer before forwarding it.

    Example:
        import io

        sink = io.BytesIO()
        writer = RedactingWriter(sink)
        writer.write(b'password:1234 foo: 1234')
        sink.getvalue()
        # b'password:* foo: 1234'

    Thread Safety:
        ``write`` holds no state between calls and only reads the chain.
        Concurrent writes are as safe as the sink's own ``write``.
    """

    def __init__(self, sink: Any, rules: Optional[Union[RuleChain, Iterable]] = None):
        """
        Args:
            sink: Destination with ``write(bytes)``; ``flush()`` is optional.
            rules: Chain or sequence of rules. ``None`` or empty falls back
                   to the default chain.
        """
        chain = rules if isinstance(rules, RuleChain) else RuleChain(rules or ())
        if not chain:
            chain = default_chain()
        self._sink = sink
        self._chain = chain
        logger.debug(f"RedactingWriter using rules: {chain.names()}")

    @property
    def sink(self) -> Any:
        return self._sink

    @property
    def chain(self) -> RuleChain:
        return self._chain

    def write(self, data: Union[bytes, bytearray, memoryview]) -> Any:
        """
        Redact ``data`` and write it to the sink.

        Returns:
            The sink's return value (bytes of redacted output accepted).

        Raises:
            Whatever the sink raises, unchanged.
        """
        return self._sink.write(self._chain.apply(bytes(data)))

    def flush(self) -> None:
        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            flush()

    sync = flush

    def writable(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"<RedactingWriter: {self._sink!r} {self._chain!r}>"
