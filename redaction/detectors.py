"""
Detector rules - PII detection backed by scrubadub.

Regex rules only catch the shapes someone wrote a pattern for. ScrubadubRule
runs scrubadub's detectors (emails, phone numbers, URLs, credentials, ...)
over the log line instead. It is opt-in and never part of the default chain:
it is slower than a regex pass and rewrites far more text.
"""

import logging
from typing import Optional

import scrubadub

logger = logging.getLogger(__name__)


class ScrubadubRule:
    """
    Chain rule that replaces scrubadub-detected PII with ``{{TYPE}}`` markers.

    Bytes are decoded as UTF-8 with ``surrogateescape`` so that non-UTF-8
    input survives the round trip unchanged outside the replaced spans.
    """

    name = "scrubadub"
    description = "scrubadub PII detectors"

    def __init__(self, detectors: Optional[list] = None):
        """
        Args:
            detectors: Extra scrubadub Detector classes or instances to add
                       on top of scrubadub's built-in detectors.
        """
        self._scrubber = scrubadub.Scrubber()
        for detector in detectors or []:
            self._scrubber.add_detector(detector)

    def apply(self, data: bytes) -> bytes:
        text = data.decode("utf-8", "surrogateescape")
        try:
            text = self._scrubber.clean(text)
        except Exception as e:
            logger.warning(f"Scrubadub error (line left to the remaining rules): {e}")
            return data
        return text.encode("utf-8", "surrogateescape")

    def __repr__(self) -> str:
        return "<ScrubadubRule>"
