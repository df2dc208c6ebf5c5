"""
Logger configuration for the redacting logging pipeline.

Settings are read from environment variables (optionally from a .env file):

    LOG_NAME                    Logger name (default: "app")
    LOG_LEVEL                   debug, info, warn, error, dpanic, panic, fatal
    LOG_ENCODING                console or json
    LOG_CALLER_KEY              Key for the caller field; empty disables it
    LOG_FILTER_SPECS            Newline-separated "pattern==>replacement" specs
    LOG_FILTER_SPECS_FILE       File with one spec per line
    LOG_FILTER_EXTEND_DEFAULT   "true" keeps the default rules before custom ones
    LOG_SCRUB_PII               "true" appends the scrubadub PII rule
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .chain import RuleChain, configured_chain

logger = logging.getLogger(__name__)

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "dpanic": logging.ERROR,
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
}

ENCODINGS = ("console", "json")

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUE_VALUES


def read_spec_file(path: str) -> list[str]:
    """Read specs from a file: one per line, blank lines and '#' comments skipped."""
    specs = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            specs.append(line)
    return specs


@dataclass
class LoggerConfig:
    """Everything needed to assemble a redacting logger."""
    name: str = "app"
    level: str = "debug"
    encoding: str = "console"
    caller_key: str = ""
    filter_specs: list[str] = field(default_factory=list)
    extend_default: bool = False
    scrub_pii: bool = False

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "LoggerConfig":
        """
        Build a config from the environment.

        Loads ``dotenv_path`` (or a .env file found from the working
        directory) first; variables already set in the environment win.
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

        specs = [s for s in os.getenv("LOG_FILTER_SPECS", "").splitlines() if s.strip()]
        spec_file = os.getenv("LOG_FILTER_SPECS_FILE")
        if spec_file:
            specs.extend(read_spec_file(spec_file))

        return cls(
            name=os.getenv("LOG_NAME", "app"),
            level=os.getenv("LOG_LEVEL", "debug").strip().lower(),
            encoding=os.getenv("LOG_ENCODING", "console").strip().lower(),
            caller_key=os.getenv("LOG_CALLER_KEY", ""),
            filter_specs=specs,
            extend_default=_env_flag("LOG_FILTER_EXTEND_DEFAULT"),
            scrub_pii=_env_flag("LOG_SCRUB_PII"),
        )

    def level_number(self) -> int:
        """Map the level name to a ``logging`` level; unknown names mean INFO."""
        return LEVELS.get(self.level, logging.INFO)

    def uses_stderr(self) -> bool:
        """Levels above warn log to stderr, the rest to stdout."""
        return self.level_number() > logging.WARNING

    def build_chain(self) -> RuleChain:
        """Resolve the rule chain for this config."""
        chain = configured_chain(self.filter_specs, extend_default=self.extend_default)
        if self.scrub_pii:
            from .detectors import ScrubadubRule
            chain = chain.extend([ScrubadubRule()])
        return chain
