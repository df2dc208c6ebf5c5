"""
log-redact - Redact log files from the command line.

Reads log lines from files (or stdin) and writes them to stdout through the
same rule chain the logging pipeline uses.

Usage:
    log-redact app.log
    tail -f app.log | log-redact --rule 'token=\\w+==>token=*' --extend-defaults

Defaults come from the LOG_* environment variables (see config.py); rules
given with --rule are added after LOG_FILTER_SPECS.
"""

import argparse
import logging
import sys
from typing import Optional

from .config import LoggerConfig
from .writer import RedactingWriter

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="log-redact",
        description="Mask sensitive values in log lines.",
    )
    parser.add_argument("files", nargs="*", help="Log files to read (default: stdin)")
    parser.add_argument(
        "--rule",
        dest="rules",
        action="append",
        default=[],
        metavar="SPEC",
        help="Custom rule as 'pattern==>replacement' (repeatable)",
    )
    parser.add_argument(
        "--extend-defaults",
        action="store_true",
        help="Run the built-in password rules before custom rules",
    )
    parser.add_argument(
        "--scrub-pii",
        action="store_true",
        help="Also run scrubadub PII detectors",
    )
    return parser.parse_args(argv)


def redact_stream(stream, writer: RedactingWriter) -> int:
    """Write every line of a binary stream through ``writer``; return line count."""
    count = 0
    for line in stream:
        writer.write(line)
        count += 1
    writer.flush()
    return count


def main(argv: Optional[list[str]] = None, stdin=None, stdout=None) -> int:
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)

    config = LoggerConfig.from_env()
    config.filter_specs = config.filter_specs + args.rules
    config.extend_default = config.extend_default or args.extend_defaults
    config.scrub_pii = config.scrub_pii or args.scrub_pii

    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer
    writer = RedactingWriter(stdout, config.build_chain())

    if not args.files:
        redact_stream(stdin, writer)
        return 0

    for path in args.files:
        try:
            f = open(path, "rb")
        except OSError as e:
            logger.error(f"Cannot read {path}: {e}")
            return 1
        with f:
            redact_stream(f, writer)

    return 0


if __name__ == "__main__":
    sys.exit(main())
