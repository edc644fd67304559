from __future__ import annotations

import dataclasses
import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from argparse import Namespace

DEFAULT_CONFIG_PATH = "/etc/php5/apache2/php.ini"
DEFAULT_SESSION_DIR = "/var/php/"

DEFAULT_EXPIRY = 8 * 60 * 60  # 8 hours
GRACE_SECONDS = 60 * 60
BATCH_SIZE = 1000

EXPIRY_PREFIX = "session.gc_maxlifetime = "

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ExpirerConfig:
    """Configuration for a single run of the Expirer."""

    config_path: str = DEFAULT_CONFIG_PATH
    session_dir: str = DEFAULT_SESSION_DIR
    debug: bool = False
    dry_run: bool = False
    batch_size: int = BATCH_SIZE

    @classmethod
    def from_args(cls, args: Namespace) -> ExpirerConfig:
        """Build an ExpirerConfig from parsed command line arguments."""
        return cls(
            config_path=args.config,
            session_dir=args.directory,
            debug=args.debug,
            dry_run=args.dryrun,
        )


def read_session_expiry(filepath: str) -> int:
    """
    Read the session.gc_maxlifetime value from a php config file.

    The file is streamed line by line. Only lines starting with the exact
    prefix `session.gc_maxlifetime = ` are considered and the last one in the
    file wins. A matching line with a value that is not an integer resolves
    to DEFAULT_EXPIRY, though a later valid line can still override it.

    Args:
        filepath: The path to the php config file.

    Returns:
        The expiry in seconds, or 0 if no line matched.

    Raises:
        ValueError: If the file cannot be opened or read.
    """
    expiry = 0
    min_length = len(EXPIRY_PREFIX) + 1

    try:
        with open(filepath, encoding="utf-8", errors="replace") as config_file:
            for line in config_file:
                line = line.rstrip("\r\n")
                if len(line) < min_length:
                    continue

                if line[: len(EXPIRY_PREFIX)] != EXPIRY_PREFIX:
                    continue

                expiry = _parse_expiry(line[len(EXPIRY_PREFIX) :])

    except OSError as error:
        raise ValueError(f"Could not read config file at {filepath}") from error

    logger.debug("Read session expiry of %d seconds from %s", expiry, filepath)

    return expiry


def _parse_expiry(value: str) -> int:
    """Parse a base 10 int64, falling back to DEFAULT_EXPIRY."""
    expiry: int | None = None

    if _INTEGER_PATTERN.fullmatch(value):
        try:
            expiry = int(value)

        except ValueError:
            # Exceeds the interpreter limit on integer string conversion
            expiry = None

    if expiry is None or not INT64_MIN <= expiry <= INT64_MAX:
        logger.warning(
            "Invalid session expiry '%s', using default of %d",
            value,
            DEFAULT_EXPIRY,
        )
        return DEFAULT_EXPIRY

    return expiry
