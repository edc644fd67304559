from __future__ import annotations

import logging
import os
import time

from .expirerconfig import ExpirerConfig
from .expirerconfig import GRACE_SECONDS
from .expirerconfig import INT64_MAX
from .expirermodel import Entry
from .expirerscanner import iter_batches


class Expirer:
    """Remove session files that have outlived the configured expiry."""

    logger = logging.getLogger(__name__)

    def __init__(self, config: ExpirerConfig, expiry: int) -> None:
        """
        Initialize a new Expirer.

        Args:
            config: The configuration to use for this run.
            expiry: The session expiry in seconds. The grace period is added
                on top of this to find the cutoff age.

        Raises:
            ValueError: If expiry plus the grace period is negative, or too
                large to express in int64 nanoseconds.
        """
        self._config = config
        self._cutoff_seconds = expiry + GRACE_SECONDS

        if not 0 <= self._cutoff_seconds * 1_000_000_000 <= INT64_MAX:
            raise ValueError(f"Invalid cutoff of {self._cutoff_seconds} seconds")

    @property
    def cutoff_seconds(self) -> int:
        """Return the age in seconds a file must exceed to be expired."""
        return self._cutoff_seconds

    def run(self, now: float | None = None) -> int:
        """
        Scan the session directory and remove expired files.

        Args:
            now: The time to measure file ages against. Defaults to the
                current time, captured once before the scan.

        Returns:
            The number of expired files, including those that failed to be
            removed or were skipped by a dry run.
        """
        now = time.time() if now is None else now
        tic = time.perf_counter()
        count = 0

        for batch in iter_batches(self._config.session_dir, self._config.batch_size):
            for entry in batch:
                if not self.is_expired(entry, now):
                    continue

                self._remove(entry)
                count += 1

        toc = time.perf_counter()
        self.logger.debug("Scan finished in %s seconds", toc - tic)
        self.logger.info(
            "Expired %d session files from %s", count, self._config.session_dir
        )

        return count

    def is_expired(self, entry: Entry, now: float) -> bool:
        """True if the entry is a file last modified before the cutoff."""
        if entry.is_dir:
            return False

        return now - self._cutoff_seconds > entry.mtime

    def _remove(self, entry: Entry) -> None:
        """Remove the file unless this is a dry run. Failures are ignored."""
        if self._config.dry_run:
            self.logger.debug("Would delete: %s", entry.path)
            return

        try:
            os.remove(entry.path)

        except OSError as error:
            # Best effort, one bad file must not stop the run
            self.logger.debug("Failed to delete %s: %s", entry.path, error)
            return

        self.logger.debug("Deleted: %s", entry.path)
