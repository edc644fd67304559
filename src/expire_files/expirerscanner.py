from __future__ import annotations

import itertools
import logging
import os
from collections.abc import Generator

from .expirermodel import Entry

logger = logging.getLogger(__name__)


def iter_batches(
    directory: str,
    batch_size: int,
) -> Generator[list[Entry], None, None]:
    """
    Yield the entries of a directory in batches of at most batch_size.

    The directory is opened once and read lazily. The next batch is not read
    until the previous one has been consumed. Subdirectories are reported,
    never descended into.

    Args:
        directory: The directory to list.
        batch_size: The maximum number of entries per batch.

    Raises:
        ValueError: If batch_size is less than 1.
        OSError: If the directory cannot be opened or listed.
    """
    if batch_size < 1:
        raise ValueError(f"Batch size must be at least 1, got {batch_size}")

    with os.scandir(directory) as listing:
        while True:
            dir_entries = list(itertools.islice(listing, batch_size))
            if not dir_entries:
                return

            logger.debug(
                "Read batch of %d entries from %s", len(dir_entries), directory
            )

            yield _build_entries(dir_entries)


def _build_entries(dir_entries: list[os.DirEntry[str]]) -> list[Entry]:
    """Snapshot the given DirEntry objects, skipping any that vanished."""
    entries: list[Entry] = []

    for dir_entry in dir_entries:
        try:
            stat = dir_entry.stat(follow_symlinks=False)
            is_dir = dir_entry.is_dir(follow_symlinks=False)

        except FileNotFoundError:
            # Removed between the listing and the stat
            logger.debug("'%s' vanished during scan.", dir_entry.path)
            continue

        entries.append(
            Entry(
                name=dir_entry.name,
                path=dir_entry.path,
                mtime=stat.st_mtime,
                is_dir=is_dir,
            )
        )

    return entries
