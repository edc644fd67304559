from __future__ import annotations

import dataclasses

import pytest

from expire_files.expirermodel import Entry


def test_entry_defaults_to_file() -> None:
    entry = Entry("sess_abc", "/var/php/sess_abc", 1234567890.0)

    assert entry.is_dir is False


def test_entry_is_frozen() -> None:
    entry = Entry("sess_abc", "/var/php/sess_abc", 1234567890.0)

    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.mtime = 0.0  # type: ignore
