from __future__ import annotations

import os
from pathlib import Path

from expire_files.expirer import Expirer
from expire_files.expirerconfig import ExpirerConfig
from expire_files.expirerconfig import read_session_expiry

NOW = 1_700_000_000.0
HOUR = 60 * 60


def _touch(filepath: Path, mtime: float) -> None:
    filepath.write_text("data")
    os.utime(filepath, (mtime, mtime))


def test_integration_nine_hour_cutoff(tmp_path: Path) -> None:
    php_ini = tmp_path / "php.ini"
    php_ini.write_text("[Session]\nsession.gc_maxlifetime = 28800\n")
    sessions = tmp_path / "sessions"
    sessions.mkdir()

    # Exactly at the 9h cutoff survives, one second past it does not
    _touch(sessions / "a", NOW - 9 * HOUR)
    _touch(sessions / "b", NOW - 1 * HOUR)
    _touch(sessions / "c", NOW - 9 * HOUR - 1)

    expiry = read_session_expiry(str(php_ini))
    config = ExpirerConfig(config_path=str(php_ini), session_dir=str(sessions))

    result = Expirer(config, expiry).run(now=NOW)

    assert expiry == 28800
    assert result == 1
    assert sorted(os.listdir(sessions)) == ["a", "b"]


def test_integration_missing_key_expires_after_grace_only(tmp_path: Path) -> None:
    php_ini = tmp_path / "php.ini"
    php_ini.write_text("[Session]\nsession.save_handler = files\n")
    sessions = tmp_path / "sessions"
    sessions.mkdir()

    _touch(sessions / "a", NOW - 2 * HOUR)
    _touch(sessions / "b", NOW - HOUR / 2)

    expiry = read_session_expiry(str(php_ini))
    config = ExpirerConfig(config_path=str(php_ini), session_dir=str(sessions))

    result = Expirer(config, expiry).run(now=NOW)

    assert expiry == 0
    assert result == 1
    assert os.listdir(sessions) == ["b"]
