from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class Entry:
    """A single entry of a directory listing."""

    name: str
    path: str
    mtime: float
    is_dir: bool = False
