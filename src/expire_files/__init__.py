from __future__ import annotations

from .expirer import Expirer
from .expirerconfig import ExpirerConfig
from .expirerconfig import read_session_expiry

NAME = "expire-files"
__version__ = "0.0.1"

__all__ = [
    "Expirer",
    "ExpirerConfig",
    "read_session_expiry",
]
