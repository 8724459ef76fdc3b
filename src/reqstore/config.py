"""
Settings read from the environment (and a local .env, if present).

Environment variables must be set before `Settings()` is instantiated.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv

from .core.record import check_uint64

load_dotenv()


def _env(name: str, default: str) -> str:
    return os.getenv(f"REQSTORE_{name}", default)


@dataclass
class Settings:
    """Host settings; every field has a REQSTORE_* variable."""

    database_url: str = field(
        default_factory=lambda: _env("DATABASE_URL", "sqlite:///reqstore.db")
    )
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(
        default_factory=lambda: _env("LOG_FILE", "") or None
    )
    # "token:owner,token2:owner2"
    owner_tokens_raw: str = field(default_factory=lambda: _env("OWNER_TOKENS", ""))
    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(_env("PORT", "8000")))

    def owner_tokens(self) -> Dict[str, int]:
        """Parse the bearer token -> owner map."""
        tokens: Dict[str, int] = {}
        for pair in self.owner_tokens_raw.split(","):
            pair = pair.strip()
            if not pair:
                continue
            token, sep, owner = pair.rpartition(":")
            if not sep or not token or not owner.strip().isdigit():
                raise ValueError(f"malformed REQSTORE_OWNER_TOKENS entry: {pair!r}")
            tokens[token.strip()] = check_uint64("owner", int(owner))
        return tokens
