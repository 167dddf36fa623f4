"""
Process environment loader.

Values are layered, later sources overriding earlier ones:
1) `env.example` (committed, safe placeholders)
2) `env.local` (optional, MUST NOT be committed)
3) System environment variables (highest priority)
"""

import os
from pathlib import Path

from dotenv import dotenv_values
from loguru import logger

ENV_ROOT = Path(__file__).parent.parent.parent


def load_environ(root: Path = ENV_ROOT) -> dict[str, str | None]:
    values: dict[str, str | None] = {}

    for name in ("env.example", "env.local"):
        path = root / name
        if path.exists():
            values.update(dotenv_values(path))
            logger.info(f"Loaded environment variables from {path}")

    values.update(os.environ)
    return values
