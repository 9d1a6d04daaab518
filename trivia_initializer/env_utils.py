from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

from dotenv import dotenv_values, find_dotenv

from .constants import DEFAULT_ENV_FILE, PRIVATE_KEY_ENV
from .errors import MissingPrivateKeyError


def load_env_file(path: Path, env: MutableMapping[str, str]) -> bool:
    """Load KEY=VALUE pairs from a .env-style file into ``env``.

    Values from the file replace whatever ``env`` already holds, the same way
    ``source .env`` overwrites shell variables. Keys declared without a value
    are skipped. Returns ``False`` when the file does not exist.
    """

    if not path.is_file():
        return False

    for key, value in dotenv_values(path).items():
        if value is None:
            continue
        env[key] = value
    return True


def default_env_file() -> Path:
    """Locate the ``.env`` to load when none is given.

    Searches the working directory and its parents first, so an installed
    console script picks up the project's file; falls back to the checkout
    root next to the package.
    """

    found = find_dotenv(usecwd=True)
    return Path(found) if found else DEFAULT_ENV_FILE


def build_environment(env_file: Optional[Path]) -> Dict[str, str]:
    env: Dict[str, str] = dict(os.environ)
    if env_file is not None:
        load_env_file(env_file, env)
    return env


def normalize_private_key(value: str) -> str:
    # Only the lowercase prefix counts, matching `^0x`
    if value.startswith("0x"):
        return value
    return "0x" + value


def require_private_key(env: Mapping[str, str], name: str = PRIVATE_KEY_ENV) -> str:
    value = env.get(name)
    if not value:
        raise MissingPrivateKeyError(name)
    return normalize_private_key(value)


def mask_secret(value: Optional[str]) -> str:
    if not value:
        return "<unset>"
    return f"{value[:8]}...{value[-4:]}" if len(value) > 12 else "***"
