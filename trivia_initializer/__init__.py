from __future__ import annotations

from .constants import (
    BASE_DIR,
    CONTRACT_ADDRESS,
    DEFAULT_ENV_FILE,
    FUNCTION_SIGNATURE,
    PRIVATE_KEY_ENV,
    RPC_URL,
)
from .config import InitializeSettings, load_settings
from .cast_command import build_cast_command
from .env_utils import default_env_file, normalize_private_key, require_private_key
from .errors import ConfigError, InitializerError, MissingPrivateKeyError
from .runner import main, run_initialize
