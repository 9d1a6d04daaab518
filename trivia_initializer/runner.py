from __future__ import annotations

import sys
from pathlib import Path
from typing import Mapping, Optional

from .cast_command import build_cast_command, redact_command
from .config import InitializeSettings, load_settings
from .constants import (
    BACKEND_WEB3,
    CONTRACT_ADDRESS,
    CONTRACT_ADDRESS_ENV,
    NETWORK_NAME,
    PRIVATE_KEY_ENV,
)
from .env_utils import build_environment, default_env_file, load_env_file
from .errors import ConfigError, MissingPrivateKeyError
from .executor import run_cast
from .logging_utils import get_logger, print_banner, print_rule, print_section


def print_header(contract_address: str, network_name: str) -> None:
    print_banner("Initializing TriviaChain Contract")
    print(f"Contract Address: {contract_address}")
    print(f"Network: {network_name}")
    print()


def dispatch(settings: InitializeSettings, env: Mapping[str, str]) -> int:
    """Send the initialize transaction once through the configured backend."""
    logger = get_logger()
    if settings.backend == BACKEND_WEB3:
        # Imported lazily so the cast path never pays for web3 provider setup
        from .web3_backend import send_initialize

        logger.info("Using web3 backend")
        return send_initialize(settings)

    argv = build_cast_command(settings)
    logger.info("Using cast backend: %s", " ".join(redact_command(argv)))
    return run_cast(argv, env)


def header_address(env: Mapping[str, str]) -> str:
    return (env.get(CONTRACT_ADDRESS_ENV) or "").strip() or CONTRACT_ADDRESS


def run_initialize(
    env_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Run the whole initialize flow and return the process exit code.

    ``env_file`` is loaded over the starting environment when given;
    ``environ`` replaces ``os.environ`` as that starting environment.
    """
    logger = get_logger()
    if environ is None:
        env = build_environment(env_file)
    else:
        env = dict(environ)
        if env_file is not None:
            load_env_file(env_file, env)

    try:
        settings = load_settings(env, env_file)
    except MissingPrivateKeyError as exc:
        print_header(header_address(env), NETWORK_NAME)
        print(f"Error: {exc}")
        print(f"Please set {PRIVATE_KEY_ENV} in your .env file")
        return 1
    except ConfigError as exc:
        print_header(header_address(env), NETWORK_NAME)
        print(f"Error: {exc}")
        return 1

    if settings.env_file is not None and settings.env_file.is_file():
        logger.info("Loaded environment from %s", settings.env_file)
    else:
        logger.info("No env file loaded; using process environment")

    print_header(settings.contract_address, settings.network_name)
    print_section("Sending initialize transaction...")
    print()

    exit_code = dispatch(settings, env)
    if exit_code != 0:
        return exit_code

    print()
    print_rule()
    print("Contract initialized successfully!")
    print_rule()
    return 0


def main() -> None:
    sys.exit(run_initialize(env_file=default_env_file()))
