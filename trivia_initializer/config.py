# Contract, network and signing settings for the initialize call.
# Defaults live in constants.py; the env keys below are optional overrides.
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from web3 import Web3

from .constants import (
    BACKEND_CAST,
    BACKEND_ENV,
    BACKENDS,
    CONTRACT_ADDRESS,
    CONTRACT_ADDRESS_ENV,
    FUNCTION_SIGNATURE,
    NETWORK_NAME,
    RPC_URL,
    RPC_URL_ENV,
)
from .env_utils import require_private_key
from .errors import ConfigError


@dataclass(frozen=True)
class InitializeSettings:
    contract_address: str
    rpc_url: str
    private_key: str
    network_name: str = NETWORK_NAME
    function_signature: str = FUNCTION_SIGNATURE
    backend: str = BACKEND_CAST
    env_file: Optional[Path] = None


def resolve_contract_address(env: Mapping[str, str]) -> str:
    override = env.get(CONTRACT_ADDRESS_ENV)
    if not override:
        return CONTRACT_ADDRESS
    override = override.strip()
    if not Web3.is_address(override):
        raise ConfigError(f"{CONTRACT_ADDRESS_ENV} is not a valid address: {override}")
    return override


def resolve_rpc_url(env: Mapping[str, str]) -> str:
    override = env.get(RPC_URL_ENV)
    if not override:
        return RPC_URL
    override = override.strip()
    if not override.startswith(("http://", "https://")):
        raise ConfigError(f"{RPC_URL_ENV} must be an http(s) URL: {override}")
    return override


def resolve_backend(env: Mapping[str, str]) -> str:
    backend = (env.get(BACKEND_ENV) or BACKEND_CAST).strip().lower()
    if backend not in BACKENDS:
        raise ConfigError(
            f"{BACKEND_ENV} must be one of {', '.join(BACKENDS)} (got {backend!r})"
        )
    return backend


def load_settings(env: Mapping[str, str], env_file: Optional[Path] = None) -> InitializeSettings:
    """Build the settings for one initialize run.

    The signing key is checked first so a missing key is always reported as
    such, whatever else is wrong with the environment.
    """
    private_key = require_private_key(env)
    return InitializeSettings(
        contract_address=resolve_contract_address(env),
        rpc_url=resolve_rpc_url(env),
        private_key=private_key,
        backend=resolve_backend(env),
        env_file=env_file,
    )
