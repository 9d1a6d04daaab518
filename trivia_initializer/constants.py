from __future__ import annotations

from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_ENV_FILE = BASE_DIR / ".env"

# Deployed TriviaChain contract on Arbitrum Sepolia
# Previous deployment: 0x4488af2dd81ea4100f97588aaf5dbf4ec32d8aa2
CONTRACT_ADDRESS = "0x49c90b349fba199c4be542d225d1783ac8c0ddde"
RPC_URL = "https://sepolia-rollup.arbitrum.io/rpc"
NETWORK_NAME = "Arbitrum Sepolia"
FUNCTION_SIGNATURE = "initialize()"

PRIVATE_KEY_ENV = "SEPOLIA_PRIVATE_KEY"
CONTRACT_ADDRESS_ENV = "TRIVIA_CONTRACT_ADDRESS"
RPC_URL_ENV = "TRIVIA_RPC_URL"
BACKEND_ENV = "INITIALIZE_BACKEND"
LOG_LEVEL_ENV = "INITIALIZE_LOG_LEVEL"

CAST_BINARY = "cast"
BACKEND_CAST = "cast"
BACKEND_WEB3 = "web3"
BACKENDS = (BACKEND_CAST, BACKEND_WEB3)

# Exit status a shell reports when a command is not on PATH
COMMAND_NOT_FOUND_EXIT = 127

BANNER_WIDTH = 42


__all__ = [
    "BASE_DIR",
    "DEFAULT_ENV_FILE",
    "CONTRACT_ADDRESS",
    "RPC_URL",
    "NETWORK_NAME",
    "FUNCTION_SIGNATURE",
    "PRIVATE_KEY_ENV",
    "CONTRACT_ADDRESS_ENV",
    "RPC_URL_ENV",
    "BACKEND_ENV",
    "LOG_LEVEL_ENV",
    "CAST_BINARY",
    "BACKEND_CAST",
    "BACKEND_WEB3",
    "BACKENDS",
    "COMMAND_NOT_FOUND_EXIT",
    "BANNER_WIDTH",
]
