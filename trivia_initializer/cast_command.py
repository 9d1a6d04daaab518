from __future__ import annotations

from typing import List, Sequence

from .config import InitializeSettings
from .constants import CAST_BINARY
from .env_utils import mask_secret


def build_cast_command(settings: InitializeSettings) -> List[str]:
    """Return the ``cast send`` argv for the initialize call.

    Argument order is fixed: target, function signature, RPC URL, signing key,
    then ``--legacy`` so the transaction uses a plain gas price instead of
    EIP-1559 fee fields.
    """

    return [
        CAST_BINARY,
        "send",
        settings.contract_address,
        settings.function_signature,
        "--rpc-url",
        settings.rpc_url,
        "--private-key",
        settings.private_key,
        "--legacy",
    ]


def redact_command(argv: Sequence[str]) -> List[str]:
    redacted = list(argv)
    for idx, token in enumerate(redacted[:-1]):
        if token == "--private-key":
            redacted[idx + 1] = mask_secret(redacted[idx + 1])
    return redacted
