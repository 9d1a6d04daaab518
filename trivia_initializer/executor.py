from __future__ import annotations

import shlex
import shutil
import subprocess
from typing import Mapping, Optional, Sequence

from .cast_command import redact_command
from .constants import CAST_BINARY, COMMAND_NOT_FOUND_EXIT
from .logging_utils import get_logger


def cast_available(binary: str = CAST_BINARY) -> bool:
    return shutil.which(binary) is not None


def print_install_hint(binary: str) -> None:
    print(f"Error: {binary} (Foundry) is not installed or not in PATH")
    print()
    print("To install Foundry, run:")
    print("  curl -L https://foundry.paradigm.xyz | bash")
    print("  foundryup")
    print()
    print("Or add Foundry to your PATH:")
    print("  export PATH=\"$HOME/.foundry/bin:$PATH\"")


def run_cast(argv: Sequence[str], env: Optional[Mapping[str, str]] = None) -> int:
    """Run the external command once and return its exit code.

    Output is not captured so the tool's own messages (tx hash, receipt,
    revert errors) reach the terminal as-is.
    """

    logger = get_logger()
    binary = argv[0]
    if not cast_available(binary):
        print_install_hint(binary)
        return COMMAND_NOT_FOUND_EXIT

    logger.debug("Running: %s", shlex.join(redact_command(argv)))
    result = subprocess.run(
        list(argv),
        env=dict(env) if env is not None else None,
        check=False,
    )
    if result.returncode != 0:
        logger.error("%s exited with code %s", binary, result.returncode)
    return result.returncode
