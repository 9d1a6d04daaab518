#!/usr/bin/env python3
"""Send the one-off initialize() transaction to the TriviaChain contract.

Loads ``SEPOLIA_PRIVATE_KEY`` from ``.env`` and hands the call to
``cast send`` (or web3.py with ``INITIALIZE_BACKEND=web3``).
"""

from __future__ import annotations

from trivia_initializer import main


if __name__ == "__main__":
    main()
