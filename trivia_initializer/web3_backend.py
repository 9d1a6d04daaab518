"""In-process initialize() sender built on web3.py, used instead of ``cast``."""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from eth_account import Account
from web3 import Web3
from web3.exceptions import Web3Exception

from .config import InitializeSettings
from .env_utils import mask_secret
from .logging_utils import get_logger

RECEIPT_TIMEOUT_SECONDS = 120

# TriviaChain custom errors; all of them are argument-less
TRIVIA_ERRORS: Tuple[str, ...] = (
    "Unauthorized",
    "SessionNotFound",
    "SessionAlreadyActive",
    "SessionNotActive",
    "SessionFull",
    "PlayerNotInSession",
    "PlayerAlreadyJoined",
    "InvalidRoomCode",
    "InvalidQuestionIndex",
    "QuestionNotActive",
    "AlreadyAnswered",
)


def selector(signature: str) -> str:
    """Return the 4-byte function/error selector for ``signature`` as bare hex."""
    return Web3.to_hex(Web3.keccak(text=signature)[:4])[2:]


_CUSTOM_ERROR_MAP: Dict[str, str] = {selector(f"{name}()"): name for name in TRIVIA_ERRORS}


def initialize_calldata(signature: str = "initialize()") -> str:
    return "0x" + selector(signature)


def get_web3_client(rpc_url: str) -> Web3:
    return Web3(Web3.HTTPProvider(rpc_url))


def build_legacy_transaction(w3: Web3, sender: str, settings: InitializeSettings) -> Dict[str, Any]:
    """Build a type-0 transaction for the initialize call.

    Uses ``gasPrice`` only, never the EIP-1559 fee fields, which is what
    ``cast send --legacy`` produces.
    """
    try:
        nonce = w3.eth.get_transaction_count(sender, "pending")
    except Exception:
        nonce = w3.eth.get_transaction_count(sender)

    tx: Dict[str, Any] = {
        "from": sender,
        "to": Web3.to_checksum_address(settings.contract_address),
        "data": initialize_calldata(settings.function_signature),
        "value": 0,
        "nonce": nonce,
        "gasPrice": w3.eth.gas_price,
        "chainId": w3.eth.chain_id,
    }
    tx["gas"] = w3.eth.estimate_gas(
        {key: tx[key] for key in ("from", "to", "data", "value")}
    )
    return tx


def _raw_transaction(signed: Any) -> Optional[bytes]:
    return getattr(signed, "raw_transaction", None) or getattr(
        signed, "rawTransaction", None
    )


def broadcast(w3: Web3, raw_tx: bytes) -> str:
    """Submit ``raw_tx`` and return its hash as 0x-prefixed hex.

    A node that already holds the same transaction in its pool rejects the
    resubmission with "already known"; the hash is then derived locally so
    the caller can still wait for the original.
    """
    try:
        return Web3.to_hex(w3.eth.send_raw_transaction(raw_tx))
    except Web3Exception as exc:
        if "already known" not in str(exc):
            raise
        get_logger().warning("Transaction already in the pool, waiting for its receipt")
        return Web3.to_hex(Web3.keccak(raw_tx))


def confirm(w3: Web3, tx: Dict[str, Any], tx_hash: str) -> Dict[str, Any]:
    receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=RECEIPT_TIMEOUT_SECONDS)
    summary = format_receipt(receipt)
    if summary["status"] in (1, True):
        return {"txHash": tx_hash, "receipt": summary}
    result: Dict[str, Any] = {
        "error": "Transaction reverted",
        "txHash": tx_hash,
        "receipt": summary,
    }
    reason = _extract_revert_reason(w3, tx, receipt)
    if reason:
        result["reason"] = reason
    return result


def sign_and_send(w3: Web3, private_key: str, tx: Dict[str, Any]) -> Dict[str, Any]:
    """Sign, broadcast and wait for ``tx``; success always means a receipt with status 1."""
    try:
        raw_tx = _raw_transaction(w3.eth.account.sign_transaction(tx, private_key=private_key))
        if raw_tx is None:
            return {"error": "Signed transaction has no raw bytes"}
        return confirm(w3, tx, broadcast(w3, raw_tx))
    except Exception as exc:
        return {"error": f"sign/send error: {exc}"}


def format_receipt(receipt: Any) -> Dict[str, Any]:
    tx_hash = receipt.get("transactionHash")
    return {
        "transactionHash": Web3.to_hex(tx_hash) if tx_hash else None,
        "status": receipt.get("status"),
        "blockNumber": receipt.get("blockNumber"),
        "gasUsed": receipt.get("gasUsed"),
        "effectiveGasPrice": receipt.get("effectiveGasPrice"),
    }


def _extract_revert_reason(w3: Web3, tx: Dict[str, Any], receipt: Any) -> Optional[str]:
    block_number = receipt.get("blockNumber") if receipt is not None else None
    if block_number is None:
        return None

    call_tx = dict(tx)
    for key in ("nonce", "gas", "gasPrice", "chainId"):
        call_tx.pop(key, None)
    try:
        w3.eth.call(call_tx, block_identifier=block_number)
    except Exception as exc:  # expected: the replayed call raises with revert data
        return revert_reason_from_exception(exc)
    return None


def revert_reason_from_exception(exc: Exception) -> Optional[str]:
    data_hex = getattr(exc, "data", None)
    if not isinstance(data_hex, str) and exc.args:
        arg0 = exc.args[0]
        if isinstance(arg0, dict):
            data_hex = arg0.get("data")
    message = str(exc)
    if not isinstance(data_hex, str) and "0x" in message:
        data_hex = "0x" + message.split("0x", 1)[1].split(" ")[0].strip("'\",)")

    decoded = decode_custom_error(data_hex) if isinstance(data_hex, str) else None
    if decoded:
        return decoded
    if "execution reverted:" in message:
        return message.split("execution reverted:", 1)[1].strip()
    return message or None


def decode_custom_error(data_hex: Optional[str]) -> Optional[str]:
    if not data_hex or not data_hex.startswith("0x") or len(data_hex) < 10:
        return None
    name = _CUSTOM_ERROR_MAP.get(data_hex[2:10].lower())
    return f"{name}()" if name else None


def send_initialize(settings: InitializeSettings) -> int:
    """Send initialize() through web3.py and return a process exit code."""
    logger = get_logger()
    try:
        account = Account.from_key(settings.private_key)
    except ValueError as exc:
        print(f"Error: invalid private key {mask_secret(settings.private_key)}: {exc}")
        return 1
    logger.info(
        "Signing as %s (key %s) via %s",
        account.address,
        mask_secret(settings.private_key),
        settings.rpc_url,
    )

    w3 = get_web3_client(settings.rpc_url)
    try:
        tx = build_legacy_transaction(w3, account.address, settings)
    except Exception as exc:
        reason = revert_reason_from_exception(exc)
        print(f"Error: could not prepare transaction: {reason or exc}")
        return 1

    result = sign_and_send(w3, settings.private_key, tx)
    if "error" in result:
        print(f"Error: {result['error']}")
        if result.get("reason"):
            print(f"Reason: {result['reason']}")
        if result.get("txHash"):
            print(f"Transaction hash: {result['txHash']}")
        return 1

    print(f"Transaction hash: {result['txHash']}")
    receipt = result.get("receipt")
    if receipt:
        print(f"Block number: {receipt.get('blockNumber')}")
        print(f"Gas used: {receipt.get('gasUsed')}")
    return 0
