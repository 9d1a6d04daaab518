import io
import unittest
from contextlib import redirect_stdout
from unittest import mock

from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import Web3Exception

from trivia_initializer.config import InitializeSettings
from trivia_initializer.web3_backend import (
    build_legacy_transaction,
    decode_custom_error,
    initialize_calldata,
    revert_reason_from_exception,
    send_initialize,
    sign_and_send,
)

SENDER = "0x288be778b666Ed006357ce12f455fbB3C7D0Ec94"
PRIVATE_KEY = "0x9d845309f5edfbf973fa59701a4998942afac8fea78034d45d91004854ed1456"


def make_settings() -> InitializeSettings:
    return InitializeSettings(
        contract_address="0x49c90b349fba199c4be542d225d1783ac8c0ddde",
        rpc_url="https://sepolia-rollup.arbitrum.io/rpc",
        private_key=PRIVATE_KEY,
        backend="web3",
    )


def make_w3() -> mock.MagicMock:
    w3 = mock.MagicMock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.gas_price = 100_000_000
    w3.eth.chain_id = 421614
    w3.eth.estimate_gas.return_value = 60_000
    return w3


class TestCalldata(unittest.TestCase):
    def test_initialize_selector(self) -> None:
        self.assertEqual(initialize_calldata(), "0x8129fc1c")


class TestDecodeCustomError(unittest.TestCase):
    def test_unauthorized(self) -> None:
        self.assertEqual(decode_custom_error("0x82b42900"), "Unauthorized()")

    def test_unknown_or_short_data(self) -> None:
        self.assertIsNone(decode_custom_error("0xdeadbeef"))
        self.assertIsNone(decode_custom_error("0x82b4"))
        self.assertIsNone(decode_custom_error(None))

    def test_reason_from_exception_data(self) -> None:
        exc = Exception("execution reverted")
        exc.data = "0x82b42900"
        self.assertEqual(revert_reason_from_exception(exc), "Unauthorized()")

    def test_reason_from_plain_message(self) -> None:
        exc = Exception("execution reverted: not owner")
        self.assertEqual(revert_reason_from_exception(exc), "not owner")


class TestBuildLegacyTransaction(unittest.TestCase):
    def test_fields(self) -> None:
        w3 = make_w3()
        tx = build_legacy_transaction(w3, SENDER, make_settings())
        self.assertEqual(tx["to"].lower(), "0x49c90b349fba199c4be542d225d1783ac8c0ddde")
        self.assertEqual(tx["data"], "0x8129fc1c")
        self.assertEqual(tx["nonce"], 7)
        self.assertEqual(tx["gasPrice"], 100_000_000)
        self.assertEqual(tx["gas"], 60_000)
        self.assertEqual(tx["chainId"], 421614)
        self.assertNotIn("maxFeePerGas", tx)
        self.assertNotIn("maxPriorityFeePerGas", tx)
        w3.eth.get_transaction_count.assert_called_once_with(SENDER, "pending")


class TestSignAndSend(unittest.TestCase):
    def setUp(self) -> None:
        self.w3 = make_w3()
        self.w3.eth.account.sign_transaction.return_value = mock.Mock(
            raw_transaction=HexBytes(b"\x01\x02")
        )
        self.tx_hash = HexBytes(b"\xaa" * 32)
        self.w3.eth.send_raw_transaction.return_value = self.tx_hash

    def test_success(self) -> None:
        self.w3.eth.wait_for_transaction_receipt.return_value = {
            "status": 1,
            "blockNumber": 10,
            "gasUsed": 21000,
            "transactionHash": self.tx_hash,
        }
        result = sign_and_send(self.w3, PRIVATE_KEY, {"to": SENDER})
        self.assertEqual(result["txHash"], "0x" + "aa" * 32)
        self.assertEqual(result["receipt"]["transactionHash"], "0x" + "aa" * 32)
        self.assertEqual(result["receipt"]["blockNumber"], 10)
        self.assertNotIn("error", result)

    def test_revert_is_decoded(self) -> None:
        self.w3.eth.wait_for_transaction_receipt.return_value = {
            "status": 0,
            "blockNumber": 11,
            "gasUsed": 25000,
            "transactionHash": self.tx_hash,
        }
        revert = Exception("execution reverted")
        revert.data = "0x82b42900"
        self.w3.eth.call.side_effect = revert
        result = sign_and_send(self.w3, PRIVATE_KEY, {"to": SENDER, "nonce": 1, "gas": 1})
        self.assertEqual(result["error"], "Transaction reverted")
        self.assertEqual(result["reason"], "Unauthorized()")
        call_tx = self.w3.eth.call.call_args.args[0]
        self.assertNotIn("nonce", call_tx)

    def test_already_known_waits_for_receipt(self) -> None:
        self.w3.eth.send_raw_transaction.side_effect = Web3Exception("already known")
        self.w3.eth.wait_for_transaction_receipt.return_value = {
            "status": 0,
            "blockNumber": 12,
            "gasUsed": 25000,
            "transactionHash": self.tx_hash,
        }
        revert = Exception("execution reverted")
        revert.data = "0x82b42900"
        self.w3.eth.call.side_effect = revert
        result = sign_and_send(self.w3, PRIVATE_KEY, {"to": SENDER})
        local_hash = Web3.to_hex(Web3.keccak(HexBytes(b"\x01\x02")))
        self.w3.eth.wait_for_transaction_receipt.assert_called_once()
        self.assertEqual(
            self.w3.eth.wait_for_transaction_receipt.call_args.args[0], local_hash
        )
        self.assertEqual(result["error"], "Transaction reverted")
        self.assertEqual(result["reason"], "Unauthorized()")
        self.assertEqual(result["txHash"], local_hash)

    def test_other_rpc_error_is_reported(self) -> None:
        self.w3.eth.send_raw_transaction.side_effect = Web3Exception("nonce too low")
        result = sign_and_send(self.w3, PRIVATE_KEY, {"to": SENDER})
        self.assertIn("nonce too low", result["error"])
        self.w3.eth.wait_for_transaction_receipt.assert_not_called()

    def test_signing_failure(self) -> None:
        self.w3.eth.account.sign_transaction.side_effect = ValueError("bad key")
        result = sign_and_send(self.w3, PRIVATE_KEY, {})
        self.assertIn("bad key", result["error"])


class TestSendInitialize(unittest.TestCase):
    def test_success_exit_code(self) -> None:
        out = io.StringIO()
        with mock.patch("trivia_initializer.web3_backend.get_web3_client", return_value=make_w3()), \
                mock.patch(
                    "trivia_initializer.web3_backend.sign_and_send",
                    return_value={"txHash": "0xabc", "receipt": {"blockNumber": 3, "gasUsed": 1}},
                ), redirect_stdout(out):
            self.assertEqual(send_initialize(make_settings()), 0)
        self.assertIn("Transaction hash: 0xabc", out.getvalue())

    def test_revert_exit_code(self) -> None:
        out = io.StringIO()
        with mock.patch("trivia_initializer.web3_backend.get_web3_client", return_value=make_w3()), \
                mock.patch(
                    "trivia_initializer.web3_backend.sign_and_send",
                    return_value={"error": "Transaction reverted", "reason": "Unauthorized()"},
                ), redirect_stdout(out):
            self.assertEqual(send_initialize(make_settings()), 1)
        self.assertIn("Reason: Unauthorized()", out.getvalue())

    def test_invalid_key(self) -> None:
        settings = InitializeSettings(
            contract_address="0x49c90b349fba199c4be542d225d1783ac8c0ddde",
            rpc_url="https://sepolia-rollup.arbitrum.io/rpc",
            private_key="0xnothex",
        )
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(send_initialize(settings), 1)
        self.assertIn("invalid private key", out.getvalue())


if __name__ == "__main__":
    unittest.main()
