"""Unit tests for multisig batch construction."""

import pytest
from eth_utils import to_checksum_address

from synth_release_tools.constants import MULTISEND_CALL_ONLY_ADDRESS
from synth_release_tools.multisend import batch_to_transaction, build_batch, encode_multisend
from synth_release_tools.types import MetaTransaction, OperationType

TARGET_1 = to_checksum_address("0xf9231d28b34cd77a08542f73ca87c4411b1b8b56")
TARGET_2 = to_checksum_address("0x1572f7f1a5e4c2168ab007efc0a817750e814682")
UPDATE_SWAPPER = "0xd3033c39000000000000000000000000229f19942612a8dbdec3643cb23f88685ccd56a5"


class TestBuildBatch:
    """Test the build_batch function."""

    def test_empty_descriptor_list(self):
        assert build_batch([]) == []

    def test_preserves_order(self):
        batch = build_batch(
            [
                {"to": TARGET_1, "value": "0", "data": UPDATE_SWAPPER},
                {"to": TARGET_2, "value": "0", "data": UPDATE_SWAPPER},
            ]
        )

        assert [tx.to for tx in batch] == [TARGET_1, TARGET_2]

    def test_every_entry_is_plain_call(self):
        batch = build_batch([{"to": TARGET_1, "data": "0x"}, {"to": TARGET_2, "data": UPDATE_SWAPPER}])

        assert all(tx.operation == OperationType.CALL for tx in batch)

    def test_checksums_addresses(self):
        [tx] = build_batch([{"to": TARGET_1.lower(), "data": UPDATE_SWAPPER}])

        assert tx.to == TARGET_1

    def test_value_defaults_and_parsing(self):
        batch = build_batch(
            [
                {"to": TARGET_1},
                {"to": TARGET_1, "value": "1000"},
                {"to": TARGET_1, "value": "0x10"},
                {"to": TARGET_1, "value": 7},
            ]
        )

        assert [tx.value for tx in batch] == [0, 1000, 16, 7]
        assert batch[0].data == "0x"

    def test_accepts_meta_transactions(self):
        [tx] = build_batch([MetaTransaction(to=TARGET_1.lower(), value=3, data=UPDATE_SWAPPER)])

        assert tx == MetaTransaction(to=TARGET_1, value=3, data=UPDATE_SWAPPER)

    def test_forces_call_operation(self):
        descriptor = MetaTransaction(
            to=TARGET_1, data=UPDATE_SWAPPER, operation=OperationType.DELEGATE_CALL
        )

        [tx] = build_batch([descriptor])

        assert tx.operation == OperationType.CALL

    @pytest.mark.parametrize("to", [None, "", "0x123", "not-an-address"])
    def test_rejects_invalid_destination(self, to):
        with pytest.raises(ValueError):
            build_batch([{"to": to, "data": "0x"}])

    def test_rejects_non_hex_data(self):
        with pytest.raises(ValueError):
            build_batch([{"to": TARGET_1, "data": "0xzz"}])


class TestEncodeMultisend:
    """Test MultiSend calldata encoding."""

    def test_single_transaction_layout(self):
        tx = MetaTransaction(to=TARGET_1, value=5, data="0xabcd")

        calldata = encode_multisend([tx])

        packed = (
            "00"
            + TARGET_1[2:].lower()
            + format(5, "064x")
            + format(2, "064x")
            + "abcd"
        )
        packed_len = len(packed) // 2  # 87 bytes
        padding = "00" * (96 - packed_len)
        expected = (
            "0x8d80ff0a"
            + format(32, "064x")  # offset of the bytes argument
            + format(packed_len, "064x")
            + packed
            + padding
        )
        assert calldata == expected

    def test_concatenates_in_order(self):
        first = MetaTransaction(to=TARGET_1, data="0x01")
        second = MetaTransaction(to=TARGET_1, data="0x02")

        forward = encode_multisend([first, second])
        backward = encode_multisend([second, first])

        assert forward != backward

    def test_empty_batch(self):
        assert encode_multisend([]) == "0x8d80ff0a" + format(32, "064x") + format(0, "064x")


class TestBatchToTransaction:
    """Test turning a batch into one Safe transaction."""

    def test_single_call_is_sent_directly(self):
        batch = build_batch([{"to": TARGET_1, "value": "9", "data": UPDATE_SWAPPER}])

        tx = batch_to_transaction(batch, nonce=4)

        assert tx.to == TARGET_1
        assert tx.value == 9
        assert tx.data == UPDATE_SWAPPER
        assert tx.operation == OperationType.CALL
        assert tx.nonce == 4

    def test_multiple_calls_go_through_multisend(self):
        batch = build_batch(
            [{"to": TARGET_1, "data": UPDATE_SWAPPER}, {"to": TARGET_2, "data": UPDATE_SWAPPER}]
        )

        tx = batch_to_transaction(batch, nonce=11)

        assert tx.to == to_checksum_address(MULTISEND_CALL_ONLY_ADDRESS)
        assert tx.value == 0
        assert tx.operation == OperationType.DELEGATE_CALL
        assert tx.data == encode_multisend(batch)
        assert tx.nonce == 11

    def test_empty_batch_is_a_valid_noop_transaction(self):
        tx = batch_to_transaction([], nonce=0)

        assert tx.to == to_checksum_address(MULTISEND_CALL_ONLY_ADDRESS)
        assert tx.operation == OperationType.DELEGATE_CALL
        assert tx.data == encode_multisend([])

    def test_gas_refund_parameters_are_zero(self):
        tx = batch_to_transaction(build_batch([{"to": TARGET_1}]), nonce=1)

        assert (tx.safe_tx_gas, tx.base_gas, tx.gas_price) == (0, 0, 0)
        assert tx.gas_token == "0x0000000000000000000000000000000000000000"
        assert tx.refund_receiver == "0x0000000000000000000000000000000000000000"

    def test_custom_multisend_address(self):
        custom = "0xa238cbeb142c10ef7ad8442c6d1f9e89e07e7761"

        tx = batch_to_transaction([], nonce=0, multisend_address=custom)

        assert tx.to == to_checksum_address(custom)
