"""Tests for TransferableOutput — avm/transferable.py."""

from __future__ import annotations

import struct

import pytest

from avm_ledger.avm.constants import ADDRESS_LEN, ASSET_ID_LEN, OutputID
from avm_ledger.avm.outputs import NFTTransferOutput, SECPTransferOutput
from avm_ledger.avm.registry import OutputTypeRegistry
from avm_ledger.avm.transferable import TransferableOutput, sort_transferable_outputs
from avm_ledger.config.settings import CodecConfig
from avm_ledger.errors.codec_errors import InvalidThreshold, MalformedInput, UnknownOutputType

ADDR_A = b"\x01" * ADDRESS_LEN
ASSET_ID = bytes(range(ASSET_ID_LEN))


class TestConstruction:
    def test_defaults(self) -> None:
        item = TransferableOutput()
        assert item.asset_id == b"\x00" * ASSET_ID_LEN
        assert item.output is None

    def test_bad_asset_id_length(self) -> None:
        with pytest.raises(ValueError, match="Invalid asset ID length"):
            TransferableOutput(b"\x01" * 31, SECPTransferOutput())

    def test_serialize_without_output(self) -> None:
        with pytest.raises(ValueError, match="no output"):
            TransferableOutput(ASSET_ID).serialize()


class TestSerialization:
    def test_layout(self, secp_output: SECPTransferOutput) -> None:
        item = TransferableOutput(ASSET_ID, secp_output)
        data = item.serialize()
        assert data[:ASSET_ID_LEN] == ASSET_ID
        assert struct.unpack(">I", data[ASSET_ID_LEN : ASSET_ID_LEN + 4])[0] == 7
        assert data[ASSET_ID_LEN + 4 :] == secp_output.serialize()

    def test_discriminant_matches_output(self, nft_output: NFTTransferOutput) -> None:
        data = TransferableOutput(ASSET_ID, nft_output).serialize()
        assert struct.unpack(">I", data[32:36])[0] == nft_output.output_id == OutputID.NFT_TRANSFER

    @pytest.mark.parametrize("fixture_name", ["secp_output", "nft_output"])
    def test_roundtrip(self, fixture_name: str, request: pytest.FixtureRequest) -> None:
        output = request.getfixturevalue(fixture_name)
        original = TransferableOutput(ASSET_ID, output)
        data = original.serialize()
        restored = TransferableOutput()
        end = restored.deserialize(data)
        assert end == len(data)
        assert restored.asset_id == ASSET_ID
        assert type(restored.output) is type(output)
        assert restored.serialize() == data
        assert restored == original

    def test_consecutive_items_in_one_buffer(
        self, secp_output: SECPTransferOutput, nft_output: NFTTransferOutput
    ) -> None:
        first = TransferableOutput(ASSET_ID, secp_output)
        second = TransferableOutput(b"\xff" * 32, nft_output)
        buf = first.serialize() + second.serialize()

        a, b = TransferableOutput(), TransferableOutput()
        mid = a.deserialize(buf)
        end = b.deserialize(buf, mid)
        assert mid == len(first.serialize())
        assert end == len(buf)
        assert a == first
        assert b == second

    def test_hex_roundtrip(self, nft_output: NFTTransferOutput) -> None:
        item = TransferableOutput(ASSET_ID, nft_output)
        assert TransferableOutput.from_hex(item.to_hex()) == item

    def test_str_is_base58(self, secp_output: SECPTransferOutput) -> None:
        text = str(TransferableOutput(ASSET_ID, secp_output))
        assert text
        assert not set(text) & set("0OIl")


class TestDeserializationErrors:
    def test_unknown_output_id(self, secp_output: SECPTransferOutput) -> None:
        data = ASSET_ID + struct.pack(">I", 3) + secp_output.serialize()
        with pytest.raises(UnknownOutputType) as exc_info:
            TransferableOutput.from_bytes(data)
        assert exc_info.value.output_id == 3

    def test_truncated_asset_id(self) -> None:
        with pytest.raises(MalformedInput, match="asset_id") as exc_info:
            TransferableOutput.from_bytes(ASSET_ID[:10])
        assert exc_info.value.shortfall == 22

    def test_missing_output_id(self) -> None:
        with pytest.raises(MalformedInput, match="output_id"):
            TransferableOutput.from_bytes(ASSET_ID + b"\x00\x00")

    def test_truncated_inner_output(self, secp_output: SECPTransferOutput) -> None:
        data = TransferableOutput(ASSET_ID, secp_output).serialize()
        with pytest.raises(MalformedInput):
            TransferableOutput.from_bytes(data[:-5])

    def test_failed_decode_leaves_instance_unchanged(
        self, secp_output: SECPTransferOutput
    ) -> None:
        item = TransferableOutput(ASSET_ID, secp_output)
        with pytest.raises(MalformedInput):
            item.deserialize(b"\xaa" * 34)
        assert item.asset_id == ASSET_ID
        assert item.output is secp_output

    def test_custom_registry(self, secp_output: SECPTransferOutput) -> None:
        data = TransferableOutput(ASSET_ID, secp_output).serialize()
        nft_only = OutputTypeRegistry({NFTTransferOutput.OUTPUT_ID: NFTTransferOutput})
        with pytest.raises(UnknownOutputType):
            TransferableOutput.from_bytes(data, registry=nft_only)

    def test_strict_config_forwarded(self) -> None:
        output = SECPTransferOutput(threshold=2, addresses=[ADDR_A])
        data = TransferableOutput(ASSET_ID, output).serialize()
        assert TransferableOutput.from_bytes(data).output == output
        with pytest.raises(InvalidThreshold):
            TransferableOutput.from_bytes(data, config=CodecConfig(strict=True))


class TestOrdering:
    def test_sort_transferable_outputs(self) -> None:
        items = [
            TransferableOutput(b"\x02" * 32, SECPTransferOutput(amount=1)),
            TransferableOutput(b"\x01" * 32, SECPTransferOutput(amount=9)),
            TransferableOutput(b"\x01" * 32, SECPTransferOutput(amount=3)),
        ]
        ordered = sort_transferable_outputs(items)
        assert [i.asset_id[0] for i in ordered] == [1, 1, 2]
        assert [i.output.amount for i in ordered] == [3, 9, 1]  # type: ignore[union-attr]

    def test_comparator(self) -> None:
        cmp = TransferableOutput.comparator()
        a = TransferableOutput(b"\x01" * 32, SECPTransferOutput())
        b = TransferableOutput(b"\x02" * 32, SECPTransferOutput())
        assert cmp(a, b) == -1
        assert cmp(b, a) == 1
        assert cmp(a, a) == 0

    def test_to_dict(self, nft_output: NFTTransferOutput) -> None:
        d = TransferableOutput(ASSET_ID, nft_output).to_dict()
        assert d["asset_id"] == ASSET_ID.hex()
        assert d["output"]["group_id"] == 7
        assert TransferableOutput().to_dict()["output"] is None

    def test_repr(self, secp_output: SECPTransferOutput) -> None:
        assert repr(TransferableOutput(ASSET_ID, secp_output)).startswith(
            "TransferableOutput(asset_id="
        )
