"""Shared test fixtures for the py-avm test suite."""

from __future__ import annotations

import pytest

from avm_ledger.avm.constants import ADDRESS_LEN
from avm_ledger.avm.outputs import NFTTransferOutput, SECPTransferOutput


@pytest.fixture
def addresses() -> list[bytes]:
    """Addresses A < B < C deliberately out of canonical order."""
    return [b"\x03" * ADDRESS_LEN, b"\x01" * ADDRESS_LEN, b"\x02" * ADDRESS_LEN]


@pytest.fixture
def secp_output(addresses: list[bytes]) -> SECPTransferOutput:
    """A 2-of-3 fungible output locked until t=1000."""
    return SECPTransferOutput(amount=12345, locktime=1000, threshold=2, addresses=addresses)


@pytest.fixture
def nft_output(addresses: list[bytes]) -> NFTTransferOutput:
    """A 1-of-3 NFT output with a small payload."""
    return NFTTransferOutput(
        group_id=7,
        payload=b"\x01\x02\x03",
        locktime=0,
        threshold=1,
        addresses=addresses,
    )
