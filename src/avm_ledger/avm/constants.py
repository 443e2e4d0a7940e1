"""Wire constants for AVM output records."""

from __future__ import annotations

import enum

# Field widths in bytes
ASSET_ID_LEN = 32
ADDRESS_LEN = 20
OUTPUT_ID_LEN = 4
LOCKTIME_LEN = 8
THRESHOLD_LEN = 4
AMOUNT_LEN = 8
GROUP_ID_LEN = 4

# Design cap on NFT payloads; only enforced in strict decoding
MAX_NFT_PAYLOAD_SIZE = 1024

UINT32_MAX = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF


class OutputID(int, enum.Enum):
    """Wire discriminants of the known output variants."""

    SECP_TRANSFER = 7
    NFT_TRANSFER = 11
