"""Address handling — fixed-width raw addresses and their canonical order.

Addresses are plain 20-byte ``bytes`` values. Python's ``bytes`` ordering is
byte-lexicographic, which is the canonical order used for serialization.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from avm_ledger.avm.constants import ADDRESS_LEN

if TYPE_CHECKING:
    from collections.abc import Iterable


def normalize_address(value: bytes | bytearray | memoryview) -> bytes:
    """Return *value* as an immutable ``bytes`` address.

    Raises:
        ValueError: If the value is not bytes-like or not ``ADDRESS_LEN`` long.
    """
    if not isinstance(value, (bytes, bytearray, memoryview)):
        msg = f"Address must be bytes-like, got {type(value).__name__}"
        raise ValueError(msg)
    raw = bytes(value)
    if len(raw) != ADDRESS_LEN:
        msg = f"Invalid address length: {len(raw)} (expected {ADDRESS_LEN})"
        raise ValueError(msg)
    return raw


def sort_addresses(values: Iterable[bytes | bytearray | memoryview]) -> list[bytes]:
    """Normalize *values* and return them in canonical ascending order."""
    return sorted(normalize_address(v) for v in values)
