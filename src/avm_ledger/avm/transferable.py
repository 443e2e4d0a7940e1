"""TransferableOutput — an asset ID paired with one polymorphic output.

Wire layout::

    asset_id(32) ‖ output_id(4) ‖ <output variant selected by output_id>
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, Self

from avm_ledger.avm.codec import ByteReader, encode_uint32
from avm_ledger.avm.constants import ASSET_ID_LEN
from avm_ledger.avm.registry import DEFAULT_OUTPUT_REGISTRY
from avm_ledger.utils.encoding import base58_encode

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from avm_ledger.avm.outputs import Output
    from avm_ledger.avm.registry import OutputTypeRegistry
    from avm_ledger.config.settings import CodecConfig

logger = logging.getLogger(__name__)


class TransferableOutput:
    """An output of a specific asset, as placed in a transaction.

    Args:
        asset_id: 32-byte asset identifier. Defaults to all zeros.
        output: The output being transferred. May be omitted when the
            instance is about to be populated by :meth:`deserialize`.
    """

    def __init__(self, asset_id: bytes | None = None, output: Output | None = None) -> None:
        asset_id = bytes(ASSET_ID_LEN) if asset_id is None else bytes(asset_id)
        if len(asset_id) != ASSET_ID_LEN:
            msg = f"Invalid asset ID length: {len(asset_id)} (expected {ASSET_ID_LEN})"
            raise ValueError(msg)
        self._asset_id = asset_id
        self._output = output

    @property
    def asset_id(self) -> bytes:
        """The 32-byte asset identifier."""
        return self._asset_id

    @property
    def output(self) -> Output | None:
        """The wrapped output."""
        return self._output

    def serialize(self) -> bytes:
        """Serialize to ``asset_id ‖ output_id ‖ output``.

        Raises:
            ValueError: If no output is attached.
        """
        if self._output is None:
            msg = "TransferableOutput has no output to serialize"
            raise ValueError(msg)
        result = self._asset_id
        result += encode_uint32(self._output.output_id)
        result += self._output.serialize()
        return result

    def deserialize(
        self,
        data: bytes | bytearray | memoryview,
        offset: int = 0,
        *,
        registry: OutputTypeRegistry | None = None,
        config: CodecConfig | None = None,
    ) -> int:
        """Populate from *data* starting at *offset*.

        Args:
            data: Buffer holding the serialized transferable output.
            offset: Position of the first byte.
            registry: Output decoders to dispatch on; defaults to
                :data:`~avm_ledger.avm.registry.DEFAULT_OUTPUT_REGISTRY`.
            config: Codec settings passed through to the output decoder.

        Returns:
            The offset immediately past the consumed bytes.

        Raises:
            MalformedInput: If the buffer is truncated.
            UnknownOutputType: If the output discriminant is not registered.
        """
        reader = ByteReader(data, offset)
        asset_id = reader.read(ASSET_ID_LEN, "asset_id")
        output_id = reader.read_uint32("output_id")
        output, end = (registry if registry is not None else DEFAULT_OUTPUT_REGISTRY).dispatch(
            output_id, data, reader.offset, config=config
        )
        self._asset_id = asset_id
        self._output = output
        logger.debug("Decoded transferable output for asset %s", asset_id.hex())
        return end

    @classmethod
    def from_bytes(
        cls,
        data: bytes | bytearray | memoryview,
        *,
        registry: OutputTypeRegistry | None = None,
        config: CodecConfig | None = None,
    ) -> Self:
        """Decode a transferable output from raw bytes."""
        item = cls()
        item.deserialize(data, 0, registry=registry, config=config)
        return item

    @classmethod
    def from_hex(cls, hex_str: str) -> Self:
        """Decode a transferable output from a hex string."""
        return cls.from_bytes(bytes.fromhex(hex_str))

    def to_hex(self) -> str:
        """Serialized form as a hex string."""
        return self.serialize().hex()

    def to_dict(self) -> dict[str, Any]:
        """Plain dict view, with byte fields as hex."""
        return {
            "asset_id": self._asset_id.hex(),
            "output": self._output.to_dict() if self._output is not None else None,
        }

    @staticmethod
    def comparator() -> Callable[[TransferableOutput, TransferableOutput], int]:
        """Return a ``cmp``-style function ordering by serialized bytes."""

        def _compare(a: TransferableOutput, b: TransferableOutput) -> int:
            left, right = a.serialize(), b.serialize()
            return (left > right) - (left < right)

        return _compare

    def __str__(self) -> str:
        return base58_encode(self.serialize())

    def __repr__(self) -> str:
        return f"TransferableOutput(asset_id={self._asset_id.hex()!r}, output={self._output!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransferableOutput):
            return NotImplemented
        return self._asset_id == other._asset_id and self._output == other._output


def sort_transferable_outputs(items: Iterable[TransferableOutput]) -> list[TransferableOutput]:
    """Return *items* in canonical order (ascending serialized bytes)."""
    return sorted(items, key=functools.cmp_to_key(TransferableOutput.comparator()))
