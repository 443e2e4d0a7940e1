"""Output records — base layout, fungible and NFT variants, spend authorization.

Every output ends with the same base suffix (all integers big-endian)::

    locktime(8) ‖ threshold(4) ‖ address_count(4) ‖ address(20) × address_count

Variants prepend their own fields:

- :class:`AmountOutput` — ``amount(8)``
- :class:`NFTOutputBase` — ``group_id(4) ‖ payload_size(4) ‖ payload``

Addresses are kept in canonical (ascending byte) order at all times, so equal
address sets always serialize to identical bytes.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Self

from avm_ledger.avm.address import sort_addresses
from avm_ledger.avm.codec import ByteReader, encode_uint32, encode_uint64
from avm_ledger.avm.constants import (
    ADDRESS_LEN,
    GROUP_ID_LEN,
    UINT32_MAX,
    UINT64_MAX,
    OutputID,
)
from avm_ledger.errors.codec_errors import InvalidThreshold, MalformedInput, OutOfRange
from avm_ledger.utils.clock import unix_now
from avm_ledger.utils.encoding import base58_decode, base58_encode

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from avm_ledger.avm.transferable import TransferableOutput
    from avm_ledger.config.settings import CodecConfig

AddressLike = bytes | bytearray | memoryview


def _check_range(name: str, value: int, upper: int) -> None:
    if not 0 <= value <= upper:
        msg = f"{name} out of range [0, {upper}]: {value}"
        raise ValueError(msg)


# ---------------------------------------------------------------------------
# Output (base)
# ---------------------------------------------------------------------------


class Output(ABC):
    """Locktime, threshold and address set shared by every output kind.

    Args:
        locktime: UNIX timestamp; the output is spendable strictly after it.
        threshold: Number of listed addresses that must sign to spend.
        addresses: 20-byte addresses allowed to spend. Copied and sorted.

    The threshold is not checked against the number of addresses; an output
    whose threshold exceeds its address count is valid but unspendable.
    Use :meth:`validate` to reject such outputs explicitly.
    """

    def __init__(
        self,
        locktime: int = 0,
        threshold: int = 1,
        addresses: Iterable[AddressLike] | None = None,
    ) -> None:
        _check_range("locktime", locktime, UINT64_MAX)
        _check_range("threshold", threshold, UINT32_MAX)
        self._locktime = locktime
        self._threshold = threshold
        self._addresses: list[bytes] = sort_addresses(addresses if addresses is not None else ())

    # -- identity ------------------------------------------------------------

    @property
    @abstractmethod
    def output_id(self) -> int:
        """Wire discriminant telling parsers which variant this is."""

    # -- accessors -----------------------------------------------------------

    @property
    def locktime(self) -> int:
        """UNIX timestamp after which the output can be spent."""
        return self._locktime

    @property
    def threshold(self) -> int:
        """Number of signers required to spend the output."""
        return self._threshold

    @property
    def addresses(self) -> list[bytes]:
        """A new list of the addresses, in canonical order."""
        return list(self._addresses)

    def get_address_index(self, address: AddressLike) -> int:
        """Return the position of *address*, or ``-1`` if it is not listed."""
        raw = bytes(address)
        for idx, own in enumerate(self._addresses):
            if own == raw:
                return idx
        return -1

    def get_address(self, idx: int) -> bytes:
        """Return the address at *idx*.

        Raises:
            OutOfRange: If *idx* is not a valid position.
        """
        if not 0 <= idx < len(self._addresses):
            raise OutOfRange(idx, len(self._addresses))
        return self._addresses[idx]

    # -- spend authorization -------------------------------------------------

    def get_spenders(
        self,
        addresses: Iterable[AddressLike],
        as_of: int | None = None,
        *,
        clock: Callable[[], int] = unix_now,
    ) -> list[bytes]:
        """Select the candidate addresses qualified to spend this output.

        Walks the output's own addresses in canonical order and, for each one,
        scans *addresses* for byte-equal matches. Collection stops once
        ``threshold`` matches are found. Duplicates in either list are not
        collapsed and may be counted more than once.

        Args:
            addresses: Candidate signer addresses.
            as_of: Timestamp to evaluate at; read from *clock* when omitted.
            clock: Time source used when *as_of* is ``None``.

        Returns:
            Matching candidates, empty while the output is still locked.
        """
        now = clock() if as_of is None else as_of
        if now <= self._locktime:
            return []

        candidates = [bytes(a) for a in addresses]
        qualified: list[bytes] = []
        for own in self._addresses:
            for candidate in candidates:
                if len(qualified) >= self._threshold:
                    return qualified
                if candidate == own:
                    qualified.append(candidate)
        return qualified

    def meets_threshold(
        self,
        addresses: Iterable[AddressLike],
        as_of: int | None = None,
        *,
        clock: Callable[[], int] = unix_now,
    ) -> bool:
        """Check whether *addresses* may spend this output at *as_of*.

        True only if the output is unlocked (``as_of > locktime``) and at least
        ``threshold`` qualified spenders are found.
        """
        now = clock() if as_of is None else as_of
        if now <= self._locktime:
            return False
        return len(self.get_spenders(addresses, now)) >= self._threshold

    # -- validation ----------------------------------------------------------

    def validate(self, config: CodecConfig | None = None, *, offset: int = 0) -> None:
        """Strict checks not enforced by the wire format.

        Args:
            config: Codec settings, consulted by variants with size limits.
            offset: Position of this output inside a larger buffer, used to
                report where a rejected field starts.

        Raises:
            InvalidThreshold: If the threshold exceeds the address count.
        """
        if self._threshold > len(self._addresses):
            raise InvalidThreshold(self._threshold, len(self._addresses))

    # -- serialization -------------------------------------------------------

    def serialize(self) -> bytes:
        """Serialize the output to its canonical wire form."""
        result = encode_uint64(self._locktime)
        result += encode_uint32(self._threshold)
        result += encode_uint32(len(self._addresses))
        result += b"".join(self._addresses)
        return result

    def _read_fields(self, reader: ByteReader) -> None:
        self._locktime = reader.read_uint64("locktime")
        self._threshold = reader.read_uint32("threshold")
        count = reader.read_uint32("address_count")
        raw = reader.read(count * ADDRESS_LEN, "addresses")
        self._addresses = sort_addresses(
            raw[i : i + ADDRESS_LEN] for i in range(0, len(raw), ADDRESS_LEN)
        )

    def deserialize(
        self,
        data: bytes | bytearray | memoryview,
        offset: int = 0,
        *,
        config: CodecConfig | None = None,
    ) -> int:
        """Populate this output from *data* starting at *offset*.

        Decoding is all-or-nothing: on error the instance is left unchanged.

        Args:
            data: Buffer holding the serialized output.
            offset: Position of the first byte of the output.
            config: Codec settings; strict mode runs :meth:`validate`.

        Returns:
            The offset immediately past the consumed bytes.

        Raises:
            MalformedInput: If the buffer is truncated.
            InvalidThreshold: In strict mode, for an unspendable threshold.
        """
        reader = ByteReader(data, offset)
        parsed = self.__class__.__new__(self.__class__)
        parsed._read_fields(reader)
        if config is not None and config.strict:
            parsed.validate(config, offset=offset)
        self.__dict__.update(parsed.__dict__)
        return reader.offset

    @classmethod
    def from_bytes(
        cls, data: bytes | bytearray | memoryview, *, config: CodecConfig | None = None
    ) -> Self:
        """Decode a concrete output from raw bytes."""
        out = cls()
        out.deserialize(data, 0, config=config)
        return out

    @classmethod
    def from_hex(cls, hex_str: str) -> Self:
        """Decode a concrete output from a hex string."""
        return cls.from_bytes(bytes.fromhex(hex_str))

    @classmethod
    def from_string(cls, text: str) -> Self:
        """Decode a concrete output from its Base58 string form."""
        return cls.from_bytes(base58_decode(text))

    def to_hex(self) -> str:
        """Serialized form as a hex string."""
        return self.serialize().hex()

    def to_dict(self) -> dict[str, Any]:
        """Plain dict view of the output, with byte fields as hex."""
        return {
            "output_id": int(self.output_id),
            "locktime": self._locktime,
            "threshold": self._threshold,
            "addresses": [a.hex() for a in self._addresses],
        }

    # -- composition ---------------------------------------------------------

    def make_transferable(self, asset_id: bytes) -> TransferableOutput:
        """Pair this output with *asset_id* in a :class:`TransferableOutput`."""
        from avm_ledger.avm.transferable import TransferableOutput

        return TransferableOutput(asset_id, self)

    @staticmethod
    def comparator() -> Callable[[Output, Output], int]:
        """Return a ``cmp``-style function ordering outputs by serialized bytes."""

        def _compare(a: Output, b: Output) -> int:
            left, right = a.serialize(), b.serialize()
            return (left > right) - (left < right)

        return _compare

    # -- dunder --------------------------------------------------------------

    def __str__(self) -> str:
        return base58_encode(self.serialize())

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{self.__class__.__name__}({fields})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Output):
            return NotImplemented
        return self.output_id == other.output_id and self.serialize() == other.serialize()


def sort_outputs(outputs: Iterable[Output]) -> list[Output]:
    """Return *outputs* in canonical order (ascending serialized bytes)."""
    return sorted(outputs, key=functools.cmp_to_key(Output.comparator()))


# ---------------------------------------------------------------------------
# Fungible amounts
# ---------------------------------------------------------------------------


class AmountOutput(Output):
    """An output carrying a quantity of an asset.

    Args:
        amount: Quantity transferred, an unsigned 64-bit value.
        locktime: See :class:`Output`.
        threshold: See :class:`Output`.
        addresses: See :class:`Output`.
    """

    def __init__(
        self,
        amount: int = 0,
        locktime: int = 0,
        threshold: int = 1,
        addresses: Iterable[AddressLike] | None = None,
    ) -> None:
        super().__init__(locktime, threshold, addresses)
        _check_range("amount", amount, UINT64_MAX)
        self._amount = amount

    @property
    def amount(self) -> int:
        """Quantity of the asset held by this output."""
        return self._amount

    def serialize(self) -> bytes:
        return encode_uint64(self._amount) + super().serialize()

    def _read_fields(self, reader: ByteReader) -> None:
        self._amount = reader.read_uint64("amount")
        super()._read_fields(reader)

    def to_dict(self) -> dict[str, Any]:
        return {"amount": self._amount, **super().to_dict()}


class SECPTransferOutput(AmountOutput):
    """Fungible transfer output spent with secp256k1 signatures."""

    OUTPUT_ID: ClassVar[int] = OutputID.SECP_TRANSFER

    @property
    def output_id(self) -> int:
        return self.OUTPUT_ID


# ---------------------------------------------------------------------------
# Non-fungible tokens
# ---------------------------------------------------------------------------


class NFTOutputBase(Output):
    """An output carrying a non-fungible token.

    Args:
        group_id: Token group within the asset, an unsigned 32-bit value.
        payload: Opaque token data. Intended to stay within 1024 bytes;
            the limit is only checked by :meth:`validate`.
        locktime: See :class:`Output`.
        threshold: See :class:`Output`.
        addresses: See :class:`Output`.
    """

    def __init__(
        self,
        group_id: int = 0,
        payload: bytes = b"",
        locktime: int = 0,
        threshold: int = 1,
        addresses: Iterable[AddressLike] | None = None,
    ) -> None:
        super().__init__(locktime, threshold, addresses)
        _check_range("group_id", group_id, UINT32_MAX)
        _check_range("payload size", len(payload), UINT32_MAX)
        self._group_id = group_id
        self._payload = bytes(payload)

    @property
    def group_id(self) -> int:
        """Token group identifier."""
        return self._group_id

    @property
    def payload(self) -> bytes:
        """Opaque token payload."""
        return self._payload

    def validate(self, config: CodecConfig | None = None, *, offset: int = 0) -> None:
        """Strict checks, adding the payload cap to :meth:`Output.validate`.

        Raises:
            MalformedInput: If the payload is larger than
                ``config.max_nft_payload_size``.
            InvalidThreshold: If the threshold exceeds the address count.
        """
        if config is not None and len(self._payload) > config.max_nft_payload_size:
            msg = (
                f"NFT payload of {len(self._payload)} bytes exceeds "
                f"limit of {config.max_nft_payload_size}"
            )
            raise MalformedInput(msg, offset=offset + GROUP_ID_LEN + 4)
        super().validate(config, offset=offset)

    def serialize(self) -> bytes:
        result = encode_uint32(self._group_id)
        result += encode_uint32(len(self._payload))
        result += self._payload
        return result + super().serialize()

    def _read_fields(self, reader: ByteReader) -> None:
        self._group_id = reader.read_uint32("group_id")
        size = reader.read_uint32("payload_size")
        self._payload = reader.read(size, "payload")
        super()._read_fields(reader)

    def to_dict(self) -> dict[str, Any]:
        return {"group_id": self._group_id, "payload": self._payload.hex(), **super().to_dict()}


class NFTTransferOutput(NFTOutputBase):
    """NFT transfer output spent with secp256k1 signatures."""

    OUTPUT_ID: ClassVar[int] = OutputID.NFT_TRANSFER

    @property
    def output_id(self) -> int:
        return self.OUTPUT_ID
