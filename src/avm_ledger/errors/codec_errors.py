"""Errors raised while decoding or querying output records."""

from __future__ import annotations

from avm_ledger.errors.ledger_errors import LedgerError


class MalformedInput(LedgerError):
    """The buffer is shorter than a field declares, or a field is invalid.

    Attributes:
        offset: Byte offset at which the failing read started.
        shortfall: Number of bytes missing (0 when the failure is not a
            truncation, e.g. a strict-mode payload cap).
    """

    def __init__(self, message: str, *, offset: int, shortfall: int = 0) -> None:
        super().__init__(message, code="malformed-input")
        self.offset = offset
        self.shortfall = shortfall


class UnknownOutputType(LedgerError):
    """No decoder is registered for the output discriminant."""

    def __init__(self, output_id: int) -> None:
        super().__init__(f"unknown output type id: {output_id}", code="unknown-output-type")
        self.output_id = output_id


class OutOfRange(LedgerError, IndexError):
    """An address index outside the output's address list."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(
            f"address index {index} out of range for {size} address(es)",
            code="out-of-range",
        )
        self.index = index
        self.size = size


class InvalidThreshold(LedgerError):
    """Threshold can never be met by the output's address set (strict mode)."""

    def __init__(self, threshold: int, address_count: int) -> None:
        super().__init__(
            f"threshold {threshold} exceeds address count {address_count}",
            code="invalid-threshold",
        )
        self.threshold = threshold
        self.address_count = address_count
