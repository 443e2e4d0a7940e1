"""Errors — exception hierarchy rooted at LedgerError."""

from avm_ledger.errors.codec_errors import (
    InvalidThreshold,
    MalformedInput,
    OutOfRange,
    UnknownOutputType,
)
from avm_ledger.errors.ledger_errors import LedgerError

__all__ = [
    "InvalidThreshold",
    "LedgerError",
    "MalformedInput",
    "OutOfRange",
    "UnknownOutputType",
]
