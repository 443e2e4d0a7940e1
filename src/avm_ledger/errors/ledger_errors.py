"""LedgerError — base exception class for all py-avm errors."""

from __future__ import annotations


class LedgerError(Exception):
    """Base error for all ledger output operations.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code string.
    """

    def __init__(self, message: str, *, code: str = "ledger-error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code
