"""Base58 string form of raw output bytes.

Outputs render as plain Base58 (Bitcoin alphabet, no checksum) of their
serialized form. Leading zero bytes map to leading ``1`` characters so the
encoding is lossless.
"""

from __future__ import annotations

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B58_INDEX = {char: i for i, char in enumerate(_B58_ALPHABET)}


def base58_encode(raw: bytes) -> str:
    """Encode raw bytes to a Base58 string."""
    n = int.from_bytes(raw, "big")
    digits: list[str] = []
    while n > 0:
        n, remainder = divmod(n, 58)
        digits.append(_B58_ALPHABET[remainder])
    zeros = len(raw) - len(raw.lstrip(b"\x00"))
    return _B58_ALPHABET[0] * zeros + "".join(reversed(digits))


def base58_decode(text: str) -> bytes:
    """Decode a Base58 string to raw bytes.

    Raises:
        ValueError: If *text* contains a character outside the alphabet.
    """
    n = 0
    for pos, char in enumerate(text):
        digit = _B58_INDEX.get(char)
        if digit is None:
            msg = f"Invalid Base58 character {char!r} at position {pos}"
            raise ValueError(msg)
        n = n * 58 + digit
    body = n.to_bytes((n.bit_length() + 7) // 8, "big") if n > 0 else b""
    zeros = len(text) - len(text.lstrip(_B58_ALPHABET[0]))
    return b"\x00" * zeros + body
