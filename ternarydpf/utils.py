"""Helpers for 128-bit blocks and for the base-k digits of tree indices."""

from __future__ import annotations

BLOCK_SIZE = 16
BLOCK_MASK = (1 << 128) - 1


def flip_lsb(value: int) -> int:
    """Return ``value`` with its least significant bit flipped."""
    return value ^ 1


def get_lsb(value: int) -> int:
    """Return the least significant bit of ``value``."""
    return value & 1


def get_digit(x: int, base: int, size: int, t: int) -> int:
    """Return digit ``t`` of ``x`` written with ``size`` base-``base`` digits.

    Digits are numbered from the least significant one.
    """
    if base < 2:
        raise ValueError(f"base must be at least 2, got {base}")
    if not 0 <= t < size:
        raise IndexError(f"digit {t} is outside a {size}-digit number")
    return (x // base**t) % base


def get_trit(x: int, size: int, t: int) -> int:
    """Return ternary digit ``t`` of ``x`` written with ``size`` trits."""
    return get_digit(x, 3, size, t)


def block_to_bytes(value: int) -> bytes:
    """Encode a 128-bit block as 16 little-endian bytes."""
    if not 0 <= value <= BLOCK_MASK:
        raise ValueError(f"block value out of 128-bit range: {value}")
    return value.to_bytes(BLOCK_SIZE, "little")


def block_from_bytes(data: bytes) -> int:
    """Decode 16 little-endian bytes into a 128-bit block."""
    if len(data) != BLOCK_SIZE:
        raise ValueError(f"a block is {BLOCK_SIZE} bytes, got {len(data)}")
    return int.from_bytes(data, "little")


def block_hex(value: int) -> str:
    """Return the hex dump of a block in its byte order."""
    return block_to_bytes(value).hex()