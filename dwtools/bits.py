"""Bit manipulation and hashing helpers for 32 and 64 bit words."""

from __future__ import annotations

GOLDEN_RATIO_PRIME_64 = 11400714819323198485

_U32 = 0xFFFFFFFF
_U64 = 0xFFFFFFFFFFFFFFFF


def is_power_of_2(n: int) -> bool:
    return n != 0 and (n & (n - 1)) == 0


def fls(x: int) -> int:
    """Position of the most significant set bit of a 32-bit word, 0 if none."""
    return (x & _U32).bit_length()


def fls64(x: int) -> int:
    """Position of the most significant set bit of a 64-bit word, 0 if none."""
    return (x & _U64).bit_length()


def ilog2(n: int) -> int:
    """Floor of log2 of a positive 64-bit value."""
    if n < 1 or n > _U64:
        raise ValueError(f"ilog2 undefined for {n}")
    return n.bit_length() - 1


def roundup(x: int, y: int) -> int:
    """Round x up to a multiple of y."""
    return ((x + (y - 1)) // y) * y


def roundup_pow_of_two(n: int) -> int:
    """Smallest power of two not below n, within 64 bits."""
    if n < 1:
        raise ValueError(f"cannot round {n} up to a power of two")
    if n == 1:
        return 1
    if n - 1 > (1 << 63) - 1:
        raise ValueError(f"{n} rounds beyond 64 bits")
    return 1 << fls64(n - 1)


def hash_64(val: int, bits: int) -> int:
    """Multiplicative hash of a 64-bit value into the given number of bits."""
    if not 1 <= bits <= 64:
        raise ValueError(f"hash width {bits} must be between 1 and 64")
    return ((val & _U64) * GOLDEN_RATIO_PRIME_64 & _U64) >> (64 - bits)


def strstarts(s: str, prefix: str) -> bool:
    return s.startswith(prefix)