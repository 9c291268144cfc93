"""Unsigned LEB128 numbers and simple DWARF location expressions."""

from __future__ import annotations

import logging

UINT64_MAX = 0xFFFFFFFFFFFFFFFF

DW_OP_constu = 0x10
DW_OP_plus_uconst = 0x23

_MAX_BYTES = 10

log = logging.getLogger(__name__)


def decode_uleb128(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode an unsigned LEB128 number at ``offset``.

    Returns the value and the offset just past it.  At most ten bytes are
    read; if all ten carry the continuation bit the value is UINT64_MAX.
    """
    if offset < 0:
        raise ValueError(f"negative offset {offset}")
    value = 0
    pos = offset
    for nth in range(_MAX_BYTES):
        if pos >= len(data):
            raise ValueError("truncated ULEB128 number")
        byte = data[pos]
        pos += 1
        value = (value | ((byte & 0x7F) << (nth * 7))) & UINT64_MAX
        if not byte & 0x80:
            return value, pos
    return UINT64_MAX, pos


def encode_uleb128(value: int) -> bytes:
    """Encode a 64-bit unsigned value as LEB128."""
    if not 0 <= value <= UINT64_MAX:
        raise ValueError(f"value {value} does not fit in 64 unsigned bits")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def dwarf_expr(expr: bytes) -> int:
    """Evaluate an offset expression of the DW_OP_plus_uconst/DW_OP_constu form.

    Other operations are not handled; they are logged and give UINT64_MAX.
    """
    if not expr:
        raise ValueError("empty DWARF expression")
    if expr[0] in (DW_OP_plus_uconst, DW_OP_constu):
        value, _ = decode_uleb128(expr, 1)
        return value
    log.warning("unhandled %#x DW_OP_ operation", expr[0])
    return UINT64_MAX