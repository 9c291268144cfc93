"""CTF (Compact C Type Format) on-disk structures and bit-field helpers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum, IntFlag

CTF_MAGIC = 0xCFF1
CTF_MAGIC_SWAP = 0xF1CF
CTF_VERSION = 2
CTF_FLAGS_COMPR = 0x01

STR_TABLE_0 = 0
STR_TABLE_1 = 1

TYPE_KIND_MAX = 31
FP_MAX = 12

SHORT_MEMBER_LIMIT = 8192

_LSIZE_SENTINEL = 0xFFFF
_U32 = 0xFFFFFFFF
_U64 = 0xFFFFFFFFFFFFFFFF

_HEADER_FIELDS = "HBB8I"
HEADER_SIZE = struct.calcsize("<" + _HEADER_FIELDS)

_SHORT_TYPE = struct.Struct("<IHH")
_FULL_TYPE = struct.Struct("<IHHII")
_SHORT_MEMBER = struct.Struct("<IHH")
_FULL_MEMBER = struct.Struct("<IHHII")


class TypeKind(IntEnum):
    """Kinds of type records."""

    UNKN = 0
    INT = 1
    FLT = 2
    PTR = 3
    ARR = 4
    FUNC = 5
    STR = 6
    UNION = 7
    ENUM = 8
    FWD = 9
    TYPDEF = 10
    VOLATILE = 11
    CONST = 12
    RESTRICT = 13


class IntAttr(IntFlag):
    """Integer type attributes."""

    SIGNED = 0x1
    CHAR = 0x2
    BOOL = 0x4
    VARARGS = 0x8


class FloatEncoding(IntEnum):
    """Values of the floating point attribute field."""

    SINGLE = 1
    DOUBLE = 2
    CMPLX = 3
    CMPLX_DBL = 4
    CMPLX_LDBL = 5
    LDBL = 6
    INTVL = 7
    INTVL_DBL = 8
    INTVL_LDBL = 9
    IMGRY = 10
    IMGRY_DBL = 11
    IMGRY_LDBL = 12


def _pack(layout: struct.Struct, *values: int) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


@dataclass
class CtfHeader:
    """The header that starts every CTF section."""

    magic: int = CTF_MAGIC
    version: int = CTF_VERSION
    flags: int = 0
    parent_label: int = 0
    parent_name: int = 0
    label_off: int = 0
    object_off: int = 0
    func_off: int = 0
    type_off: int = 0
    str_off: int = 0
    str_len: int = 0
    big_endian: bool = False

    @property
    def compressed(self) -> bool:
        return bool(self.flags & CTF_FLAGS_COMPR)

    def pack(self) -> bytes:
        """Serialise the header in its byte order."""
        fmt = (">" if self.big_endian else "<") + _HEADER_FIELDS
        try:
            return struct.pack(
                fmt,
                self.magic,
                self.version,
                self.flags,
                self.parent_label,
                self.parent_name,
                self.label_off,
                self.object_off,
                self.func_off,
                self.type_off,
                self.str_off,
                self.str_len,
            )
        except struct.error as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def unpack(cls, data: bytes) -> "CtfHeader":
        """Parse a header, detecting the byte order from the magic."""
        if len(data) < HEADER_SIZE:
            raise ValueError(f"CTF header needs {HEADER_SIZE} bytes, got {len(data)}")
        (magic,) = struct.unpack_from("<H", data)
        if magic == CTF_MAGIC:
            big_endian = False
        elif magic == CTF_MAGIC_SWAP:
            big_endian = True
        else:
            raise ValueError(f"bad CTF magic {magic:#x}")
        fmt = (">" if big_endian else "<") + _HEADER_FIELDS
        return cls(*struct.unpack_from(fmt, data), big_endian=big_endian)


def ref_offset(ref: int) -> int:
    """Offset part of a string reference."""
    return ref & 0x7FFFFFFF


def ref_table_id(ref: int) -> int:
    """String table selector of a string reference."""
    return (ref >> 31) & 0x1


def ref_encode(table: int, offset: int) -> int:
    """Build a string reference from a table id and an offset."""
    if table not in (STR_TABLE_0, STR_TABLE_1):
        raise ValueError(f"invalid string table id {table}")
    if not 0 <= offset <= 0x7FFFFFFF:
        raise ValueError(f"string offset {offset} out of range")
    return (table << 31) | offset


def info_kind(info: int) -> int:
    return (info >> 11) & 0x1F


def info_vlen(info: int) -> int:
    return info & 0x3FF


def info_is_root(info: int) -> bool:
    return (info & 0x400) != 0


def info_encode(kind: int, vlen: int, is_root: bool) -> int:
    """Pack kind, variable length and root flag into a type info word."""
    if not 0 <= kind <= TYPE_KIND_MAX:
        raise ValueError(f"type kind {kind} out of range")
    if not 0 <= vlen <= 0x3FF:
        raise ValueError(f"vlen {vlen} out of range")
    return (0x400 if is_root else 0) | (kind << 11) | vlen


def encoding_attrs(val: int) -> int:
    return val >> 24


def encoding_offset(val: int) -> int:
    return (val >> 16) & 0xFF


def encoding_bits(val: int) -> int:
    return val & 0xFFFF


def encode_encoding(attrs: int, offset: int, bits: int) -> int:
    """Pack the attributes, bit offset and width of an int or float type."""
    if not 0 <= attrs <= 0xFF:
        raise ValueError(f"attributes {attrs} out of range")
    if not 0 <= offset <= 0xFF:
        raise ValueError(f"offset {offset} out of range")
    if not 0 <= bits <= 0xFFFF:
        raise ValueError(f"bits {bits} out of range")
    return (attrs << 24) | (offset << 16) | bits


def pack_type(name: int, info: int, size: int) -> bytes:
    """Encode a type record, choosing the short or the full form by size.

    ``size`` doubles as the referenced type id for kinds that use one.
    """
    if not 0 <= size <= _U64:
        raise ValueError(f"type size {size} out of range")
    if size < _LSIZE_SENTINEL:
        return _pack(_SHORT_TYPE, name, info, size)
    return _pack(_FULL_TYPE, name, info, _LSIZE_SENTINEL, size >> 32, size & _U32)


def unpack_type(data: bytes) -> tuple[int, int, int, int]:
    """Decode a type record; returns (name, info, size, bytes consumed)."""
    if len(data) < _SHORT_TYPE.size:
        raise ValueError("truncated CTF type record")
    name, info, size = _SHORT_TYPE.unpack_from(data)
    if size != _LSIZE_SENTINEL:
        return name, info, size, _SHORT_TYPE.size
    if len(data) < _FULL_TYPE.size:
        raise ValueError("truncated CTF full type record")
    _, _, _, high, low = _FULL_TYPE.unpack_from(data)
    return name, info, (high << 32) | low, _FULL_TYPE.size


def pack_member(name: int, type_id: int, offset: int, struct_size: int) -> bytes:
    """Encode a struct/union member, short form for small aggregates."""
    if struct_size < SHORT_MEMBER_LIMIT:
        return _pack(_SHORT_MEMBER, name, type_id, offset)
    if not 0 <= offset <= _U64:
        raise ValueError(f"member offset {offset} out of range")
    return _pack(_FULL_MEMBER, name, type_id, 0, offset >> 32, offset & _U32)


def unpack_member(data: bytes, struct_size: int) -> tuple[int, int, int, int]:
    """Decode a member; returns (name, type id, offset, bytes consumed)."""
    if struct_size < SHORT_MEMBER_LIMIT:
        if len(data) < _SHORT_MEMBER.size:
            raise ValueError("truncated CTF member record")
        name, type_id, offset = _SHORT_MEMBER.unpack_from(data)
        return name, type_id, offset, _SHORT_MEMBER.size
    if len(data) < _FULL_MEMBER.size:
        raise ValueError("truncated CTF full member record")
    name, type_id, _, high, low = _FULL_MEMBER.unpack_from(data)
    return name, type_id, (high << 32) | low, _FULL_MEMBER.size