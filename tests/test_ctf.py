import struct

import pytest

from dwtools.ctf import (
    CTF_FLAGS_COMPR,
    CTF_MAGIC,
    CTF_VERSION,
    SHORT_MEMBER_LIMIT,
    CtfHeader,
    FloatEncoding,
    IntAttr,
    TypeKind,
    encode_encoding,
    encoding_attrs,
    encoding_bits,
    encoding_offset,
    info_encode,
    info_is_root,
    info_kind,
    info_vlen,
    pack_member,
    pack_type,
    ref_encode,
    ref_offset,
    ref_table_id,
    unpack_member,
    unpack_type,
)


def _sample_header(big_endian=False):
    return CtfHeader(
        flags=CTF_FLAGS_COMPR,
        parent_label=11,
        parent_name=22,
        label_off=100,
        object_off=200,
        func_off=300,
        type_off=400,
        str_off=500,
        str_len=600,
        big_endian=big_endian,
    )


@pytest.mark.parametrize("big_endian", [False, True])
def test_header_round_trip(big_endian):
    header = _sample_header(big_endian)
    assert CtfHeader.unpack(header.pack()) == header


def test_header_defaults():
    header = CtfHeader()
    assert header.magic == CTF_MAGIC
    assert header.version == CTF_VERSION
    assert header.compressed is False
    assert _sample_header().compressed is True


def test_header_magic_bytes_little():
    assert CtfHeader().pack()[:2] == b"\xf1\xcf"


def test_header_magic_bytes_big():
    assert CtfHeader(big_endian=True).pack()[:2] == b"\xcf\xf1"


def test_header_bad_magic():
    data = bytearray(CtfHeader().pack())
    data[0] ^= 0xFF
    with pytest.raises(ValueError):
        CtfHeader.unpack(bytes(data))


def test_header_truncated():
    with pytest.raises(ValueError):
        CtfHeader.unpack(CtfHeader().pack()[:-1])


def test_header_field_out_of_range():
    with pytest.raises(ValueError):
        CtfHeader(str_len=1 << 32).pack()


@pytest.mark.parametrize("table", [0, 1])
@pytest.mark.parametrize("offset", [0, 1234, 0x7FFFFFFF])
def test_ref_round_trip(table, offset):
    ref = ref_encode(table, offset)
    assert ref_offset(ref) == offset
    assert ref_table_id(ref) == table


def test_ref_encode_rejects_bad_table():
    with pytest.raises(ValueError):
        ref_encode(2, 0)


@pytest.mark.parametrize("kind", list(TypeKind))
@pytest.mark.parametrize("root", [False, True])
def test_info_round_trip(kind, root):
    info = info_encode(kind, 17, root)
    assert info_kind(info) == kind
    assert info_vlen(info) == 17
    assert info_is_root(info) is root


def test_info_encode_rejects_large_vlen():
    with pytest.raises(ValueError):
        info_encode(TypeKind.STR, 0x400, False)


def test_int_encoding_round_trip():
    attrs = IntAttr.SIGNED | IntAttr.CHAR
    val = encode_encoding(attrs, 3, 8)
    assert encoding_attrs(val) == attrs
    assert encoding_offset(val) == 3
    assert encoding_bits(val) == 8


def test_float_encoding_round_trip():
    val = encode_encoding(FloatEncoding.IMGRY_LDBL, 0, 128)
    assert FloatEncoding(encoding_attrs(val)) is FloatEncoding.IMGRY_LDBL
    assert encoding_bits(val) == 128


def test_pack_type_short_form():
    data = pack_type(5, info_encode(TypeKind.INT, 0, True), 4)
    assert len(data) == struct.calcsize("<IHH")
    assert unpack_type(data) == (5, info_encode(TypeKind.INT, 0, True), 4, len(data))


@pytest.mark.parametrize("size", [0xFFFF, 0x10000, 1 << 40])
def test_pack_type_full_form(size):
    data = pack_type(9, info_encode(TypeKind.STR, 2, True), size)
    assert len(data) == struct.calcsize("<IHHII")
    name, info, got_size, consumed = unpack_type(data)
    assert (name, got_size, consumed) == (9, size, len(data))
    assert info_kind(info) == TypeKind.STR


def test_unpack_type_truncated_full():
    data = pack_type(1, 0, 0x10000)
    with pytest.raises(ValueError):
        unpack_type(data[:-2])


def test_member_short_round_trip():
    data = pack_member(7, 3, 64, SHORT_MEMBER_LIMIT - 1)
    assert unpack_member(data, SHORT_MEMBER_LIMIT - 1) == (7, 3, 64, len(data))
    assert len(data) == struct.calcsize("<IHH")


def test_member_full_round_trip():
    offset = 1 << 33
    data = pack_member(7, 3, offset, SHORT_MEMBER_LIMIT)
    assert unpack_member(data, SHORT_MEMBER_LIMIT) == (7, 3, offset, len(data))
    assert len(data) == struct.calcsize("<IHHII")


def test_member_short_offset_overflow():
    with pytest.raises(ValueError):
        pack_member(1, 1, 0x10000, 16)