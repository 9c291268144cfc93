# dwtools

Pure-Python building blocks for working with DWARF and CTF debugging
information. The package has no runtime dependencies.

## Modules

### `dwtools.ctf`

The CTF container format.

- `CtfHeader` is a dataclass for the section header. `CtfHeader.pack()`
  serialises it in its byte order. `CtfHeader.unpack(data)` parses it and
  detects the byte order from the magic number. It raises `ValueError` on a
  bad magic or on short input. The `compressed` property reports the
  compression flag.
- The enumerations are `TypeKind`, `IntAttr` (a flag set) and
  `FloatEncoding`.
- Helpers read and build the packed fields:
  - `ref_encode`, `ref_offset`, `ref_table_id` for string references.
  - `info_encode`, `info_kind`, `info_vlen`, `info_is_root` for type info
    words.
  - `encode_encoding`, `encoding_attrs`, `encoding_offset`, `encoding_bits`
    for integer and float encodings.

  The encoders raise `ValueError` when a field is out of range.
- `pack_type` / `unpack_type` read and write type records.
  `pack_member` / `unpack_member` do the same for struct and union members.
  The short or full record form is chosen from the size. The unpack
  functions return the decoded fields together with the number of bytes
  consumed.

### `dwtools.bits`

Word-sized bit arithmetic:

- `is_power_of_2`
- `fls` and `fls64`
- `ilog2`
- `roundup`
- `roundup_pow_of_two`
- the multiplicative hash `hash_64(val, bits)`
- `strstarts`

`ilog2` and `roundup_pow_of_two` raise `ValueError` outside their domain.

### `dwtools.strlist`

`StrList` is a set of unique strings that iterates in insertion order.

- `add(entry, priv=None)` returns the new `StrNode`. Adding a string that is
  already present raises `DuplicateEntryError`.
- `has_entry` and `in` test membership.
- `remove(entry)` deletes an entry.
- `priv(entry)` returns the data attached to an entry.
- `load(filename)` adds one entry per line of a text file. It stops with
  `DuplicateEntryError` at the first duplicate.

### `dwtools.leb128`

- `encode_uleb128(value)` encodes a 64-bit unsigned value.
- `decode_uleb128(data, offset=0)` returns the value and the offset just past
  it. It reads at most ten bytes. If all ten bytes have the continuation bit
  set, the value is `UINT64_MAX`.
- `dwarf_expr(expr)` evaluates `DW_OP_plus_uconst` and `DW_OP_constu` offset
  expressions. Any other operation is logged as a warning and yields
  `UINT64_MAX`.

### `dwtools.hashtags`

Lookup of loader tags by DIE offset.

- `DwarfOffRef` is a reference to a DIE. It can be marked as pointing into
  the type unit.
- `DwarfTag` holds the bookkeeping for one DIE.
- `HashTable` buckets tags by `hash_64` of their offset. The newest entry
  wins, and offset 0 never matches.
- `DwarfCu` keeps separate tables for tags and for types.
  - `find_tag_by_ref` looks up a tag. Type-unit references never resolve
    here.
  - `find_type_by_ref` looks up a type. It follows type-unit references to
    the `type_unit` and caches the last hit.
- `validate_hashtable_bits(hashtable_bits, max_hashtable_bits)` resolves the
  configured sizes, where 0 means the default. It returns `(bits, max_bits)`
  and raises `ValueError` when a size is too large.

### `dwtools.layout`

- `MemberLayout` describes the placement of one struct or union member. Build
  it with `MemberLayout.from_byte_offset(...)` (data member location plus the
  raw bit offset) or with `MemberLayout.from_bit_offset(...)` (data bit
  offset).
- `cache_byte_size(member, type_bit_size, little_endian=True,
  fixup_silly_bitfields=False)` computes the member's byte and bit sizes in
  place. It normalises bitfield offsets, including the little-endian
  conversion and alignment to the storage unit, and returns the member.
- `sort_members_by_offset(members)` returns a new list ordered by byte
  offset. Members with equal offsets keep their original order.

## Example

```python
from dwtools.bits import roundup_pow_of_two
from dwtools.layout import MemberLayout, cache_byte_size
from dwtools.leb128 import decode_uleb128, encode_uleb128
from dwtools.strlist import StrList

names = StrList(["foo", "bar"])
assert "bar" in names
assert list(names) == ["foo", "bar"]

encoded = encode_uleb128(624485)
assert decode_uleb128(encoded, 0)[0] == 624485

assert roundup_pow_of_two(100) == 128

# an int bitfield of 5 bits at the top of its storage (DW_AT_bit_offset 0)
member = cache_byte_size(
    MemberLayout.from_byte_offset(0, bitfield_size=5, bitfield_offset=0), 32
)
assert (member.byte_offset, member.bitfield_offset) == (0, 27)
```

## What this package does not do

- It does not open ELF files or read `.debug_info` or CTF sections from
  binaries. Callers supply the bytes and values themselves.
- It has no command-line tool.
- It has no tables of per-architecture calling conventions, and it does not
  classify variable locations.

## Running the tests

```
pip install -e .[test]
pytest
```