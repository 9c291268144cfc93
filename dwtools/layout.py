"""Byte and bit placement of struct and union members, bitfields included."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass
class MemberLayout:
    """Placement of one data member inside its enclosing aggregate.

    ``bit_offset`` counts from the start of the aggregate.  ``bitfield_offset``
    is the offset inside the storage unit starting at ``byte_offset``.  When
    ``has_bit_offset`` is false, ``bitfield_offset`` holds the raw
    DW_AT_bit_offset value (counted from the most significant bit) until the
    layout is computed.
    """

    name: str | None = None
    byte_offset: int = 0
    bit_offset: int = 0
    bitfield_offset: int = 0
    bitfield_size: int = 0
    byte_size: int = 0
    bit_size: int = 0
    has_bit_offset: bool = False
    is_static: bool = False

    @classmethod
    def from_byte_offset(
        cls,
        byte_offset: int,
        *,
        name: str | None = None,
        bitfield_size: int = 0,
        bitfield_offset: int = 0,
        byte_size: int = 0,
    ) -> "MemberLayout":
        """A member located by DW_AT_data_member_location (and DW_AT_bit_offset)."""
        return cls(
            name=name,
            byte_offset=byte_offset,
            bit_offset=byte_offset * 8,
            bitfield_offset=bitfield_offset,
            bitfield_size=bitfield_size,
            byte_size=byte_size,
        )

    @classmethod
    def from_bit_offset(
        cls,
        bit_offset: int,
        *,
        name: str | None = None,
        bitfield_size: int = 0,
        byte_size: int = 0,
    ) -> "MemberLayout":
        """A member located by DW_AT_data_bit_offset."""
        return cls(
            name=name,
            bit_offset=bit_offset,
            bitfield_size=bitfield_size,
            byte_size=byte_size,
            has_bit_offset=True,
        )


def cache_byte_size(
    member: MemberLayout,
    type_bit_size: int,
    little_endian: bool = True,
    fixup_silly_bitfields: bool = False,
) -> MemberLayout:
    """Work out the size and normalised offsets of a member, in place.

    ``type_bit_size`` is the size in bits of the member's type, with typedefs
    and modifiers stripped.  Static members are left as they are.  Returns
    the member for convenience.
    """
    if type_bit_size < 0:
        raise ValueError(f"negative type size {type_bit_size}")
    if member.is_static:
        return member

    type_byte_size = (type_bit_size + 7) // 8

    if member.bitfield_size == 0:
        member.byte_size = type_byte_size
        member.bit_size = member.byte_size * 8
        return member

    if member.byte_size == 0:
        member.byte_size = type_byte_size
    member.bit_size = member.byte_size * 8

    # The size may still be unknown; leave the bitfield at the storage start.
    if member.byte_size == 0:
        member.bitfield_offset = 0
        return member

    if not member.has_bit_offset:
        # DW_AT_bit_offset counts from the most significant bit of the
        # storage unit; on little-endian targets make it count from the
        # least significant bit so that it extends the byte offset.
        if little_endian:
            member.bitfield_offset = (
                member.bit_size - member.bitfield_offset - member.bitfield_size
            )
        member.bit_offset = member.byte_offset * 8 + member.bitfield_offset
    else:
        member.byte_offset = member.bit_offset // 8
        member.bitfield_offset = member.bit_offset - member.byte_offset * 8

    if member.bitfield_offset < 0:
        member.bitfield_offset += member.bit_size
        member.byte_offset -= member.byte_size
        member.bit_offset = member.byte_offset * 8 + member.bitfield_offset

    # Align on the natural boundary of the underlying storage type.
    member.bitfield_offset += (member.byte_offset % member.byte_size) * 8
    member.byte_offset = member.bit_offset // member.bit_size * member.bit_size // 8
    if member.bitfield_offset >= member.bit_size:
        member.bitfield_offset -= member.bit_size
        member.byte_offset += member.byte_size

    if fixup_silly_bitfields and member.byte_size == 8 * member.bitfield_size:
        member.bitfield_size = 0
        member.bitfield_offset = 0

    return member


def sort_members_by_offset(members: Iterable[MemberLayout]) -> list[MemberLayout]:
    """Members ordered by byte offset; equal offsets keep their relative order.

    Used for languages whose compilers reorder fields, where declaration
    order does not follow memory order.
    """
    return sorted(members, key=lambda m: m.byte_offset)