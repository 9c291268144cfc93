"""Hash tables that map DWARF DIE offsets to the tags loaded from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from dwtools.bits import hash_64

DEFAULT_HASHTABLE_BITS = 12
DEFAULT_MAX_HASHTABLE_BITS = 21
HASHTABLE_BITS_LIMIT = 31

_SENTINEL_ID = 0xFFFFFFFFFFFFFFFF


@dataclass(frozen=True)
class DwarfOffRef:
    """A reference to a DIE by offset.

    ``from_types`` marks references that point into the type unit
    (DW_FORM_ref_sig8) rather than into the current unit.
    """

    off: int = 0
    from_types: bool = False


@dataclass
class DwarfTag:
    """Loader-side bookkeeping for one DIE."""

    id: int
    type: DwarfOffRef = field(default_factory=DwarfOffRef)
    abstract_origin: DwarfOffRef = field(default_factory=DwarfOffRef)
    spec: DwarfOffRef | None = None
    small_id: int = 0
    decl_line: int = 0
    decl_file: str | None = None
    tag: Any = None


class HashTable:
    """Fixed number of buckets indexed by a multiplicative hash of the DIE offset."""

    def __init__(self, bits: int = DEFAULT_HASHTABLE_BITS) -> None:
        if not 1 <= bits <= HASHTABLE_BITS_LIMIT:
            raise ValueError(
                f"hash table bits {bits} must be between 1 and {HASHTABLE_BITS_LIMIT}"
            )
        self.bits = bits
        self._buckets: list[list[DwarfTag]] = [[] for _ in range(1 << bits)]

    def bucket(self, id: int) -> int:
        """Index of the bucket holding the given DIE offset."""
        return hash_64(id, self.bits)

    def add(self, dtag: DwarfTag) -> None:
        """Insert a tag; newer entries shadow older ones with the same id."""
        self._buckets[self.bucket(dtag.id)].insert(0, dtag)

    def find(self, id: int) -> DwarfTag | None:
        """The most recently added tag with this id; offset 0 never matches."""
        if id == 0:
            return None
        return next((d for d in self._buckets[self.bucket(id)] if d.id == id), None)

    def __len__(self) -> int:
        return sum(len(b) for b in self._buckets)

    def __iter__(self) -> Iterator[DwarfTag]:
        for bucket in self._buckets:
            yield from bucket


class DwarfCu:
    """Per compilation unit lookup of tags and types by DIE offset."""

    def __init__(
        self, bits: int = DEFAULT_HASHTABLE_BITS, type_unit: "DwarfCu | None" = None
    ) -> None:
        self.hash_tags = HashTable(bits)
        self.hash_types = HashTable(bits)
        self.type_unit = type_unit
        # A sentinel avoids checking for "nothing looked up yet".
        self.last_type_lookup = DwarfTag(id=_SENTINEL_ID)

    def hash(self, dtag: DwarfTag, is_type: bool) -> None:
        """File a tag under the types table or the tags table."""
        (self.hash_types if is_type else self.hash_tags).add(dtag)

    def find_tag_by_ref(self, ref: DwarfOffRef) -> DwarfTag | None:
        """Look up a non-type tag; type-unit references never resolve here."""
        if ref.from_types:
            return None
        return self.hash_tags.find(ref.off)

    def find_type_by_ref(self, ref: DwarfOffRef) -> DwarfTag | None:
        """Look up a type, following type-unit references and caching the last hit."""
        dcu: DwarfCu | None = self
        if ref.from_types:
            dcu = self.type_unit
            if dcu is None:
                return None
        if dcu.last_type_lookup.id == ref.off:
            return dcu.last_type_lookup
        dtag = dcu.hash_types.find(ref.off)
        if dtag is not None:
            dcu.last_type_lookup = dtag
        return dtag


def validate_hashtable_bits(
    hashtable_bits: int = 0, max_hashtable_bits: int = 0
) -> tuple[int, int]:
    """Resolve configured hash table sizes; 0 means use the default.

    Returns (bits, max_bits).  Raises ValueError when a value is too large.
    """
    bits = DEFAULT_HASHTABLE_BITS
    max_bits = DEFAULT_MAX_HASHTABLE_BITS
    if max_hashtable_bits:
        if max_hashtable_bits > HASHTABLE_BITS_LIMIT:
            raise ValueError(
                f"max hash table bits {max_hashtable_bits} exceeds {HASHTABLE_BITS_LIMIT}"
            )
        max_bits = max_hashtable_bits
    if hashtable_bits:
        if hashtable_bits > max_bits:
            raise ValueError(
                f"hash table bits {hashtable_bits} exceeds maximum {max_bits}"
            )
        bits = hashtable_bits
    elif bits > max_bits:
        raise ValueError(f"default hash table bits {bits} exceed maximum {max_bits}")
    return bits, max_bits