"""Helpers for CTF encodings, bit arithmetic, string lists, LEB128, DIE hashing and member layout."""

__version__ = "0.1.0"
__all__ = ["bits", "ctf", "hashtags", "layout", "leb128", "strlist"]