# passgen/validation.py
"""
Input checks shared by the client (before sending) and the server
(before generating).

All three functions are pure: no I/O, no state.
"""

from __future__ import annotations
import string

# Only ASCII digits count; str.isdigit() would also accept "²" or "٣".
_DIGITS = frozenset(string.digits)


def control_type(allowed_types: str, type_: str) -> bool:
    """True iff ``type_`` (lower-cased) is one of ``allowed_types``.

    ``allowed_types`` is taken as-is, so callers pass it in lower case.
    """
    if len(type_) != 1:
        return False
    return type_.lower() in allowed_types


def control_length(length: str, min_length: int, max_length: int) -> bool:
    """True iff ``length`` is a plain decimal string within ``[min, max]``.

    Whitespace, signs and the empty string are rejected.  There is no cap on
    the number of digits here; callers bound the raw input first.
    """
    if not length or not _DIGITS.issuperset(length):
        return False
    return min_length <= int(length) <= max_length


def keep_generating(type_: str, type_for_ending: str) -> bool:
    """False once the user typed the sentinel code (case-insensitive)."""
    return type_.lower() != type_for_ending.lower()
