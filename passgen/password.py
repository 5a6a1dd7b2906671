#!/usr/bin/env python3
"""Password types, their charsets and the generator used by the server.

Each :class:`PasswordType` owns an immutable charset.  Characters are drawn
uniformly from it, except for ``MIXED`` which first flips a fair coin between
the digit set and the letter set and then draws from the chosen one.  That
two-stage draw weights each digit at 1/20 and each letter at 1/52, which is
not the same as a uniform draw over the 36-character union.
"""

from __future__ import annotations
import enum
import os
import random
import string
import threading
from typing import Optional

from .protocol import (
    ALPHA_CODE, MIXED_CODE, NUMERIC_CODE, SECURE_CODE, UNAMBIGUOUS_CODE,
)
from .util import LOG

__all__ = [
    "AMBIGUOUS_CHARS", "PasswordType", "generate_password", "get_rng",
    "type_from_code",
]

# --- Charsets ----------------------------------------------------------------
DIGITS = string.digits                   # 0-9
LOWER = string.ascii_lowercase           # a-z
SYMBOLS = "!@#$%^&*()"

SECURE_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits + SYMBOLS

# Glyphs that are easy to misread: 0 O o / 1 l I i / 2 Z z / 5 S s / 8 B
AMBIGUOUS_CHARS = frozenset("0Oo" "1lIi" "2Zz" "5Ss" "8B")

UNAMBIGUOUS_CHARS = "".join(c for c in SECURE_CHARS if c not in AMBIGUOUS_CHARS)


class PasswordType(enum.Enum):
    """The five kinds of password; the value is the one-letter wire code."""

    NUMERIC = NUMERIC_CODE
    ALPHA = ALPHA_CODE
    MIXED = MIXED_CODE
    SECURE = SECURE_CODE
    UNAMBIGUOUS = UNAMBIGUOUS_CODE

    @property
    def charset(self) -> str:
        """Every character this type can produce."""
        return _CHARSETS[self]


_CHARSETS = {
    PasswordType.NUMERIC: DIGITS,
    PasswordType.ALPHA: LOWER,
    PasswordType.MIXED: DIGITS + LOWER,
    PasswordType.SECURE: SECURE_CHARS,
    PasswordType.UNAMBIGUOUS: UNAMBIGUOUS_CHARS,
}


def type_from_code(code: str) -> PasswordType:
    """Map a wire code to its type.  Unknown codes fall back to NUMERIC.

    The fallback keeps compatibility with older servers; the client never
    sends an unknown code, so hitting it usually means a foreign sender.
    """
    try:
        return PasswordType(code.lower())
    except ValueError:
        LOG.warning("Unknown password type %r, defaulting to numeric", code)
        return PasswordType.NUMERIC


# --- Process-wide random source ----------------------------------------------
_rng: Optional[random.Random] = None
_rng_lock = threading.Lock()


def get_rng() -> random.Random:
    """Return the shared generator, seeding it from the OS on first use."""
    global _rng
    if _rng is None:
        with _rng_lock:
            if _rng is None:
                _rng = random.Random(int.from_bytes(os.urandom(16), "big"))
    return _rng


# --- Generation ----------------------------------------------------------------

def _generate_mixed(length: int, rng: random.Random) -> str:
    return "".join(
        rng.choice(LOWER) if rng.randrange(2) else rng.choice(DIGITS)
        for _ in range(length)
    )


def generate_password(
    ptype: PasswordType, length: int, rng: Optional[random.Random] = None
) -> str:
    """Return ``length`` random characters drawn from ``ptype``'s charset.

    No bounds checking happens here: callers validate ``length`` against the
    protocol limits first.
    """
    rng = rng or get_rng()
    if ptype is PasswordType.MIXED:
        return _generate_mixed(length, rng)
    charset = ptype.charset
    return "".join(rng.choice(charset) for _ in range(length))
