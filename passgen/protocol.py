#!/usr/bin/env python3
"""Shared constants, record types and the wire codec used by **both** client & server.

Every datagram is a fixed-size record packed with :mod:`struct`.  There is no
framing, no length prefix and no versioning: a record is recognised purely by
its size, and text fields are NUL-terminated inside a fixed-width slot.

Request record  (``REQUEST_SIZE`` = 1025 bytes)::

    +------+-----------------------------------------+
    | type | length: ASCII digits, NUL, zero padding |
    | 1 B  | BUF_SIZE bytes                          |
    +------+-----------------------------------------+

Response record (``RESPONSE_SIZE`` = 33 bytes)::

    +-------------------------------------------------+
    | password: ASCII chars, NUL, zero padding        |
    | MAX_PASSWORD_LENGTH + 1 bytes                   |
    +-------------------------------------------------+
"""

from __future__ import annotations
import struct
from dataclasses import dataclass

# --- Network configuration -------------------------------------------------
BUF_SIZE: int = 1024          # Width of the request's length field (bytes)
DEFAULT_PORT: int = 8080      # Well-known port on which server listens
DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_SERVER: str = "localhost"

# --- Password constraints --------------------------------------------------
MIN_PASSWORD_LENGTH: int = 6
MAX_PASSWORD_LENGTH: int = 32
DEFAULT_LENGTH: str = "8"     # Used when the user types a bare type code

# --- Type codes ------------------------------------------------------------
NUMERIC_CODE     = "n"
ALPHA_CODE       = "a"
MIXED_CODE       = "m"
SECURE_CODE      = "s"
UNAMBIGUOUS_CODE = "u"

QUIT_CODE        = "q"        # Sentinel: ends the client loop, never sent
HELP_CODE        = "h"        # Shows the help menu, never sent

PASSWORD_CODES = NUMERIC_CODE + ALPHA_CODE + MIXED_CODE + SECURE_CODE + UNAMBIGUOUS_CODE

# --- Record layouts --------------------------------------------------------
_REQUEST = struct.Struct(f"!c{BUF_SIZE}s")
_RESPONSE = struct.Struct(f"!{MAX_PASSWORD_LENGTH + 1}s")

REQUEST_SIZE: int = _REQUEST.size
RESPONSE_SIZE: int = _RESPONSE.size


class ProtocolError(ValueError):
    """A datagram or record that does not fit the fixed wire layout."""


@dataclass(frozen=True, slots=True)
class PasswordRequest:
    """Client → server: which kind of password and how long.

    ``length`` stays a string on the wire; the server parses it after
    validation.
    """

    type: str
    length: str


@dataclass(frozen=True, slots=True)
class PasswordResponse:
    """Server → client: the generated password."""

    password: str


# --- Field helpers ---------------------------------------------------------

def _pack_text(text: str, width: int, field: str) -> bytes:
    try:
        raw = text.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ProtocolError(f"{field} must be ASCII") from exc
    if b"\0" in raw:
        raise ProtocolError(f"{field} must not contain NUL bytes")
    if len(raw) + 1 > width:                 # room for the terminator
        raise ProtocolError(
            f"{field} is {len(raw)} bytes, capacity is {width - 1}"
        )
    return raw                               # struct pads with zeros


def _unpack_text(raw: bytes, field: str) -> str:
    end = raw.find(b"\0")
    if end < 0:
        raise ProtocolError(f"{field} is not NUL-terminated")
    try:
        return raw[:end].decode("ascii")
    except UnicodeDecodeError as exc:
        raise ProtocolError(f"{field} is not ASCII") from exc


def _check_size(data: bytes, expected: int, record: str) -> None:
    if len(data) != expected:
        raise ProtocolError(
            f"{record} datagram is {len(data)} bytes, expected {expected}"
        )


# --- Request codec ---------------------------------------------------------

def encode_request(request: PasswordRequest) -> bytes:
    """Serialize a :class:`PasswordRequest` into a ``REQUEST_SIZE`` datagram."""
    if len(request.type) != 1:
        raise ProtocolError("type must be a single character")
    code = _pack_text(request.type, 2, "type")
    length = _pack_text(request.length, BUF_SIZE, "length")
    return _REQUEST.pack(code, length)


def decode_request(data: bytes) -> PasswordRequest:
    """Inverse of :func:`encode_request`.  Wrong-size input is rejected."""
    _check_size(data, REQUEST_SIZE, "request")
    code, length = _REQUEST.unpack(data)
    # Any byte is a legal type code here; unknown ones map to numeric later.
    return PasswordRequest(code.decode("latin-1"), _unpack_text(length, "length"))


# --- Response codec --------------------------------------------------------

def encode_response(response: PasswordResponse) -> bytes:
    """Serialize a :class:`PasswordResponse`; passwords over 32 chars are an error."""
    password = _pack_text(response.password, _RESPONSE.size, "password")
    return _RESPONSE.pack(password)


def decode_response(data: bytes) -> PasswordResponse:
    """Inverse of :func:`encode_response`."""
    _check_size(data, RESPONSE_SIZE, "response")
    (password,) = _RESPONSE.unpack(data)
    return PasswordResponse(_unpack_text(password, "password"))
