#!/usr/bin/env python3
"""Interactive UDP password client.

* Menu prompt: "<type> [length]", e.g. ``s 16``, ``s16`` or just ``m`` (length 8)
* ``h`` prints the help menu, ``q`` quits
* Bad input is reported in red and the prompt is shown again
* Each valid request is one datagram out and one datagram back

Usage (after installing package locally):

    passgen-client passwdgen.example.org --port 8080
"""

from __future__ import annotations

import argparse
import logging
import socket
import sys
from typing import Callable, Optional, Tuple

from colorama import Fore

from .protocol import (
    BUF_SIZE, DEFAULT_LENGTH, DEFAULT_PORT, DEFAULT_SERVER, HELP_CODE,
    MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH, PASSWORD_CODES, QUIT_CODE,
    RESPONSE_SIZE, PasswordRequest, ProtocolError, decode_response,
    encode_request,
)
from .util import LOG, LOG_FILE, configure_logging, print_color
from .validation import control_length, control_type, keep_generating

MENU_TEXT = (
    f"Insert the type of password and its length "
    f"(between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH}):\n"
    "  n: numeric password (only digits)\n"
    "  a: alphabetic password (only lowercase letters)\n"
    "  m: mixed password (lowercase letters and digits)\n"
    "  s: secure password (uppercase letters, lowercase letters, digits, and symbols)\n"
    "  u: unambiguous secure password (no similar-looking characters)\n"
    "  h: help menu\n"
    "  q: quit application\n"
    "? "
)

HELP_TEXT = (
    "\nPassword Generator Help Menu\n"
    "Commands:\n"
    " h        : show this help menu\n"
    " n LENGTH : generate numeric password (digits only)\n"
    " a LENGTH : generate alphabetic password (lowercase letters)\n"
    " m LENGTH : generate mixed password (lowercase letters and numbers)\n"
    " s LENGTH : generate secure password (uppercase, lowercase, numbers, symbols)\n"
    " u LENGTH : generate unambiguous secure password (no similar-looking characters)\n"
    " q        : quit application\n\n"
    f" LENGTH must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH} characters\n\n"
    " Ambiguous characters excluded in 'u' option:\n"
    " 0 O o (zero and letters O)\n"
    " 1 l I i (one and letters l, I)\n"
    " 2 Z z (two and letter Z)\n"
    " 5 S s (five and letter S)\n"
    " 8 B (eight and letter B)\n"
    f"\nIf the length is absent, a default value is used: {DEFAULT_LENGTH}\n"
)


class InputError(ValueError):
    """User input that cannot become a request; the client reprompts."""


def parse_input(line: str) -> Optional[PasswordRequest]:
    """Turn one menu line into a request.

    Returns ``None`` for the help command.  The quit code comes back as a
    request so the caller can test it with :func:`keep_generating`.  Raises
    :class:`InputError` with a user-facing message otherwise.
    """
    # The type is the first non-blank character, so "s16" reads as "s 16".
    line = line.lstrip()
    if not line:
        raise InputError("Invalid input. Please enter a valid type and length.")
    type_, rest = line[0], line[1:].split()
    if len(rest) > 1:
        raise InputError("Invalid input. Please enter a valid type and length.")

    if type_.lower() == HELP_CODE:
        return None

    if not control_type(PASSWORD_CODES + QUIT_CODE, type_):
        raise InputError("Bad request: the type inserted is not valid.")
    if not keep_generating(type_, QUIT_CODE):
        return PasswordRequest(type_, DEFAULT_LENGTH)

    length = rest[0] if rest else DEFAULT_LENGTH
    # Cap before parsing; the wire field holds BUF_SIZE - 1 digits at most.
    if len(length) >= BUF_SIZE or not control_length(
        length, MIN_PASSWORD_LENGTH, MAX_PASSWORD_LENGTH
    ):
        raise InputError("Bad request: the length for the password is not valid.")
    return PasswordRequest(type_.lower(), length)


class PasswordClient:
    """Talks to one server; usable from the menu loop or programmatically."""

    def __init__(
        self,
        server_name: str = DEFAULT_SERVER,
        server_port: int = DEFAULT_PORT,
        timeout: Optional[float] = None,
    ) -> None:
        # Resolved once, before the first exchange (socket.gaierror on failure)
        self.server: Tuple[str, int] = (socket.gethostbyname(server_name), server_port)
        LOG.debug("Resolved %s to %s", server_name, self.server[0])

        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.settimeout(timeout)              # None → block forever

    # ================================================================== main ===
    def start(self, read_line: Callable[[], str] = input) -> int:
        """Blocking menu loop; returns the process exit status."""
        try:
            while True:
                print_color(MENU_TEXT, Fore.YELLOW, end="")
                try:
                    line = read_line()
                except EOFError:                   # Ctrl-D
                    return 0

                try:
                    request = parse_input(line)
                except InputError as exc:
                    print_color(str(exc), Fore.RED)
                    continue

                if request is None:
                    print_color(HELP_TEXT, Fore.CYAN)
                    continue
                if not keep_generating(request.type, QUIT_CODE):
                    return 0

                password = self.request_password(request)
                print_color(f"Password generated: {password}\n", Fore.GREEN)
        except KeyboardInterrupt:
            return 0
        except TimeoutError:
            print_color("Timed out waiting for the server.", Fore.MAGENTA)
            LOG.error("Timed out waiting for a response from %s:%d", *self.server)
            return 1
        except ProtocolError as exc:
            print_color("Error receiving response (Password generation response).", Fore.MAGENTA)
            LOG.error("Malformed response: %s", exc)
            return 1
        except OSError as exc:
            print_color("Error talking to the server.", Fore.MAGENTA)
            LOG.error("Socket error: %s", exc)
            return 1
        finally:
            self.close()

    def close(self) -> None:
        self.sock.close()

    # ---------------------------------------------------------------- networking
    def request_password(self, request: PasswordRequest) -> str:
        """One exchange: send ``request``, block for the reply, return the password."""
        pkt = encode_request(request)
        sent = self.sock.sendto(pkt, self.server)
        if sent != len(pkt):
            raise OSError(f"short send: {sent} of {len(pkt)} bytes")

        # One spare byte so an oversized reply is caught, not truncated.
        data, _ = self.sock.recvfrom(RESPONSE_SIZE + 1)
        return decode_response(data).password


# ======================================================================
#  Command-line entry point
# ======================================================================

def main() -> None:
    """Parse CLI args then run the interactive client."""
    parser = argparse.ArgumentParser("UDP password client")
    parser.add_argument(
        "server", nargs="?", default=DEFAULT_SERVER, help="Host name of password server"
    )
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="UDP port of server")
    parser.add_argument(
        "--timeout", type=float, default=None,
        help="Give up after SECONDS without a reply (default: wait forever)",
    )
    parser.add_argument("--log-file", default=LOG_FILE)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    configure_logging(args.log_file, logging.DEBUG if args.verbose else logging.INFO)
    try:
        client = PasswordClient(args.server, args.port, args.timeout)
    except OSError as exc:
        print_color("Error resolving host", Fore.MAGENTA)
        LOG.error("Cannot reach %s: %s", args.server, exc)
        sys.exit(1)
    sys.exit(client.start())


if __name__ == "__main__":
    main()
