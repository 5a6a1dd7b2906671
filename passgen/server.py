#!/usr/bin/env python3
"""Single-threaded UDP password server.

* Waits for one request datagram at a time
* Decodes it, validates the length, maps the type code
* Replies to the sender with one response datagram
* Any socket error or malformed datagram stops the server (exit status 1)
"""

from __future__ import annotations

import argparse
import logging
import socket
import sys
from typing import Optional, Tuple

from colorama import Fore

from .password import generate_password, type_from_code
from .protocol import (
    DEFAULT_HOST, DEFAULT_PORT, MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH,
    REQUEST_SIZE, PasswordRequest, PasswordResponse, ProtocolError,
    decode_request, encode_response,
)
from .util import LOG, LOG_FILE, configure_logging, print_color
from .validation import control_length


class PasswordServer:
    """Blocking receive → generate → reply loop, one client at a time."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: Optional[float] = None,
    ) -> None:
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self.sock.bind((host, port))
        except OSError:
            self.sock.close()
            raise
        self.sock.settimeout(timeout)                  # None → block forever

        # Actual endpoint (port 0 picks a free one)
        self.host, self.port = self.sock.getsockname()[:2]

    # ================================================================= main ===
    def start(self) -> int:
        """Run until Ctrl-C or a transport/protocol failure; return exit status."""
        LOG.info("Server listening on %s:%d", self.host, self.port)
        print_color("Server listening...", Fore.BLUE)
        try:
            self.serve_forever()
        except KeyboardInterrupt:
            LOG.info("Shutdown requested")
            return 0
        except TimeoutError:
            LOG.error("Timed out waiting for a request")
            return 1
        except ProtocolError as exc:
            LOG.error("Malformed request: %s", exc)
            return 1
        except OSError as exc:
            LOG.error("Socket error: %s", exc)
            return 1
        finally:
            self.close()
        return 0

    def serve_forever(self) -> None:
        while True:
            self.serve_once()

    def close(self) -> None:
        self.sock.close()

    # ---------------------------------------------------------------- exchange
    def serve_once(self) -> Tuple[str, int]:
        """Handle exactly one request; return the client address served."""
        data, addr = self._receive()
        LOG.info("New connection from %s:%d", addr[0], addr[1])

        response = self.handle_request(decode_request(data))

        pkt = encode_response(response)
        sent = self.sock.sendto(pkt, addr)
        if sent != len(pkt):
            raise OSError(f"short send: {sent} of {len(pkt)} bytes")
        LOG.debug("Sent %d-char password to %s:%d", len(response.password), *addr)
        return addr

    def _receive(self) -> Tuple[bytes, Tuple[str, int]]:
        # One spare byte so oversized datagrams show up as the wrong size
        # instead of being silently truncated by the kernel.
        return self.sock.recvfrom(REQUEST_SIZE + 1)

    @staticmethod
    def handle_request(request: PasswordRequest) -> PasswordResponse:
        """Pure core: request record in, response record out."""
        if not control_length(request.length, MIN_PASSWORD_LENGTH, MAX_PASSWORD_LENGTH):
            raise ProtocolError(f"invalid password length {request.length!r}")
        ptype = type_from_code(request.type)
        return PasswordResponse(generate_password(ptype, int(request.length)))


# ======================================================================
#  Command-line entry point
# ======================================================================

def main() -> None:
    parser = argparse.ArgumentParser("UDP password server")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Address to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--timeout", type=float, default=None,
        help="Give up after SECONDS without a request (default: wait forever)",
    )
    parser.add_argument("--log-file", default=LOG_FILE)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    configure_logging(args.log_file, logging.DEBUG if args.verbose else logging.INFO)
    try:
        server = PasswordServer(args.host, args.port, args.timeout)
    except OSError as exc:
        LOG.error("Bind failed on %s:%d: %s", args.host, args.port, exc)
        sys.exit(1)
    sys.exit(server.start())


if __name__ == "__main__":
    main()
