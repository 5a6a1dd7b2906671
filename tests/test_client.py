"""Tests for client input parsing and the client/server exchange."""

import re
import socket
from typing import Callable, Iterable

import pytest

from passgen.client import InputError, PasswordClient, parse_input
from passgen.protocol import PasswordRequest, ProtocolError
from passgen.server import PasswordServer


def scripted(lines: Iterable[str]) -> Callable[[], str]:
    """Feed ``lines`` to the menu loop, then behave like Ctrl-D."""
    it = iter(lines)

    def _read() -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return _read


class TestParseInput:
    """Test suite for parse_input."""

    def test_type_and_length(self) -> None:
        assert parse_input("s 16") == PasswordRequest("s", "16")

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert parse_input("  m   10 \n") == PasswordRequest("m", "10")

    def test_type_is_lower_cased(self) -> None:
        assert parse_input("U 12") == PasswordRequest("u", "12")

    @pytest.mark.parametrize(
        ("line", "expected"),
        [("s16", PasswordRequest("s", "16")), ("  N10", PasswordRequest("n", "10"))],
    )
    def test_type_glued_to_length(self, line: str, expected: PasswordRequest) -> None:
        assert parse_input(line) == expected

    def test_missing_length_uses_default(self) -> None:
        assert parse_input("a") == PasswordRequest("a", "8")

    def test_help(self) -> None:
        assert parse_input("h") is None
        assert parse_input("H") is None

    @pytest.mark.parametrize("line", ["q", "Q", "q 99"])
    def test_quit(self, line: str) -> None:
        request = parse_input(line)
        assert request is not None
        assert request.type.lower() == "q"

    @pytest.mark.parametrize("line", ["", "   ", "n 10 extra", "nn 10"])
    def test_wrong_shape(self, line: str) -> None:
        with pytest.raises(InputError, match="Invalid input"):
            parse_input(line)

    @pytest.mark.parametrize("line", ["x 10", "1 10", "x", "?16"])
    def test_bad_type(self, line: str) -> None:
        with pytest.raises(InputError, match="type"):
            parse_input(line)

    @pytest.mark.parametrize("line", ["n 5", "n 33", "n ten", "n -8", "n " + "9" * 2000])
    def test_bad_length(self, line: str) -> None:
        with pytest.raises(InputError, match="length"):
            parse_input(line)

    def test_boundaries_accepted(self) -> None:
        assert parse_input("n 6") == PasswordRequest("n", "6")
        assert parse_input("n 32") == PasswordRequest("n", "32")


class TestExchange:
    """Client talking to a live server over loopback."""

    def test_numeric_password(self, server: PasswordServer, serve_one: list) -> None:
        client = PasswordClient("127.0.0.1", server.port, timeout=5)
        try:
            password = client.request_password(PasswordRequest("n", "10"))
        finally:
            client.close()

        assert not serve_one
        assert re.fullmatch(r"[0-9]{10}", password)

    def test_unknown_type_gets_numeric(self, server: PasswordServer, serve_one: list) -> None:
        client = PasswordClient("127.0.0.1", server.port, timeout=5)
        try:
            password = client.request_password(PasswordRequest("x", "8"))
        finally:
            client.close()

        assert re.fullmatch(r"[0-9]{8}", password)

    def test_max_length_is_not_truncated(self, server: PasswordServer, serve_one: list) -> None:
        client = PasswordClient("127.0.0.1", server.port, timeout=5)
        try:
            password = client.request_password(PasswordRequest("s", "32"))
        finally:
            client.close()

        assert len(password) == 32

    def test_resolves_server_name_once(self, server: PasswordServer) -> None:
        client = PasswordClient("localhost", server.port)
        try:
            assert client.server[0].startswith("127.")
        finally:
            client.close()

    def test_unknown_host(self) -> None:
        with pytest.raises(OSError):
            PasswordClient("no-such-host.invalid")

    def test_timeout(self) -> None:
        silent = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        silent.bind(("127.0.0.1", 0))
        client = PasswordClient("127.0.0.1", silent.getsockname()[1], timeout=0.1)
        try:
            with pytest.raises(TimeoutError):
                client.request_password(PasswordRequest("n", "8"))
        finally:
            client.close()
            silent.close()

    def test_malformed_reply(self) -> None:
        fake = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        fake.bind(("127.0.0.1", 0))
        fake.settimeout(5)
        client = PasswordClient("127.0.0.1", fake.getsockname()[1], timeout=5)
        try:
            client.sock.sendto(b"ping", client.server)
            _, client_addr = fake.recvfrom(64)
            fake.sendto(b"short", client_addr)
            with pytest.raises(ProtocolError):
                client.request_password(PasswordRequest("n", "8"))
        finally:
            client.close()
            fake.close()


class TestStart:
    """The interactive menu loop and its exit status."""

    def test_session(
        self, server: PasswordServer, serve_one: list, capsys: pytest.CaptureFixture
    ) -> None:
        client = PasswordClient("127.0.0.1", server.port, timeout=5)

        status = client.start(scripted(["h", "x 10", "n 33", "n 10", "q"]))

        out = capsys.readouterr().out
        assert status == 0
        assert "Password Generator Help Menu" in out
        assert "the type inserted is not valid" in out
        assert "the length for the password is not valid" in out
        assert re.search(r"Password generated: [0-9]{10}\n", out)

    def test_quit_sends_nothing(self, capsys: pytest.CaptureFixture) -> None:
        listener = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        listener.bind(("127.0.0.1", 0))
        listener.settimeout(0.1)
        client = PasswordClient("127.0.0.1", listener.getsockname()[1])
        try:
            assert client.start(scripted(["Q"])) == 0
            with pytest.raises(TimeoutError):
                listener.recvfrom(2048)
        finally:
            listener.close()

    def test_end_of_input_is_clean_exit(self, capsys: pytest.CaptureFixture) -> None:
        client = PasswordClient("127.0.0.1", 9)
        assert client.start(scripted([])) == 0

    def test_timeout_is_a_failure(self, capsys: pytest.CaptureFixture) -> None:
        silent = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        silent.bind(("127.0.0.1", 0))
        client = PasswordClient("127.0.0.1", silent.getsockname()[1], timeout=0.1)
        try:
            assert client.start(scripted(["n 8"])) == 1
        finally:
            silent.close()

        assert "Timed out" in capsys.readouterr().out
