"""Shared fixtures: a loopback server and a deterministic random source."""

import random
import threading

import pytest

from passgen.server import PasswordServer


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def server():
    """A server bound to a free loopback port; closed after the test."""
    srv = PasswordServer("127.0.0.1", 0, timeout=5)
    yield srv
    srv.close()


@pytest.fixture
def serve_one(server):
    """Run ``server.serve_once()`` in the background for a single exchange."""
    errors: list[BaseException] = []

    def _run() -> None:
        try:
            server.serve_once()
        except BaseException as exc:  # surfaced by the test via ``errors``
            errors.append(exc)

    thread = threading.Thread(target=_run, daemon=True)
    thread.start()
    yield errors
    thread.join(timeout=5)
