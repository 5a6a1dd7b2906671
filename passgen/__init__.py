"""passgen – a UDP password generator service.

Importing this package exposes :class:`passgen.PasswordServer` and
:class:`passgen.PasswordClient`, so either side can be embedded in another
application or launched via the ``passgen-server`` / ``passgen-client``
console scripts.
"""

# ------------------------ re-exports ------------------------
from .client import PasswordClient   # noqa: F401  ── re-export client class
from .server import PasswordServer   # noqa: F401  ── re-export server class

__all__: list[str] = [
    "PasswordClient",  # Interactive menu client
    "PasswordServer",  # Matching single-threaded UDP server
]
