#!/usr/bin/env python3
"""Logging utils **and** the coloured console helper used by the CLIs."""

from __future__ import annotations
import logging                           # Python stdlib logging framework
import sys                               # For stdout handle
from logging.handlers import RotatingFileHandler
from typing import Optional

from colorama import Style, init

__all__ = ["LOG", "LOG_FILE", "configure_logging", "print_color"]

init(autoreset=True)                     # Reset colour after each print

LOG_FILE = "passgen.log"

# Modules log through this object; handlers are attached by configure_logging().
LOG = logging.getLogger("passgen")


def configure_logging(
    log_file: Optional[str] = LOG_FILE, level: int = logging.INFO
) -> logging.Logger:
    """Attach console + rotating file output to the "passgen" logger.

    Safe to call more than once: existing handlers are replaced, not stacked.
    Pass ``log_file=None`` for console only.
    """
    logger = LOG
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Example line: [23:59:59] INFO     Server listening on 127.0.0.1:8080
    fmt = logging.Formatter("[%(asctime)s] %(levelname)-8s %(message)s", "%H:%M:%S")

    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    if log_file:
        # Rotates once file hits 1 MiB, keeps 3 backups.
        fh = RotatingFileHandler(
            log_file,
            maxBytes=1_048_576,
            backupCount=3,
            encoding="utf-8",
        )
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


def print_color(text: str, colour: str, end: str = "\n") -> None:
    """Print ``text`` wrapped in a colorama ``Fore`` colour."""
    print(f"{colour}{text}{Style.RESET_ALL}", end=end, flush=True)
