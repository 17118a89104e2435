# dovetail/util/console.py
from __future__ import annotations

import logging
import sys
from typing import Any

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def setup_logging(level: str = "WARNING") -> None:
    """Configure root logging for command-line entry points (stderr only)."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
    )
