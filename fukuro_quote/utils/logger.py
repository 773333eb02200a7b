"""Logging setup for the CLI and the API server.
Call setup_logging() once, before the first quote is priced.
"""

from __future__ import annotations

import io
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_FORMAT = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers and the level they are held at
_QUIET = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "groq": logging.WARNING,
    "langchain_core": logging.WARNING,
    "langchain_groq": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Log to stdout, and to a rotating *log_file* when one is given.
    Repeated calls are no-ops so uvicorn reloads do not stack handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(level.upper())
    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    # Client names and briefs are often Spanish; keep accents on any console
    stream = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace", line_buffering=True)
    console = logging.StreamHandler(stream)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name, quiet_level in _QUIET.items():
        logging.getLogger(name).setLevel(quiet_level)
