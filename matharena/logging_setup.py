"""
Root logger configuration shared by the Streamlit entry point and scripts.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s  %(levelname)s  %(name)s  %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Attach a stdout handler to the root logger once per process.

    Streamlit re-executes the page script on every interaction, so repeated
    calls must not stack handlers.
    """
    global _configured
    if _configured:
        return

    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.addHandler(stream)
    _configured = True
