"""
Utility helpers for formatting scores, counts and timestamps for display.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from matharena.config import SCORE_DISPLAY_CAP


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return "–"
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def clamp_score(value: Optional[float]) -> float:
    """Display ceiling only; a missing score shows as 0."""
    if value is None or pd.isna(value):
        return 0.0
    return min(float(value), float(SCORE_DISPLAY_CAP))


def format_score(value: Optional[float]) -> str:
    """Whole scores without decimals, fractional ones as stored (e.g. 27.5)."""
    if value is None or pd.isna(value):
        return "0"
    numeric = float(value)
    if numeric.is_integer():
        return str(int(numeric))
    return f"{numeric:g}"


def format_timestamp(value, fmt: str = "%d.%m.%Y %H:%M") -> str:
    if value is None or pd.isna(value):
        return "–"
    try:
        return pd.Timestamp(value).strftime(fmt)
    except (TypeError, ValueError):
        return "–"
