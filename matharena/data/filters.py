"""
Filter and sort utilities applied to the participant dataset on every input change.
"""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pandas as pd

from matharena.config import DEFAULT_SORT, SEARCH_FIELDS

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticipantFilters:
    search: str = ""
    category: Optional[str] = None
    sort: Optional[str] = DEFAULT_SORT


DEFAULT_FILTERS = ParticipantFilters()


def collation_key(value: Optional[str]) -> str:
    """Accent- and case-insensitive sort key; on ties lowercase sorts first.

    Missing names (None or NaN) sort as the empty string.
    """
    text = value if isinstance(value, str) else ""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return f"{base}\x00{text.swapcase()}"


def _matches_search(df: pd.DataFrame, term: str) -> pd.Series:
    mask = pd.Series(False, index=df.index)
    for col in SEARCH_FIELDS:
        mask |= df[col].map(lambda v: isinstance(v, str) and term in v.lower()).astype(bool)
    return mask


def sort_participants(df: pd.DataFrame, sort: Optional[str]) -> pd.DataFrame:
    """Stable sort by one of the four modes; any other value keeps the current order."""
    if sort == "puncte_desc":
        return df.sort_values("puncte", ascending=False, kind="stable")
    if sort == "puncte_asc":
        return df.sort_values("puncte", ascending=True, kind="stable")
    if sort in ("participant_asc", "participant_desc"):
        return df.sort_values(
            "participant",
            ascending=sort == "participant_asc",
            kind="stable",
            key=lambda s: s.map(collation_key),
        )
    return df


def apply_filters(df: pd.DataFrame, filters: ParticipantFilters) -> pd.DataFrame:
    """
    Return the derived list: records matching the search text and category,
    ordered by the selected sort mode. The input frame is never modified.
    """
    if df.empty:
        return df.copy()

    term = (filters.search or "").lower()
    filtered = df
    if term:
        filtered = filtered[_matches_search(filtered, term)]

    if filters.category:
        filtered = filtered[filtered["categorie"] == filters.category]

    filtered = sort_participants(filtered, filters.sort).copy()
    log.debug("Filters %s -> %d of %d participants", serialize_filters(filters), len(filtered), len(df))
    return filtered


def serialize_filters(filters: ParticipantFilters) -> Dict[str, Any]:
    """
    Convert the ParticipantFilters dataclass to a JSON-serialisable dictionary
    to be stored in session_state or used for logging.
    """
    return {
        "search": filters.search,
        "category": filters.category,
        "sort": filters.sort,
    }
