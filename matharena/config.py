"""
Application-wide configuration constants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple


DEFAULT_COLLECTION = "participanti_matharena_2025"
DEFAULT_CREDENTIALS_FILE = "firebase-credentials.json"

# Display-only ceiling for scores; stored values are never altered.
SCORE_DISPLAY_CAP = 30

GRAND_PRIZE = "Premiul Mare"
UNSPECIFIED_NAME = "Nespecificat"
LOAD_ERROR_MESSAGE = "Eroare la încărcarea datelor. Vă rugăm să încercați din nou."
EMPTY_STATE_MESSAGE = "Nu au fost găsiți participanți pentru filtrele selectate."
ALL_CATEGORIES_LABEL = "Toate categoriile"

TEXT_FIELDS: Tuple[str, ...] = (
    "participant",
    "institutia",
    "localitate",
    "coordonator",
    "clasa",
    "categorie",
    "link",
)
SEARCH_FIELDS: Tuple[str, ...] = ("participant", "institutia", "localitate", "coordonator")
COLUMNS: Tuple[str, ...] = ("id",) + TEXT_FIELDS + ("puncte", "timestamp")


@dataclass(frozen=True)
class CategoryStyle:
    label: str
    card_class: str
    badge_class: str


# Ordered award tiers with their presentation classes
CATEGORIES: List[CategoryStyle] = [
    CategoryStyle("Premiul Mare", "card-premiu-mare", "badge-premium"),
    CategoryStyle("Locul 1", "card-locul-1", "bg-secondary"),
    CategoryStyle("Locul 2", "card-locul-2", "bg-warning text-dark"),
    CategoryStyle("Locul 3", "card-locul-3", "bg-light text-dark"),
    CategoryStyle("Mențiune", "card-mentiune", "bg-success"),
]
FALLBACK_STYLE = CategoryStyle("", "", "bg-info")
CATEGORY_STYLES: Dict[str, CategoryStyle] = {style.label: style for style in CATEGORIES}


@dataclass(frozen=True)
class SortOption:
    key: str
    label: str


SORT_OPTIONS: List[SortOption] = [
    SortOption("puncte_desc", "Punctaj (descrescător)"),
    SortOption("puncte_asc", "Punctaj (crescător)"),
    SortOption("participant_asc", "Nume (A-Z)"),
    SortOption("participant_desc", "Nume (Z-A)"),
]
DEFAULT_SORT = "puncte_desc"


def category_style(category) -> CategoryStyle:
    return CATEGORY_STYLES.get(category, FALLBACK_STYLE)
