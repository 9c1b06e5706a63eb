"""
Layout helpers for the Streamlit application (page setup, sidebar filters).
"""

from __future__ import annotations

from typing import List, Optional

import streamlit as st

from matharena.config import ALL_CATEGORIES_LABEL, CATEGORIES, SORT_OPTIONS
from matharena.data.filters import DEFAULT_FILTERS, ParticipantFilters
from matharena.ui.components.cards import CARD_CSS, render_html

ICONS_CSS_URL = "https://cdn.jsdelivr.net/npm/bootstrap-icons@1.11.3/font/bootstrap-icons.min.css"


def setup_page() -> None:
    """Set Streamlit page configuration and inject the card styling."""
    st.set_page_config(
        page_title="MathArena 2025 – Participanți",
        layout="wide",
        page_icon=":trophy:",
    )
    render_html(f'<link rel="stylesheet" href="{ICONS_CSS_URL}">')
    render_html(CARD_CSS)


def _category_options() -> List[str]:
    return [ALL_CATEGORIES_LABEL] + [style.label for style in CATEGORIES]


def _clear_state_prefixes(prefixes: List[str]) -> None:
    for prefix in prefixes:
        for key in list(st.session_state.keys()):
            if str(key).startswith(prefix):
                del st.session_state[key]


def sidebar_filters_ui(defaults: ParticipantFilters = DEFAULT_FILTERS) -> ParticipantFilters:
    """
    Render the sidebar filter controls and return the selected values.
    """
    st.sidebar.header("Filtre")

    search = st.sidebar.text_input(
        "Caută",
        value=defaults.search,
        key="ma_search",
        placeholder="Nume, instituție, localitate sau coordonator",
    )

    category_options = _category_options()
    default_category = defaults.category if defaults.category in category_options else ALL_CATEGORIES_LABEL
    category_label = st.sidebar.selectbox(
        "Categorie",
        options=category_options,
        index=category_options.index(default_category),
        key="ma_category",
    )
    category: Optional[str] = None if category_label == ALL_CATEGORIES_LABEL else category_label

    sort_keys = [option.key for option in SORT_OPTIONS]
    sort_labels = {option.key: option.label for option in SORT_OPTIONS}
    sort = st.sidebar.selectbox(
        "Sortare",
        options=sort_keys,
        index=sort_keys.index(defaults.sort) if defaults.sort in sort_keys else 0,
        format_func=lambda key: sort_labels.get(key, key),
        key="ma_sort",
    )

    if st.sidebar.button("Resetează filtrele", key="ma_reset_filters"):
        _clear_state_prefixes(["ma_search", "ma_category", "ma_sort"])
        st.rerun()

    return ParticipantFilters(search=search or "", category=category, sort=sort)
