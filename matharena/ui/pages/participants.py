from __future__ import annotations

import pandas as pd
import streamlit as st

from matharena.config import EMPTY_STATE_MESSAGE
from matharena.session import ParticipantView
from matharena.ui.components.cards import render_cards_html, render_category_chips_html, render_html
from matharena.ui.components.kpi import render_kpi_cards

EXPORT_COLUMNS = [
    "participant",
    "categorie",
    "puncte",
    "institutia",
    "clasa",
    "localitate",
    "coordonator",
    "link",
]


def _render_export(filtered: pd.DataFrame) -> None:
    columns = [c for c in EXPORT_COLUMNS if c in filtered.columns]
    csv_bytes = filtered[columns].to_csv(index=False).encode("utf-8")
    st.download_button(
        "Descarcă lista (CSV)",
        data=csv_bytes,
        file_name="participanti_matharena.csv",
        mime="text/csv",
    )


def render(view: ParticipantView, filtered: pd.DataFrame) -> None:
    if view.error:
        st.error(view.error, icon="⚠️")
        return

    render_kpi_cards(view.stat_cards, columns=3)
    if view.stats.category_counts:
        render_html(render_category_chips_html(view.stats.category_counts))

    if view.is_empty:
        st.info(EMPTY_STATE_MESSAGE)
        return

    render_html(render_cards_html(view.cards))
    st.divider()
    _render_export(filtered)
