from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import streamlit as st

from matharena.data.stats import ParticipantStats
from matharena.ui.components.formatting import format_number


@dataclass(frozen=True)
class KpiCard:
    label: str
    value: Optional[float] = None
    decimals: int = 0


def _format_value(card: KpiCard) -> str:
    return format_number(card.value, decimals=card.decimals)


def build_stat_cards(stats: ParticipantStats) -> List[KpiCard]:
    return [
        KpiCard(label="Total participanți", value=stats.total),
        KpiCard(label="Punctaj mediu", value=stats.average_score, decimals=1),
        KpiCard(label="Premii Mari", value=stats.grand_prize_count),
    ]


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 3) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                st.metric(label=card.label, value=_format_value(card))
