"""
Participant card view-models and their HTML rendering.

Every piece of user-supplied text reaches the markup through `escape_text`;
project links are accepted only for http(s) URLs and are attribute-escaped.
"""

from __future__ import annotations

import html
import textwrap
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple
from urllib.parse import urlsplit

import pandas as pd
import streamlit as st

from matharena.config import UNSPECIFIED_NAME, category_style
from matharena.ui.components.formatting import clamp_score, format_score

SAFE_SCHEMES = ("http", "https")

# (record field, bootstrap icon) in display order; the coordinator sits under the name
DETAIL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("institutia", "bi-building"),
    ("clasa", "bi-mortarboard"),
    ("localitate", "bi-geo-alt"),
)

CARD_CSS = """
<style>
.ma-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(280px, 1fr)); gap: 16px; margin-top: 12px; }
.participant-card { border: 1px solid rgba(0,0,0,0.10); border-left-width: 5px; border-radius: 12px; padding: 14px 16px; background: #ffffff; height: 100%; }
.participant-card .card-head { display: flex; justify-content: space-between; align-items: flex-start; gap: 8px; margin-bottom: 10px; }
.participant-card .card-title { font-weight: 700; font-size: 1.05rem; margin: 4px 0 2px 0; }
.participant-card .card-line { margin: 2px 0; font-size: 0.92rem; }
.participant-card .muted { color: #6c757d; font-size: 0.85rem; }
.ma-badge { display: inline-block; padding: 2px 10px; border-radius: 999px; font-size: 0.78rem; font-weight: 600; color: #ffffff; background: #0dcaf0; }
.ma-badge.badge-premium { background: linear-gradient(135deg, #f7b733, #fc4a1a); }
.ma-badge.bg-secondary { background: #6c757d; }
.ma-badge.bg-warning { background: #ffc107; }
.ma-badge.bg-light { background: #f1f3f5; }
.ma-badge.bg-success { background: #198754; }
.ma-badge.text-dark { color: #212529; }
.ma-badge.points-badge { background: #0d6efd; white-space: nowrap; }
.card-premiu-mare { border-left-color: #fc4a1a; }
.card-locul-1 { border-left-color: #adb5bd; }
.card-locul-2 { border-left-color: #ffc107; }
.card-locul-3 { border-left-color: #cd7f32; }
.card-mentiune { border-left-color: #198754; }
.ma-link { display: block; margin-top: 12px; text-align: center; padding: 4px 8px; border: 1px solid #0d6efd; border-radius: 8px; color: #0d6efd; text-decoration: none; font-size: 0.88rem; }
.ma-chip { display: inline-block; padding: 2px 10px; border-radius: 999px; border: 1px solid rgba(0,0,0,0.12); font-size: 0.85rem; color: #495057; margin: 0 6px 6px 0; }
</style>
"""


@dataclass(frozen=True)
class DetailLine:
    icon: str
    text: str


@dataclass(frozen=True)
class ParticipantCard:
    participant_id: str
    category: Optional[str]
    card_class: str
    badge_class: str
    name: str
    coordinator: Optional[str]
    details: Tuple[DetailLine, ...]
    score: float
    score_display: str
    link: Optional[str]


def escape_text(value: Any) -> str:
    """Escape a display value for HTML text or quoted attribute context."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def safe_url(value: Optional[str]) -> Optional[str]:
    """Return the URL if it is an absolute http(s) link, else None."""
    if not value:
        return None
    candidate = value.strip()
    try:
        parts = urlsplit(candidate)
    except ValueError:
        return None
    if parts.scheme.lower() not in SAFE_SCHEMES or not parts.netloc:
        return None
    return candidate


def _optional(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value)
    return text if text.strip() else None


def build_card(record: dict) -> ParticipantCard:
    category = _optional(record.get("categorie"))
    style = category_style(category)
    score = clamp_score(record.get("puncte"))
    details = tuple(
        DetailLine(icon=icon, text=text)
        for field, icon in DETAIL_FIELDS
        if (text := _optional(record.get(field))) is not None
    )
    return ParticipantCard(
        participant_id=str(record.get("id", "")),
        category=category,
        card_class=style.card_class,
        badge_class=style.badge_class,
        name=_optional(record.get("participant")) or UNSPECIFIED_NAME,
        coordinator=_optional(record.get("coordonator")),
        details=details,
        score=score,
        score_display=format_score(score),
        link=safe_url(_optional(record.get("link"))),
    )


def build_card_views(df: pd.DataFrame) -> List[ParticipantCard]:
    """One card per record, in the order of the derived list."""
    if df.empty:
        return []
    return [build_card(record) for record in df.to_dict(orient="records")]


def render_card_html(card: ParticipantCard) -> str:
    coordinator = (
        f'<p class="card-line muted"><i class="bi bi-person-badge"></i> {escape_text(card.coordinator)}</p>'
        if card.coordinator
        else ""
    )
    details = "".join(
        f'<p class="card-line"><i class="bi {line.icon}"></i> {escape_text(line.text)}</p>'
        for line in card.details
    )
    link = (
        f'<a class="ma-link" href="{escape_text(card.link)}" target="_blank" rel="noopener noreferrer">'
        f'<i class="bi bi-box-arrow-up-right"></i> Vezi proiectul</a>'
        if card.link
        else ""
    )
    return (
        f'<div class="participant-card {escape_text(card.card_class)}">'
        f'<div class="card-head"><div>'
        f'<span class="ma-badge {escape_text(card.badge_class)}">{escape_text(card.category)}</span>'
        f'<div class="card-title">{escape_text(card.name)}</div>'
        f"{coordinator}"
        f"</div>"
        f'<span class="ma-badge points-badge">{escape_text(card.score_display)} puncte</span>'
        f"</div>"
        f'<div class="participant-details">{details}</div>'
        f"{link}"
        f"</div>"
    )


def render_cards_html(cards: Sequence[ParticipantCard]) -> str:
    return '<div class="ma-grid">' + "".join(render_card_html(card) for card in cards) + "</div>"


def render_category_chips_html(category_counts: dict) -> str:
    return "".join(
        f'<span class="ma-chip">{escape_text(label)}: {int(count)}</span>'
        for label, count in category_counts.items()
    )


def render_html(markup: str) -> None:
    st.markdown(textwrap.dedent(markup).strip(), unsafe_allow_html=True)
