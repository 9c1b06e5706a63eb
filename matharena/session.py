"""
Per-browser-session state: the loaded dataset, the derived list and the
outcome of the initial load.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import pandas as pd

from matharena.config import COLUMNS, LOAD_ERROR_MESSAGE
from matharena.data.filters import ParticipantFilters, apply_filters
from matharena.data.loader import load_participants
from matharena.data.stats import ParticipantStats, compute_statistics
from matharena.ui.components.cards import ParticipantCard, build_card_views
from matharena.ui.components.kpi import KpiCard, build_stat_cards

log = logging.getLogger(__name__)


def empty_participants() -> pd.DataFrame:
    return pd.DataFrame(columns=list(COLUMNS))


@dataclass(frozen=True)
class ParticipantView:
    cards: List[ParticipantCard]
    stats: ParticipantStats
    stat_cards: List[KpiCard]
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.cards


@dataclass
class ParticipantSession:
    participants: pd.DataFrame = field(default_factory=empty_participants)
    filtered: pd.DataFrame = field(default_factory=empty_participants)
    error: Optional[str] = None
    loading: bool = False
    loaded: bool = False

    def load(self, loader: Callable[[], pd.DataFrame] = load_participants) -> None:
        """Run the one-off load. Failures end up in `error`, never raised."""
        if self.loaded:
            return
        self.loading = True
        try:
            self.participants = loader()
            self.error = None
        except Exception:
            log.exception("Error loading participants")
            self.participants = empty_participants()
            self.error = LOAD_ERROR_MESSAGE
        finally:
            self.loading = False
            self.loaded = True

    def refresh(self, filters: ParticipantFilters) -> ParticipantView:
        """Recompute the derived list and everything shown from it."""
        self.filtered = apply_filters(self.participants, filters)
        stats = compute_statistics(self.filtered)
        return ParticipantView(
            cards=build_card_views(self.filtered),
            stats=stats,
            stat_cards=build_stat_cards(stats),
            error=self.error,
        )

    def latest_timestamp(self) -> Optional[pd.Timestamp]:
        if self.participants.empty:
            return None
        stamps = pd.to_datetime(self.participants["timestamp"], errors="coerce", utc=True).dropna()
        if stamps.empty:
            return None
        return stamps.max()
