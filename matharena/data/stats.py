from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import pandas as pd

from matharena.config import GRAND_PRIZE


@dataclass(frozen=True)
class ParticipantStats:
    total: int = 0
    category_counts: Dict[str, int] = field(default_factory=dict)
    total_score: float = 0.0
    average_score: float = 0.0

    @property
    def grand_prize_count(self) -> int:
        return self.category_counts.get(GRAND_PRIZE, 0)


def compute_statistics(df: pd.DataFrame) -> ParticipantStats:
    """Aggregate the derived list. Scores are the stored (unclamped) values."""
    total = int(len(df))
    if total == 0:
        return ParticipantStats()

    counts = df["categorie"].value_counts(dropna=True)
    category_counts = {str(label): int(count) for label, count in counts.items()}

    total_score = float(pd.to_numeric(df["puncte"], errors="coerce").fillna(0).sum())
    return ParticipantStats(
        total=total,
        category_counts=category_counts,
        total_score=total_score,
        average_score=round(total_score / total, 1),
    )
