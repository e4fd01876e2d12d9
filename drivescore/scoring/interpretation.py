# drivescore/scoring/interpretation.py
# -*- coding: utf-8 -*-
"""
Human-readable reading of a 0–100 score: band label, letter grade and the
colour name the dashboard uses for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from drivescore.core.types import Number


@dataclass(frozen=True)
class ScoreBand:
    min: int
    max: int
    label: str
    description: str
    grade: str
    color: str


SCORE_BANDS: Tuple[ScoreBand, ...] = (
      ScoreBand(90, 100, "Excellent Driver", "Very safe and efficient", "A", "green")
    , ScoreBand(80, 89, "Good Driver", "Minor areas for improvement", "B", "blue")
    , ScoreBand(70, 79, "Average Driver", "Several areas need attention", "C", "yellow")
    , ScoreBand(60, 69, "Below Average", "Significant improvement needed", "D", "orange")
    , ScoreBand(0, 59, "Poor Driver", "Major safety and efficiency concerns", "F", "red")
)


def interpret_score(score: Number) -> ScoreBand:
    """
    Return the band `score` falls in. Bands are matched on their lower
    bound, so 89.5 still reads as "Good Driver".
    """
    for band in SCORE_BANDS:
        if score >= band.min:
            return band
    return SCORE_BANDS[-1]


def score_grade(score: Number) -> str:
    return interpret_score(score).grade


def score_color(score: Number) -> str:
    return interpret_score(score).color
