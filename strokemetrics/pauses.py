"""Pen-lift pause detection between consecutive strokes."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import MetricsConfig
from .domain import StrokeCollection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PauseStats:
    total_pause_ms: float = 0.0
    pause_count: int = 0


class PauseAnalyzer:
    """Accumulate gaps between strokes that exceed the pause threshold.

    The gap between stroke ``i`` and ``i + 1`` is measured from the last point
    of ``i`` to the first point of ``i + 1``. No pause is ever counted inside a
    single stroke.
    """

    def __init__(self, config: Optional[MetricsConfig] = None) -> None:
        self.config = config or MetricsConfig()

    def analyze(self, strokes: StrokeCollection) -> PauseStats:
        threshold = self.config.pause_threshold_ms
        total = 0.0
        count = 0

        for current, following in zip(strokes, strokes[1:]):
            if not current or not following:
                continue
            gap = following[0].t - current[-1].t
            if gap > threshold:
                total += gap
                count += 1

        logger.debug("Detected %s pauses totalling %.1f ms", count, total)
        return PauseStats(total_pause_ms=total, pause_count=count)


def compute_pause_stats(strokes: StrokeCollection, cfg: Optional[MetricsConfig] = None) -> PauseStats:
    return PauseAnalyzer(cfg).analyze(strokes)
