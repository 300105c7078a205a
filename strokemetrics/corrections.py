"""Self-correction detection from sharp direction reversals."""
from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .config import MetricsConfig
from .domain import Stroke, StrokeCollection


def turn_angles(stroke: Stroke) -> np.ndarray:
    """Absolute heading change at every interior point of a stroke, in [0, pi]."""

    if len(stroke) < 3:
        return np.empty(0, dtype=float)
    xs = np.fromiter((p.x for p in stroke), dtype=float, count=len(stroke))
    ys = np.fromiter((p.y for p in stroke), dtype=float, count=len(stroke))
    headings = np.arctan2(np.diff(ys), np.diff(xs))
    diff = np.abs(np.diff(headings))
    return np.where(diff > math.pi, 2 * math.pi - diff, diff)


class CorrectionAnalyzer:
    """Count turns of at least the correction angle, stroke by stroke.

    Turns are measured between consecutive segments of one stroke; a pen lift
    never produces a correction.
    """

    def __init__(self, config: Optional[MetricsConfig] = None) -> None:
        self.config = config or MetricsConfig()

    def analyze(self, strokes: StrokeCollection) -> int:
        threshold = self.config.correction_angle_rad
        return sum(int(np.count_nonzero(turn_angles(stroke) >= threshold)) for stroke in strokes)


def count_corrections(strokes: StrokeCollection, cfg: Optional[MetricsConfig] = None) -> int:
    return CorrectionAnalyzer(cfg).analyze(strokes)
