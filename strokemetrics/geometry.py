"""Geometry helpers for handwriting traces."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .config import MetricsConfig
from .domain import Point


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class GeometryStats:
    bounding_box: BoundingBox
    direction_deg: float
    word_length_mm: float
    amplitude_mm: float


def bounding_box(points: Sequence[Point]) -> BoundingBox:
    """Box around all points; pen lifts do not reset it."""

    if not points:
        return BoundingBox(0.0, 0.0, 0.0, 0.0)
    xs = np.fromiter((p.x for p in points), dtype=float, count=len(points))
    ys = np.fromiter((p.y for p in points), dtype=float, count=len(points))
    return BoundingBox(
        min_x=float(np.min(xs)),
        max_x=float(np.max(xs)),
        min_y=float(np.min(ys)),
        max_y=float(np.max(ys)),
    )


def direction_deg(first: Point, last: Point) -> float:
    """Angle of the start->end displacement in screen coordinates (y grows downward)."""

    return math.degrees(math.atan2(last.y - first.y, last.x - first.x))


class GeometryAnalyzer:
    """Convert the trace extent to millimetres and measure its overall direction."""

    def __init__(self, config: Optional[MetricsConfig] = None) -> None:
        self.config = config or MetricsConfig()

    def analyze(self, points: Sequence[Point]) -> GeometryStats:
        box = bounding_box(points)
        px_per_mm = self.config.px_per_mm
        direction = direction_deg(points[0], points[-1]) if points else 0.0
        return GeometryStats(
            bounding_box=box,
            direction_deg=direction,
            word_length_mm=box.width / px_per_mm,
            amplitude_mm=box.height / px_per_mm,
        )
