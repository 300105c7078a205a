from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import pytest

from strokemetrics.domain import Point


def build_stroke(samples: Iterable[Sequence[float]], force: float | None = 0.5) -> List[Point]:
    """Build a stroke from ``(x, y, t)`` or ``(x, y, t, force)`` tuples."""
    points = []
    for sample in samples:
        if len(sample) == 4:
            x, y, t, f = sample
        else:
            (x, y, t), f = sample, force
        points.append(Point(x=float(x), y=float(y), t=t, force=f))
    return points


@pytest.fixture
def word_strokes() -> List[List[Point]]:
    """Three strokes with two pen lifts, the second of which is a pause."""
    return [
        build_stroke([(0, 0, 0), (10, 5, 40), (20, 10, 80), (30, 5, 120)], force=0.6),
        build_stroke([(35, 0, 200), (40, 20, 260), (45, 40, 320)], force=0.8),
        build_stroke([(60, 10, 700), (80, 10, 760), (60, 12, 820)], force=0.7),
    ]


@pytest.fixture
def capture_rows() -> List[Tuple[int, float, float, int, float]]:
    return [
        (0, 0.0, 0.0, 0, 0.5),
        (0, 50.0, 0.0, 500, 0.5),
        (1, 60.0, 0.0, 900, 0.9),
        (1, 110.0, 0.0, 1400, 0.9),
    ]


@pytest.fixture
def make_stroke():
    return build_stroke
