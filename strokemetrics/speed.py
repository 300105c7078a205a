"""Writing speed computation over stroke segments."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from .config import MetricsConfig
from .domain import Point, Stroke, StrokeCollection

logger = logging.getLogger(__name__)

SEGMENT_COLUMNS = [
    "stroke",
    "t_start_ms",
    "t_end_ms",
    "distance_px",
    "speed_px_per_sec",
    "sudden_change",
]


@dataclass(frozen=True)
class SpeedStats:
    total_distance: float = 0.0
    speeds: Tuple[float, ...] = ()
    sudden_changes: int = 0


def _stroke_segments(stroke: Stroke) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Return (distance_px, dt_s, t_start, t_end) of the usable segments of a stroke.

    Segments with a non-positive time delta or a non-finite length are dropped.
    """
    if len(stroke) < 2:
        empty = np.empty(0, dtype=float)
        return empty, empty, empty, empty

    xs = np.fromiter((p.x for p in stroke), dtype=float, count=len(stroke))
    ys = np.fromiter((p.y for p in stroke), dtype=float, count=len(stroke))
    ts = np.fromiter((p.t for p in stroke), dtype=float, count=len(stroke))

    dist = np.hypot(np.diff(xs), np.diff(ys))
    dt_s = np.diff(ts) / 1000.0
    keep = (dt_s > 0) & np.isfinite(dist)
    return dist[keep], dt_s[keep], ts[:-1][keep], ts[1:][keep]


class SpeedAnalyzer:
    """Compute per-segment speeds, path distance and abrupt speed changes.

    The previous speed is carried over the whole collection, so a pen lift is
    not a speed change in itself but the first segment of a new stroke is
    compared against the last segment of the previous one.
    """

    def __init__(self, config: Optional[MetricsConfig] = None) -> None:
        self.config = config or MetricsConfig()

    def _collect(self, strokes: StrokeCollection):
        distances: List[np.ndarray] = []
        speeds: List[np.ndarray] = []
        rows = []
        for index, stroke in enumerate(strokes):
            dist, dt_s, t_start, t_end = _stroke_segments(stroke)
            distances.append(dist)
            speeds.append(dist / dt_s)
            rows.append((np.full(len(dist), index), t_start, t_end))
        return distances, speeds, rows

    def _sudden_change_mask(self, speeds: np.ndarray) -> np.ndarray:
        mask = np.zeros(len(speeds), dtype=bool)
        if len(speeds) > 1:
            mask[1:] = np.abs(np.diff(speeds)) > self.config.speed_change_threshold_px_per_sec
        return mask

    def analyze(self, strokes: StrokeCollection) -> SpeedStats:
        distances, speeds, _ = self._collect(strokes)
        if not speeds:
            return SpeedStats()

        all_speeds = np.concatenate(speeds)
        total_distance = float(np.concatenate(distances).sum())
        sudden_changes = int(self._sudden_change_mask(all_speeds).sum())

        logger.debug(
            "Speed analysis: %s segments, %.1f px, %s sudden changes",
            len(all_speeds),
            total_distance,
            sudden_changes,
        )
        return SpeedStats(
            total_distance=total_distance,
            speeds=tuple(float(s) for s in all_speeds),
            sudden_changes=sudden_changes,
        )

    def segments(self, strokes: StrokeCollection) -> pd.DataFrame:
        """Per-segment speed table, one row per usable segment."""

        distances, speeds, rows = self._collect(strokes)
        if not speeds:
            return pd.DataFrame(columns=SEGMENT_COLUMNS)

        all_speeds = np.concatenate(speeds)
        return pd.DataFrame(
            {
                "stroke": np.concatenate([r[0] for r in rows]).astype(int),
                "t_start_ms": np.concatenate([r[1] for r in rows]),
                "t_end_ms": np.concatenate([r[2] for r in rows]),
                "distance_px": np.concatenate(distances),
                "speed_px_per_sec": all_speeds,
                "sudden_change": self._sudden_change_mask(all_speeds),
            },
            columns=SEGMENT_COLUMNS,
        )


def compute_speed_stats(strokes: StrokeCollection, cfg: Optional[MetricsConfig] = None) -> SpeedStats:
    return SpeedAnalyzer(cfg).analyze(strokes)


def segment_frame(strokes: StrokeCollection, cfg: Optional[MetricsConfig] = None) -> pd.DataFrame:
    return SpeedAnalyzer(cfg).segments(strokes)


def instantaneous_speed(previous: Optional[Point], current: Point) -> Optional[float]:
    """Speed in px/s between two consecutive samples, ``None`` if undefined."""

    if previous is None:
        return None
    dt_ms = current.t - previous.t
    if dt_ms <= 0:
        return None
    speed = math.hypot(current.x - previous.x, current.y - previous.y) / dt_ms * 1000.0
    return speed if math.isfinite(speed) else None


@dataclass
class SpeedTracker:
    """Last-point state for streaming speed estimation during capture."""

    last_point: Optional[Point] = field(default=None)

    def update(self, point: Point) -> Optional[float]:
        speed = instantaneous_speed(self.last_point, point)
        self.last_point = point
        return speed

    def reset(self) -> None:
        self.last_point = None
