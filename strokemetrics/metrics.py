"""Aggregation of analyzer outputs into handwriting metrics."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .config import MetricsConfig
from .corrections import CorrectionAnalyzer
from .domain import EMPTY_METRICS, Point, StrokeCollection, WritingMetrics, flatten
from .geometry import GeometryAnalyzer
from .pauses import PauseAnalyzer, PauseStats
from .speed import SpeedAnalyzer, SpeedStats

logger = logging.getLogger(__name__)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(high, max(low, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, 0.5 always up; non-finite values become 0."""

    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def average_force(points: Sequence[Point]) -> float:
    """Mean force over the points that report one, 0.0 if none does."""

    forces = [float(p.force) for p in points if p.has_valid_force()]
    if not forces:
        return 0.0
    return sum(forces) / len(forces)


@dataclass(frozen=True)
class FluidityBreakdown:
    """Normalised sub-scores in [0, 1] and their weighted sum."""

    smoothness: float
    pause_time: float
    pause_count: float
    length: float
    speed: float
    score: float


class MetricsAggregator:
    """Run the analyzers over a stroke collection and assemble ``WritingMetrics``.

    The aggregator holds no state between calls: the result depends only on
    the strokes passed in, and it never raises for a well-formed collection.
    """

    def __init__(self, config: Optional[MetricsConfig] = None) -> None:
        self.config = config or MetricsConfig()
        self.pause_analyzer = PauseAnalyzer(self.config)
        self.speed_analyzer = SpeedAnalyzer(self.config)
        self.geometry_analyzer = GeometryAnalyzer(self.config)
        self.correction_analyzer = CorrectionAnalyzer(self.config)

    def fluidity(
        self,
        pauses: PauseStats,
        speeds: SpeedStats,
        total_time_ms: float,
        path_length_mm: float,
        average_speed: float,
    ) -> FluidityBreakdown:
        cfg = self.config
        weights = cfg.weights

        pause_ratio = pauses.total_pause_ms / total_time_ms if total_time_ms > 0 else 0.0
        pause_time_score = 1.0 - clamp(pause_ratio / cfg.pause_ratio_ceiling)
        pause_count_score = 1.0 - clamp(pauses.pause_count / cfg.pause_count_ceiling)
        length_score = clamp(path_length_mm / cfg.path_length_target_mm)

        smoothness_score = 1.0
        if len(speeds.speeds) > 1:
            change_rate = speeds.sudden_changes / len(speeds.speeds)
            smoothness_score = 1.0 - clamp(change_rate / cfg.change_rate_ceiling)

        speed_score = clamp(average_speed / cfg.speed_target_px_per_sec)

        score = (
            weights.smoothness * smoothness_score
            + weights.pause_time * pause_time_score
            + weights.pause_count * pause_count_score
            + weights.length * length_score
            + weights.speed * speed_score
        )
        return FluidityBreakdown(
            smoothness=smoothness_score,
            pause_time=pause_time_score,
            pause_count=pause_count_score,
            length=length_score,
            speed=speed_score,
            score=score,
        )

    def compute(self, strokes: StrokeCollection) -> WritingMetrics:
        cfg = self.config
        points = flatten(strokes)
        if len(points) < 2:
            return EMPTY_METRICS

        pauses = self.pause_analyzer.analyze(strokes)
        speeds = self.speed_analyzer.analyze(strokes)
        geometry = self.geometry_analyzer.analyze(points)
        corrections = self.correction_analyzer.analyze(strokes)

        first, last = points[0], points[-1]
        total_time_ms = last.t - first.t
        effective_drawing_ms = max(0.0, total_time_ms - pauses.total_pause_ms)
        duration_sec = max(cfg.min_duration_sec, effective_drawing_ms / 1000.0)

        average_speed = speeds.total_distance / duration_sec
        path_length_mm = speeds.total_distance / cfg.px_per_mm

        breakdown = self.fluidity(pauses, speeds, total_time_ms, path_length_mm, average_speed)
        fluidity = clamp(round_half_up(breakdown.score * 100), 0, 100)
        applied_force = clamp(round_half_up(average_force(points) * 100), 0, 100)

        direction = round_half_up(geometry.direction_deg)
        if direction <= -180:
            direction += 360

        logger.debug(
            "Metrics over %s points in %s strokes: fluidity=%.3f (%s)",
            len(points),
            len(strokes),
            breakdown.score,
            breakdown,
        )

        return WritingMetrics(
            applied_force=int(applied_force),
            pause_time=round_half_up(pauses.total_pause_ms),
            pause_count=pauses.pause_count,
            speed_changes=speeds.sudden_changes,
            fluidity=int(fluidity),
            average_speed=round_half_up(average_speed),
            direction=direction,
            path_length=round_half_up(path_length_mm),
            corrections=corrections,
            amplitude=round_half_up(geometry.amplitude_mm),
            word_length=round_half_up(geometry.word_length_mm),
        )


def compute_metrics(strokes: StrokeCollection, cfg: Optional[MetricsConfig] = None) -> WritingMetrics:
    return MetricsAggregator(cfg).compute(strokes)
