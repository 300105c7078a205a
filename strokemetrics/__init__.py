"""Handwriting stroke metrics toolkit."""

from .config import CaptureConfig, FluidityWeights, MetricsConfig, PlaybackConfig
from .domain import EMPTY_METRICS, Point, WritingMetrics
from .pauses import PauseAnalyzer, compute_pause_stats
from .speed import SpeedAnalyzer, SpeedTracker, compute_speed_stats, instantaneous_speed, segment_frame
from .geometry import GeometryAnalyzer, bounding_box, direction_deg
from .corrections import CorrectionAnalyzer, count_corrections
from .metrics import MetricsAggregator, compute_metrics
from .playback import AudioPort, playback_rate_for_speed
from .session import WritingSession
from .tables import load_strokes, metrics_frame, strokes_to_frame

__all__ = [
    "CaptureConfig",
    "FluidityWeights",
    "MetricsConfig",
    "PlaybackConfig",
    "EMPTY_METRICS",
    "Point",
    "WritingMetrics",
    "PauseAnalyzer",
    "compute_pause_stats",
    "SpeedAnalyzer",
    "SpeedTracker",
    "compute_speed_stats",
    "instantaneous_speed",
    "segment_frame",
    "GeometryAnalyzer",
    "bounding_box",
    "direction_deg",
    "CorrectionAnalyzer",
    "count_corrections",
    "MetricsAggregator",
    "compute_metrics",
    "AudioPort",
    "playback_rate_for_speed",
    "WritingSession",
    "load_strokes",
    "metrics_frame",
    "strokes_to_frame",
]
