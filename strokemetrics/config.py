"""Configuration dataclasses for stroke metrics processing."""
from __future__ import annotations

import math
from dataclasses import dataclass, field, fields

# Conversion px -> mm at an assumed 96 dpi; not calibrated to the device.
PX_PER_MM = 3.78
PAUSE_THRESHOLD_MS = 150.0
SPEED_CHANGE_THRESHOLD_PX_PER_SEC = 600.0
MIN_DURATION_SEC = 0.1
METRICS_UPDATE_INTERVAL_MS = 50.0
DEFAULT_FORCE = 0.5


def _require_positive(obj: object, *names: str) -> None:
    for name in names:
        value = getattr(obj, name)
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"{name} must be a positive finite number, got {value!r}")


@dataclass(frozen=True)
class FluidityWeights:
    """Weights of the five fluidity sub-scores.

    The weights must sum to 1.0; they are used as given and never
    renormalised.
    """

    smoothness: float = 0.35
    pause_time: float = 0.25
    pause_count: float = 0.20
    length: float = 0.10
    speed: float = 0.10

    def __post_init__(self) -> None:
        values = [getattr(self, f.name) for f in fields(self)]
        if any(not math.isfinite(v) or v < 0 for v in values):
            raise ValueError("Fluidity weights must be finite and non-negative.")
        total = sum(values)
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Fluidity weights must sum to 1.0, got {total:.6f}")


@dataclass(frozen=True)
class MetricsConfig:
    """Thresholds and normalisers used by the metrics engine."""

    pause_threshold_ms: float = PAUSE_THRESHOLD_MS
    speed_change_threshold_px_per_sec: float = SPEED_CHANGE_THRESHOLD_PX_PER_SEC
    px_per_mm: float = PX_PER_MM

    # A turn of at least this angle between two consecutive segments is a
    # correction; an exact right angle such as (0,0)->(10,0)->(10,10) counts
    correction_angle_rad: float = math.pi / 2

    # Floor on the effective drawing duration used for the average speed
    min_duration_sec: float = MIN_DURATION_SEC

    # Fluidity normalisers: the sub-score saturates at these values
    pause_ratio_ceiling: float = 0.5
    pause_count_ceiling: float = 6.0
    path_length_target_mm: float = 20.0
    change_rate_ceiling: float = 0.3
    speed_target_px_per_sec: float = 800.0

    weights: FluidityWeights = field(default_factory=FluidityWeights)

    def __post_init__(self) -> None:
        _require_positive(
            self,
            "px_per_mm",
            "correction_angle_rad",
            "min_duration_sec",
            "pause_ratio_ceiling",
            "pause_count_ceiling",
            "path_length_target_mm",
            "change_rate_ceiling",
            "speed_target_px_per_sec",
        )
        if self.pause_threshold_ms < 0 or self.speed_change_threshold_px_per_sec < 0:
            raise ValueError("Pause and speed-change thresholds must be non-negative.")


@dataclass(frozen=True)
class PlaybackConfig:
    """Mapping from writing speed to background music playback."""

    min_rate: float = 0.8
    max_rate: float = 1.6
    max_speed_px_per_sec: float = 1500.0

    def __post_init__(self) -> None:
        _require_positive(self, "min_rate", "max_rate", "max_speed_px_per_sec")
        if self.min_rate > self.max_rate:
            raise ValueError("min_rate must not exceed max_rate.")


@dataclass(frozen=True)
class CaptureConfig:
    """Capture-side policy of a writing session."""

    # Minimum interval between two metric recomputations while the pen moves
    metrics_update_interval_ms: float = METRICS_UPDATE_INTERVAL_MS

    # Force reported for devices without pressure sensing
    default_force: float = DEFAULT_FORCE

    def __post_init__(self) -> None:
        if self.metrics_update_interval_ms < 0:
            raise ValueError("metrics_update_interval_ms must be non-negative.")
        if not 0.0 <= self.default_force <= 1.0:
            raise ValueError("default_force must lie in [0, 1].")
