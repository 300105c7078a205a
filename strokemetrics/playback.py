"""Background music adaptation driven by writing speed."""
from __future__ import annotations

from typing import Optional, Protocol

from .config import PlaybackConfig


class AudioPort(Protocol):
    """Playback backend driven by a writing session."""

    def play_loop(self, melody_id: str) -> None:
        ...

    def play_preview(self, melody_id: str) -> None:
        ...

    def update_rate(self, rate: float) -> None:
        ...

    def update_volume(self, volume: float) -> None:
        ...

    def pause(self) -> None:
        ...

    def stop(self) -> None:
        ...


def playback_rate_for_speed(speed_px_per_sec: float, cfg: Optional[PlaybackConfig] = None) -> float:
    """Map a writing speed linearly onto the playback rate range.

    Speeds are clamped to ``[0, max_speed_px_per_sec]`` first, so a stationary
    pen plays at ``min_rate`` and anything faster than the ceiling at
    ``max_rate``.
    """

    cfg = cfg or PlaybackConfig()
    clamped = max(0.0, min(cfg.max_speed_px_per_sec, speed_px_per_sec))
    ratio = clamped / cfg.max_speed_px_per_sec
    return cfg.min_rate + (cfg.max_rate - cfg.min_rate) * ratio


def clamp_volume(volume: float) -> float:
    return max(0.0, min(1.0, volume))
