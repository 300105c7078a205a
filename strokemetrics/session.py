"""Recording session coordinating capture, metrics and audio."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from .config import CaptureConfig, PlaybackConfig
from .domain import EMPTY_METRICS, Point, WritingMetrics, freeze
from .metrics import MetricsAggregator
from .playback import AudioPort, clamp_volume, playback_rate_for_speed
from .speed import SpeedTracker

logger = logging.getLogger(__name__)

MetricsCallback = Callable[[WritingMetrics], None]


class WritingSession:
    """Owns the stroke collection of one recording and drives its consumers.

    The metrics engine is injected and only ever sees immutable snapshots.
    Streaming speed state for the audio backend lives in ``tracker`` and is
    reset on every pen lift.
    """

    def __init__(
        self,
        aggregator: Optional[MetricsAggregator] = None,
        audio: Optional[AudioPort] = None,
        melody_id: str = "melody1",
        capture: Optional[CaptureConfig] = None,
        playback: Optional[PlaybackConfig] = None,
        on_metrics: Optional[MetricsCallback] = None,
    ) -> None:
        self.aggregator = aggregator or MetricsAggregator()
        self.audio = audio
        self.melody_id = melody_id
        self.capture = capture or CaptureConfig()
        self.playback = playback or PlaybackConfig()
        self.on_metrics = on_metrics

        self.tracker = SpeedTracker()
        self.is_recording = False
        self._strokes: List[List[Point]] = []
        self._metrics = EMPTY_METRICS
        self._last_update_ms: Optional[float] = None

    @property
    def metrics(self) -> WritingMetrics:
        return self._metrics

    def snapshot(self) -> Tuple[Tuple[Point, ...], ...]:
        return freeze(self._strokes)

    def make_point(self, x: float, y: float, t: float, force: Optional[float] = None) -> Point:
        """Build a point, substituting the default force for devices without pressure."""
        return Point(x=x, y=y, t=t, force=self.capture.default_force if force is None else force)

    def start_recording(self) -> None:
        logger.info("Recording started (melody=%s)", self.melody_id)
        if self.audio is not None:
            # cuts any preview still playing
            self.audio.stop()
        self._strokes = []
        self.tracker.reset()
        self._last_update_ms = None
        self.is_recording = True
        self._publish(EMPTY_METRICS)

    def stop_recording(self) -> None:
        logger.info("Recording stopped after %s strokes", len(self._strokes))
        self.is_recording = False
        if self.audio is not None:
            self.audio.pause()

    def select_melody(self, melody_id: str) -> None:
        changed = melody_id != self.melody_id
        self.melody_id = melody_id
        if changed and self.is_recording and self.audio is not None:
            self.audio.play_loop(melody_id)

    def preview_melody(self, melody_id: Optional[str] = None) -> None:
        if self.audio is None or self.is_recording:
            return
        self.audio.play_preview(melody_id or self.melody_id)

    def set_volume(self, volume: float) -> None:
        if self.audio is not None:
            self.audio.update_volume(clamp_volume(volume))

    def pen_down(self, point: Point) -> Optional[WritingMetrics]:
        if not self.is_recording:
            return None

        self._strokes.append([point])
        self.tracker.reset()
        self.tracker.update(point)

        if self.audio is not None and self.melody_id:
            self.audio.play_loop(self.melody_id)

        metrics = self.recompute()
        self._last_update_ms = point.t
        return metrics

    def pen_move(self, point: Point) -> Optional[WritingMetrics]:
        if not self.is_recording or not self._strokes:
            logger.debug("Ignoring move at t=%s without an open stroke", point.t)
            return None

        self._strokes[-1].append(point)

        speed = self.tracker.update(point)
        if speed is not None and self.audio is not None:
            self.audio.update_rate(playback_rate_for_speed(speed, self.playback))

        last = self._last_update_ms
        if last is not None and point.t - last < self.capture.metrics_update_interval_ms:
            logger.debug("Metrics update throttled at t=%s", point.t)
            return None

        metrics = self.recompute()
        self._last_update_ms = point.t
        return metrics

    def pen_up(self) -> Optional[WritingMetrics]:
        if not self.is_recording:
            return None

        self.tracker.reset()
        if self.audio is not None:
            self.audio.pause()

        metrics = self.recompute()
        self._last_update_ms = None
        return metrics

    def recompute(self) -> WritingMetrics:
        metrics = self.aggregator.compute(self.snapshot())
        self._publish(metrics)
        return metrics

    def _publish(self, metrics: WritingMetrics) -> None:
        self._metrics = metrics
        if self.on_metrics is not None:
            self.on_metrics(metrics)
