"""Data structures for captured handwriting.

The classes carry only data and minimal helpers; the analyzers implement the
behaviour.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .config import DEFAULT_FORCE


@dataclass(frozen=True)
class Point:
    """Single touch sample.

    ``t`` is a timestamp in milliseconds. ``force`` is the normalised pressure
    in [0, 1]; ``None`` marks a device without pressure sensing.
    """

    x: float
    y: float
    t: float
    force: Optional[float] = DEFAULT_FORCE

    def has_valid_force(self) -> bool:
        return (
            isinstance(self.force, (int, float))
            and not isinstance(self.force, bool)
            and math.isfinite(self.force)
        )


Stroke = Sequence[Point]
StrokeCollection = Sequence[Stroke]


def flatten(strokes: StrokeCollection) -> List[Point]:
    """All points of all strokes in chronological order."""
    return [point for stroke in strokes for point in stroke]


def freeze(strokes: StrokeCollection) -> Tuple[Tuple[Point, ...], ...]:
    """Immutable snapshot of a stroke collection."""
    return tuple(tuple(stroke) for stroke in strokes)


# Display names of the record fields, as shown by the summary table
CAMEL_CASE_NAMES: Dict[str, str] = {
    "applied_force": "appliedForce",
    "pause_time": "pauseTime",
    "pause_count": "pauseCount",
    "speed_changes": "speedChanges",
    "fluidity": "fluidity",
    "average_speed": "averageSpeed",
    "direction": "direction",
    "path_length": "pathLength",
    "corrections": "corrections",
    "amplitude": "amplitude",
    "word_length": "wordLength",
}

KINETIC_FIELDS = ("applied_force", "pause_time", "pause_count", "speed_changes", "fluidity")
KINEMATIC_FIELDS = ("average_speed", "direction", "path_length", "corrections", "amplitude", "word_length")

UNITS: Dict[str, str] = {
    "applied_force": "%",
    "pause_time": "ms",
    "pause_count": "",
    "speed_changes": "",
    "fluidity": "/100",
    "average_speed": "px/s",
    "direction": "deg",
    "path_length": "mm",
    "corrections": "",
    "amplitude": "mm",
    "word_length": "mm",
}


@dataclass(frozen=True)
class WritingMetrics:
    """Handwriting metrics of one recording, every field rounded to an int."""

    # Kinetic
    applied_force: int = 0
    pause_time: int = 0
    pause_count: int = 0
    speed_changes: int = 0
    fluidity: int = 0

    # Kinematic
    average_speed: int = 0
    direction: int = 0
    path_length: int = 0
    corrections: int = 0
    amplitude: int = 0
    word_length: int = 0

    @classmethod
    def empty(cls) -> "WritingMetrics":
        return EMPTY_METRICS

    def is_empty(self) -> bool:
        return self == EMPTY_METRICS

    def to_dict(self, camel_case: bool = False) -> Dict[str, int]:
        data = asdict(self)
        if camel_case:
            return {CAMEL_CASE_NAMES[key]: value for key, value in data.items()}
        return data


EMPTY_METRICS = WritingMetrics()
