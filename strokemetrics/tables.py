"""Tabular views of strokes and metrics, and loading of exported captures."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Tuple

import pandas as pd

from .domain import (
    CAMEL_CASE_NAMES,
    KINEMATIC_FIELDS,
    KINETIC_FIELDS,
    UNITS,
    Point,
    StrokeCollection,
    WritingMetrics,
)

logger = logging.getLogger(__name__)

# Accepted header spellings for each slim column, first match wins
COLUMN_ALIASES: Dict[str, Tuple[str, ...]] = {
    "stroke": ("stroke", "stroke_id", "stroke_index"),
    "x": ("x", "x_px"),
    "y": ("y", "y_px"),
    "t": ("t", "time_ms", "timestamp"),
    "force": ("force", "pressure"),
}
REQUIRED_COLUMNS = ("stroke", "x", "y", "t")
STROKE_COLUMNS = ["stroke", "x", "y", "t", "force"]


def _rename_columns(df: pd.DataFrame) -> pd.DataFrame:
    renames = {}
    for name, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in df.columns:
                renames[alias] = name
                break
    df = df.rename(columns=renames)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")
    return df


def frame_to_strokes(df: pd.DataFrame) -> List[List[Point]]:
    """Group a long-form point table into strokes.

    Strokes keep the order in which their ids first appear; points are sorted
    by time within a stroke. Empty force cells become "no force".
    """

    df = _rename_columns(df)
    if df["stroke"].isna().any():
        raise ValueError("Column stroke must be set in every row.")
    for col in ("x", "y", "t"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    if df[["x", "y", "t"]].isna().any().any():
        raise ValueError("Columns x, y and t must be numeric in every row.")
    has_force = "force" in df.columns
    if has_force:
        df["force"] = pd.to_numeric(df["force"], errors="coerce")

    strokes: List[List[Point]] = []
    for _, group in df.groupby("stroke", sort=False):
        group = group.sort_values("t", kind="stable")
        forces = group["force"].tolist() if has_force else [None] * len(group)
        strokes.append(
            [
                Point(x=float(x), y=float(y), t=float(t), force=None if pd.isna(f) else float(f))
                for x, y, t, f in zip(group["x"], group["y"], group["t"], forces)
            ]
        )
    return strokes


def load_strokes(path: str | Path) -> List[List[Point]]:
    """Read a TSV (or CSV) export with one row per point."""

    path = Path(path)
    sep = "," if path.suffix.lower() == ".csv" else "\t"
    df = pd.read_csv(path, sep=sep)
    strokes = frame_to_strokes(df)
    logger.info("Loaded %s strokes (%s points) from %s", len(strokes), len(df), path)
    return strokes


def strokes_to_frame(strokes: StrokeCollection) -> pd.DataFrame:
    rows = [
        {"stroke": index, "x": p.x, "y": p.y, "t": p.t, "force": p.force}
        for index, stroke in enumerate(strokes)
        for p in stroke
    ]
    return pd.DataFrame(rows, columns=STROKE_COLUMNS)


def metrics_frame(metrics: WritingMetrics) -> pd.DataFrame:
    """Summary table grouped into kinetic and kinematic metrics."""

    values = metrics.to_dict()
    rows = [
        {"group": group, "metric": CAMEL_CASE_NAMES[name], "value": values[name], "unit": UNITS[name]}
        for group, names in (("Kinetic", KINETIC_FIELDS), ("Kinematic", KINEMATIC_FIELDS))
        for name in names
    ]
    return pd.DataFrame(rows, columns=["group", "metric", "value", "unit"])
