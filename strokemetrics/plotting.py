"""Visualization helpers for stroke metrics."""
from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from pathlib import Path
from typing import Optional

from .config import MetricsConfig
from .domain import StrokeCollection
from .speed import SpeedAnalyzer


@dataclass(frozen=True)
class PlotConfig:
    """Configuration for trace and speed profile figures."""

    show_threshold: bool = True
    mark_sudden_changes: bool = True
    figsize: tuple[float, float] = (10.0, 6.0)
    dpi: float | None = None
    tight_layout: bool = True
    show: bool = False


class StrokePlotter:
    """Plot the trajectory of each stroke above the segment speed profile."""

    def __init__(self, config: PlotConfig | None = None, metrics_config: Optional[MetricsConfig] = None) -> None:
        self.config = config or PlotConfig()
        self.speed_analyzer = SpeedAnalyzer(metrics_config)

    def plot(self, strokes: StrokeCollection, output_path: str | Path | None = None) -> Path:
        cfg = self.config
        if not any(len(stroke) for stroke in strokes):
            raise ValueError("Nothing to plot: the stroke collection has no points.")

        try:
            matplotlib = import_module("matplotlib")
            if not cfg.show:
                matplotlib.use("Agg")
            plt = import_module("matplotlib.pyplot")
        except ModuleNotFoundError as exc:  # pragma: no cover - dependency is optional in CI
            raise ModuleNotFoundError(
                "matplotlib is required for plotting; install via `pip install stroke-metrics[plot]`."
            ) from exc

        segments = self.speed_analyzer.segments(strokes)
        fig, (ax_trace, ax_speed) = plt.subplots(2, 1, figsize=cfg.figsize, dpi=cfg.dpi)
        try:
            for index, stroke in enumerate(strokes):
                if not stroke:
                    continue
                ax_trace.plot([p.x for p in stroke], [p.y for p in stroke], marker=".", label=f"stroke {index}")
            # screen coordinates: y grows downward
            ax_trace.invert_yaxis()
            ax_trace.set_aspect("equal", adjustable="datalim")
            ax_trace.set_xlabel("x (px)")
            ax_trace.set_ylabel("y (px)")

            for index, group in segments.groupby("stroke"):
                ax_speed.step(group["t_end_ms"], group["speed_px_per_sec"], where="pre", label=f"stroke {index}")
            if cfg.mark_sudden_changes and not segments.empty:
                jumps = segments[segments["sudden_change"]]
                ax_speed.scatter(
                    jumps["t_end_ms"], jumps["speed_px_per_sec"], color="red", zorder=3, label="sudden change"
                )
            if cfg.show_threshold:
                threshold = self.speed_analyzer.config.speed_change_threshold_px_per_sec
                ax_speed.axhline(threshold, color="gray", linestyle="--", label="change threshold")
            ax_speed.set_xlabel("time (ms)")
            ax_speed.set_ylabel("px/sec")
            ax_speed.legend()

            if cfg.tight_layout:
                plt.tight_layout()

            output_path = Path(output_path or "strokes.png")
            fig.savefig(output_path)
            if cfg.show:  # pragma: no cover - UI-driven choice
                plt.show()
        finally:
            plt.close(fig)
        return output_path


__all__ = ["StrokePlotter", "PlotConfig"]
