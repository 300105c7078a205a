"""Command line interface for stroke metrics."""
from __future__ import annotations

import argparse
import json
import logging

from .batch import compute_metrics_for_files
from .config import MetricsConfig
from .metrics import MetricsAggregator
from .plotting import PlotConfig, StrokePlotter
from .speed import segment_frame
from .tables import load_strokes, metrics_frame


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Handwriting stroke metrics")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    metrics = sub.add_parser("metrics", help="Compute the metrics of one capture")
    metrics.add_argument("input", help="TSV/CSV with stroke, x, y, t[, force] columns")
    metrics.add_argument("--format", choices=["table", "json"], default="table", help="Output format")
    metrics.add_argument(
        "--pause-threshold",
        type=float,
        default=MetricsConfig.pause_threshold_ms,
        help="Minimum gap between strokes counted as a pause (ms)",
    )
    metrics.add_argument(
        "--speed-change-threshold",
        type=float,
        default=MetricsConfig.speed_change_threshold_px_per_sec,
        help="Speed difference counted as a sudden change (px/s)",
    )

    segments = sub.add_parser("segments", help="Print the per-segment speed table")
    segments.add_argument("input", help="TSV/CSV with stroke, x, y, t[, force] columns")

    plot = sub.add_parser("plot", help="Plot the trace and its speed profile")
    plot.add_argument("input", help="TSV/CSV with stroke, x, y, t[, force] columns")
    plot.add_argument("output", help="Path to write the generated plot (png or pdf)")
    plot.add_argument(
        "--figsize",
        nargs=2,
        type=float,
        metavar=("WIDTH", "HEIGHT"),
        default=(10.0, 6.0),
        help="Figure size in inches (width height)",
    )
    plot.add_argument("--dpi", type=float, default=None, help="Optional DPI override for the figure")
    plot.add_argument(
        "--show",
        action="store_true",
        help="Display the plot window in addition to saving the file (uses your default backend)",
    )

    batch = sub.add_parser("batch", help="Compute metrics for several captures, one row per file")
    batch.add_argument("inputs", nargs="+", help="Capture files")
    batch.add_argument("--jobs", type=int, default=1, help="Parallel jobs (requires joblib when != 1)")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "metrics":
        cfg = MetricsConfig(
            pause_threshold_ms=args.pause_threshold,
            speed_change_threshold_px_per_sec=args.speed_change_threshold,
        )
        result = MetricsAggregator(cfg).compute(load_strokes(args.input))
        if args.format == "json":
            print(json.dumps(result.to_dict(camel_case=True), indent=2))
        else:
            print(metrics_frame(result).to_string(index=False))
        return

    if args.command == "segments":
        print(segment_frame(load_strokes(args.input)).to_string(index=False))
        return

    if args.command == "plot":
        cfg = PlotConfig(figsize=tuple(args.figsize), dpi=args.dpi, show=args.show)
        StrokePlotter(cfg).plot(load_strokes(args.input), args.output)
        return

    if args.command == "batch":
        print(compute_metrics_for_files(args.inputs, n_jobs=args.jobs).to_string(index=False))
        return


if __name__ == "__main__":
    main()
