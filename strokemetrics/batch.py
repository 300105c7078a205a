"""Metrics over many exported captures at once."""
from __future__ import annotations

import logging
from importlib import import_module
from pathlib import Path
from typing import Dict, Optional, Sequence

import pandas as pd

from .config import MetricsConfig
from .metrics import MetricsAggregator
from .tables import load_strokes

logger = logging.getLogger(__name__)


def _metrics_row(path: str | Path, cfg: Optional[MetricsConfig]) -> Dict[str, object]:
    metrics = MetricsAggregator(cfg).compute(load_strokes(path))
    return {"file": str(path), **metrics.to_dict(camel_case=True)}


def compute_metrics_for_files(
    paths: Sequence[str | Path],
    n_jobs: int = 1,
    cfg: Optional[MetricsConfig] = None,
) -> pd.DataFrame:
    """One metrics row per file.

    Files are independent, so with ``n_jobs != 1`` they are processed in
    parallel through joblib (``pip install stroke-metrics[parallel]``).
    """

    if n_jobs == 1 or len(paths) < 2:
        rows = [_metrics_row(path, cfg) for path in paths]
    else:
        try:
            joblib = import_module("joblib")
        except ModuleNotFoundError as exc:
            raise ModuleNotFoundError(
                "joblib is required for n_jobs != 1; install via `pip install stroke-metrics[parallel]`."
            ) from exc
        logger.info("Computing metrics for %s files with n_jobs=%s", len(paths), n_jobs)
        rows = joblib.Parallel(n_jobs=n_jobs)(joblib.delayed(_metrics_row)(path, cfg) for path in paths)

    return pd.DataFrame(rows)
