import pytest

from strokemetrics.config import MetricsConfig
from strokemetrics.domain import Point
from strokemetrics.speed import (
    SEGMENT_COLUMNS,
    SpeedAnalyzer,
    SpeedTracker,
    compute_speed_stats,
    instantaneous_speed,
    segment_frame,
)


def test_speed_and_distance_of_single_segment(make_stroke):
    stats = compute_speed_stats([make_stroke([(0, 0, 0), (100, 0, 1000)])])

    assert stats.total_distance == pytest.approx(100.0)
    assert stats.speeds == pytest.approx((100.0,))
    assert stats.sudden_changes == 0


def test_speed_jump_counts_one_sudden_change(make_stroke):
    # 100 px/s then 900 px/s
    stats = compute_speed_stats([make_stroke([(0, 0, 0), (10, 0, 100), (100, 0, 200)])])

    assert stats.speeds == pytest.approx((100.0, 900.0))
    assert stats.sudden_changes == 1


def test_non_positive_time_delta_is_skipped(make_stroke):
    stroke = make_stroke([(0, 0, 0), (10, 0, 0), (20, 0, 100), (25, 0, 90)])

    stats = compute_speed_stats([stroke])

    assert stats.speeds == pytest.approx((100.0,))
    assert stats.total_distance == pytest.approx(10.0)


def test_last_speed_carries_across_pen_lift(make_stroke):
    fast = make_stroke([(0, 0, 0), (100, 0, 100)])
    slow = make_stroke([(0, 50, 400), (10, 50, 500)])
    also_fast = make_stroke([(0, 80, 800), (100, 80, 900)])

    assert compute_speed_stats([fast, slow]).sudden_changes == 1
    assert compute_speed_stats([fast, also_fast]).sudden_changes == 0


def test_single_point_strokes_have_no_segments(make_stroke):
    stats = compute_speed_stats([make_stroke([(0, 0, 0)]), make_stroke([(5, 5, 10)])])

    assert stats.speeds == ()
    assert stats.total_distance == 0.0
    assert compute_speed_stats([]).sudden_changes == 0


def test_custom_change_threshold(make_stroke):
    stroke = make_stroke([(0, 0, 0), (10, 0, 100), (40, 0, 200)])
    analyzer = SpeedAnalyzer(MetricsConfig(speed_change_threshold_px_per_sec=150))

    assert analyzer.analyze([stroke]).sudden_changes == 1


def test_segment_frame_lists_usable_segments(make_stroke):
    strokes = [
        make_stroke([(0, 0, 0), (10, 0, 100), (100, 0, 200)]),
        make_stroke([(0, 0, 500), (0, 0, 500)]),
    ]

    frame = segment_frame(strokes)

    assert list(frame.columns) == SEGMENT_COLUMNS
    assert frame["stroke"].tolist() == [0, 0]
    assert frame["t_end_ms"].tolist() == [100.0, 200.0]
    assert frame["sudden_change"].tolist() == [False, True]


def test_segment_frame_of_empty_collection():
    frame = segment_frame([])

    assert frame.empty
    assert list(frame.columns) == SEGMENT_COLUMNS


def test_instantaneous_speed():
    assert instantaneous_speed(None, Point(0, 0, 0)) is None
    assert instantaneous_speed(Point(0, 0, 10), Point(5, 0, 10)) is None
    assert instantaneous_speed(Point(0, 0, 0), Point(3, 4, 10)) == pytest.approx(500.0)


def test_speed_tracker_keeps_last_point():
    tracker = SpeedTracker()

    assert tracker.update(Point(0, 0, 0)) is None
    assert tracker.update(Point(10, 0, 20)) == pytest.approx(500.0)

    tracker.reset()
    assert tracker.last_point is None
    assert tracker.update(Point(20, 0, 40)) is None
