import pytest

from strokemetrics.config import CaptureConfig
from strokemetrics.domain import EMPTY_METRICS, Point
from strokemetrics.metrics import compute_metrics
from strokemetrics.playback import clamp_volume, playback_rate_for_speed
from strokemetrics.session import WritingSession


class FakeAudio:
    def __init__(self):
        self.calls = []

    def play_loop(self, melody_id):
        self.calls.append(("play_loop", melody_id))

    def play_preview(self, melody_id):
        self.calls.append(("play_preview", melody_id))

    def update_rate(self, rate):
        self.calls.append(("update_rate", rate))

    def update_volume(self, volume):
        self.calls.append(("update_volume", volume))

    def pause(self):
        self.calls.append(("pause",))

    def stop(self):
        self.calls.append(("stop",))

    def names(self):
        return [call[0] for call in self.calls]


def replay(session, strokes):
    for stroke in strokes:
        session.pen_down(stroke[0])
        for point in stroke[1:]:
            session.pen_move(point)
        session.pen_up()


def test_input_is_ignored_until_recording_starts():
    session = WritingSession()

    assert session.pen_down(Point(0, 0, 0)) is None
    assert session.pen_move(Point(1, 0, 10)) is None
    assert session.snapshot() == ()


def test_session_metrics_match_engine(word_strokes):
    session = WritingSession()
    session.start_recording()

    replay(session, word_strokes)

    assert session.snapshot() == tuple(tuple(s) for s in word_strokes)
    assert session.metrics == compute_metrics(word_strokes)


def test_result_does_not_depend_on_update_interval(word_strokes):
    every_point = WritingSession(capture=CaptureConfig(metrics_update_interval_ms=0))
    throttled = WritingSession(capture=CaptureConfig(metrics_update_interval_ms=1000))
    for session in (every_point, throttled):
        session.start_recording()
        replay(session, word_strokes)

    assert every_point.metrics == throttled.metrics


def test_moves_are_throttled():
    published = []
    session = WritingSession(on_metrics=published.append)
    session.start_recording()

    session.pen_down(Point(0, 0, 0))
    assert session.pen_move(Point(5, 0, 20)) is None
    assert session.pen_move(Point(10, 0, 60)) is not None
    assert session.pen_move(Point(15, 0, 80)) is None
    session.pen_up()

    # start, pen down, one unthrottled move, pen up
    assert len(published) == 4
    assert published[0] == EMPTY_METRICS
    assert published[-1] == compute_metrics(session.snapshot())


def test_move_after_pen_up_without_new_stroke_is_appended_to_last_stroke():
    session = WritingSession()
    session.start_recording()
    session.pen_down(Point(0, 0, 0))
    session.pen_up()

    session.pen_move(Point(10, 0, 100))

    assert len(session.snapshot()) == 1
    assert len(session.snapshot()[0]) == 2


def test_start_recording_resets_strokes():
    session = WritingSession()
    session.start_recording()
    replay(session, [[Point(0, 0, 0), Point(50, 0, 100)]])
    assert not session.metrics.is_empty()

    session.start_recording()

    assert session.snapshot() == ()
    assert session.metrics == EMPTY_METRICS
    assert session.tracker.last_point is None


def test_audio_follows_pen_activity():
    audio = FakeAudio()
    session = WritingSession(audio=audio, melody_id="melody3")
    session.start_recording()

    session.pen_down(Point(0, 0, 0))
    session.pen_move(Point(30, 0, 20))
    session.pen_up()
    session.stop_recording()

    assert audio.names() == ["stop", "play_loop", "update_rate", "pause", "pause"]
    assert audio.calls[1] == ("play_loop", "melody3")
    # 1500 px/s is the top of the rate range
    assert audio.calls[2][1] == pytest.approx(1.6)


def test_no_rate_update_for_duplicate_timestamps():
    audio = FakeAudio()
    session = WritingSession(audio=audio)
    session.start_recording()

    session.pen_down(Point(0, 0, 0))
    session.pen_move(Point(10, 0, 0))

    assert "update_rate" not in audio.names()


def test_streaming_speed_restarts_after_pen_up():
    audio = FakeAudio()
    session = WritingSession(audio=audio)
    session.start_recording()
    replay(session, [[Point(0, 0, 0), Point(10, 0, 100)]])

    session.pen_down(Point(500, 0, 200))
    session.pen_move(Point(510, 0, 300))

    rates = [call[1] for call in audio.calls if call[0] == "update_rate"]
    # the jump between strokes never reaches the audio backend
    assert rates == pytest.approx([playback_rate_for_speed(100.0)] * 2)


def test_melody_selection_and_preview():
    audio = FakeAudio()
    session = WritingSession(audio=audio)

    session.preview_melody("melody2")
    session.select_melody("melody4")
    session.start_recording()
    session.preview_melody()
    session.select_melody("melody5")

    assert audio.calls == [
        ("play_preview", "melody2"),
        ("stop",),
        ("play_loop", "melody5"),
    ]


def test_make_point_uses_default_force():
    session = WritingSession(capture=CaptureConfig(default_force=0.4))

    assert session.make_point(1, 2, 3).force == 0.4
    assert session.make_point(1, 2, 3, force=0.9).force == 0.9


@pytest.mark.parametrize(
    "speed, rate",
    [(0, 0.8), (-20, 0.8), (750, 1.2), (1500, 1.6), (6000, 1.6)],
)
def test_playback_rate_for_speed(speed, rate):
    assert playback_rate_for_speed(speed) == pytest.approx(rate)


def test_clamp_volume():
    assert clamp_volume(1.4) == 1.0
    assert clamp_volume(-0.1) == 0.0
    assert clamp_volume(0.3) == 0.3


def test_volume_is_clamped_before_reaching_audio():
    audio = FakeAudio()
    session = WritingSession(audio=audio)

    session.set_volume(1.7)
    session.set_volume(0.25)

    assert audio.calls == [("update_volume", 1.0), ("update_volume", 0.25)]
