import pytest

from anima.time.frames import ManualFrameSource
from anima.time.timeline import Timeline


def _timeline(**kwargs):
    frames = ManualFrameSource()
    timeline = Timeline(frames, **kwargs)
    item = timeline.add()
    item.animate({'translate': [100, 0, 0]}, 1000)
    return frames, timeline, item


def test_duration_defaults_to_longest_queue():
    frames, timeline, item = _timeline()
    other = timeline.add()
    other.animate({'opacity': 0}, 400, delay=1000)
    assert timeline.duration == 1400

    assert Timeline(duration=250).duration == 250
    assert Timeline().duration == 0


def test_play_uses_virtual_time():
    frames, timeline, item = _timeline()
    played = []
    timeline.on('play', played.append)

    timeline.play()
    frames.tick(5000)
    assert timeline.current_time == 0
    assert item.state.translate[0] == 0.0

    frames.tick(5500)
    assert timeline.current_time == 500
    assert item.state.translate[0] == pytest.approx(50.0)
    assert played == [0.0]


def test_pause_freezes_time_and_skips_reseek():
    frames, timeline, item = _timeline()
    timeline.play()
    frames.run([0, 400])

    timeline.pause()
    assert not timeline.running
    frames.tick(900)
    assert timeline.current_time == 400
    assert not timeline.dirty
    assert item.state.translate[0] == pytest.approx(40.0)

    timeline.play()
    frames.run([2000, 2100])
    assert timeline.current_time == 500
    assert item.state.translate[0] == pytest.approx(50.0)


def test_seek_marks_dirty_and_scrubs_backwards():
    frames, timeline, item = _timeline(start=True)
    seeks = []
    timeline.on('seek', seeks.append)
    frames.tick(0)

    timeline.seek(750)
    assert timeline.dirty
    frames.tick(10)
    assert item.state.translate[0] == pytest.approx(75.0)
    assert not timeline.dirty

    timeline.seek(-50)
    frames.tick(20)
    assert timeline.current_time == 0.0
    assert item.state.translate[0] == 0.0
    assert seeks == [750.0, 0.0]


def test_stop_rewinds():
    frames, timeline, item = _timeline()
    timeline.play()
    frames.run([0, 600])
    timeline.stop()
    frames.tick(700)

    assert not timeline.running
    assert timeline.current_time == 0.0
    assert item.state.translate[0] == 0.0


def test_reaching_the_end_stops():
    frames, timeline, item = _timeline()
    paused = []
    timeline.on('pause', paused.append)
    timeline.play()
    frames.run([0, 1700])

    assert not timeline.running
    assert timeline.current_time == 1000
    assert item.state.translate[0] == 100.0
    assert paused == [1000]


def test_loop_wraps_around():
    frames, timeline, item = _timeline(loop=True)
    timeline.play()
    frames.run([0, 1250])

    assert timeline.running
    assert timeline.current_time == 250
    assert item.state.translate[0] == pytest.approx(25.0)

    frames.tick(1500)
    assert timeline.current_time == 500


def test_queue_change_while_paused_reseeks():
    frames, timeline, item = _timeline(start=True)
    timeline.seek(1500)
    frames.tick(0)
    assert item.state.translate[0] == 100.0
    assert not timeline.dirty

    item.animate({'translate': [0, 80, 0]}, 1000)
    assert timeline.dirty
    frames.tick(10)
    assert item.state.translate == pytest.approx([100.0, 40.0, 0.0])

    late = timeline.add()
    late.animate({'opacity': 0}, 1000)
    frames.tick(20)
    assert late.state.opacity == 0.0

    item.finish()
    assert timeline.dirty
