import pytest

from anima.time.frames import ManualFrameSource
from anima.time.world import Scheduler, World


def test_start_requests_one_frame_per_tick():
    frames = ManualFrameSource()
    world = World(frames)
    assert frames.pending == 0

    world.start()
    world.start()
    assert frames.pending == 1

    frames.tick(0)
    assert frames.pending == 1
    assert world.looping


def test_world_drives_items():
    frames = ManualFrameSource()
    world = World(frames, start=True)
    a = world.add()
    b = world.add('label')
    a.animate({'translate': [100, 0, 0]}, 1000)
    b.animate({'opacity': 0}, 500)

    seen = []
    world.on('frame', seen.append)

    frames.run([0, 250, 500])
    assert a.state.translate[0] == pytest.approx(50.0)
    assert b.state.opacity == 0.0
    assert (a.index, b.index) == (0, 1)
    assert b.target == 'label'

    assert [f.frame_id for f in seen] == [1, 2, 3]
    assert seen[-1].dt == 250
    assert seen[-1].fps == pytest.approx(4.0)


def test_update_returns_snapshots():
    world = World()
    world.add().translate([1, 2, 3])
    world.add()
    snapshots = world.update(10)
    assert [s.index for s in snapshots] == [0, 1]
    assert snapshots[0].matrix[12:15] == (1.0, 2.0, 3.0)


def test_pause_and_resume():
    frames = ManualFrameSource()
    world = World(frames, start=True)
    item = world.add()
    item.animate({'translate': [100, 0, 0]}, 1000)
    events = []
    world.on('pause', lambda tick: events.append(('pause', tick)))
    world.on('resume', lambda: events.append('resume'))

    frames.run([0, 300])
    world.pause()
    assert frames.pending == 0
    assert not world.looping
    assert not item.running

    frames.tick(2000)
    assert item.state.translate[0] == pytest.approx(30.0)

    world.resume()
    frames.run([5000, 5200])
    assert item.state.translate[0] == pytest.approx(50.0)
    assert events == [('pause', 300), 'resume']


def test_stop_aborts_every_item():
    frames = ManualFrameSource()
    world = World(frames, start=True)
    item = world.add()
    item.animate({'translate': [100, 0, 0]}, 1000).infinite()
    stopped = []
    world.on('stop', lambda: stopped.append(True))

    frames.run([0, 600])
    world.stop()

    assert not item.animations
    assert not item.infinite
    assert item.state.translate[0] == pytest.approx(60.0)
    assert frames.pending == 0
    assert stopped == [True]


def test_cancel_drops_pending_request():
    frames = ManualFrameSource()
    world = World(frames, start=True)
    world.cancel()
    assert frames.pending == 0
    assert frames.tick(0) == 0


def test_scheduler_is_abstract():
    with pytest.raises(TypeError):
        Scheduler()
