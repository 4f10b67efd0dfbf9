import logging

from anima.core.signal import SignalBridge, SignalDebugger, SignalEmitter


class Thing(SignalEmitter):
    pass


def test_on_emit_off():
    thing = Thing()
    seen = []

    def handler(*args):
        seen.append(args)

    thing.on('start', handler)
    thing.emit('start', 1, 2)
    assert seen == [(1, 2)]

    assert thing.off('start', handler) is thing
    thing.emit('start', 3)
    assert seen == [(1, 2)]


def test_listeners_are_per_instance():
    a, b = Thing(), Thing()
    seen = []
    a.on('end', lambda: seen.append('a'))

    b.emit('end')
    assert seen == []
    a.emit('end')
    assert seen == ['a']


def test_emit_without_listeners_is_noop():
    thing = Thing()
    thing.emit('render', object())
    assert thing._bridge is None


def test_handler_error_is_logged(caplog):
    thing = Thing()
    seen = []

    def broken():
        raise RuntimeError("boom")

    thing.on('end', broken)
    thing.on('end', lambda: seen.append('next'))

    with caplog.at_level(logging.ERROR, logger='anima.core.signal'):
        thing.emit('end')

    assert seen == ['next']
    assert "boom" in caplog.text


def test_disconnect_during_emit_is_deferred():
    bridge = SignalBridge()
    seen = []

    def first():
        seen.append('first')
        bridge.disconnect('tick')

    bridge.connect('tick', first)
    bridge.connect('tick', lambda: seen.append('second'))

    bridge.emit('tick')
    assert seen == ['first', 'second']

    bridge.emit('tick')
    assert seen == ['first', 'second']
    assert not bridge.is_connected('tick')


def test_connection_handle_disconnects():
    bridge = SignalBridge()
    seen = []
    conn = bridge.connect('seek', seen.append)

    bridge.emit('seek', 10)
    conn.disconnect()
    bridge.emit('seek', 20)

    assert seen == [10]


def test_debugger_logs_watched_signals(caplog):
    bridge = SignalBridge()
    bridge.connect('play', lambda t: None)
    debugger = SignalDebugger(bridge)
    debugger.watch('play')

    with caplog.at_level(logging.DEBUG, logger='anima.core.signal'):
        bridge.emit('play', 250)
        bridge.emit('pause', 300)

    assert "SIGNAL: play(250)" in caplog.text
    assert "pause" not in caplog.text

    debugger.detach()
    caplog.clear()
    with caplog.at_level(logging.DEBUG, logger='anima.core.signal'):
        bridge.emit('play', 400)
    assert "SIGNAL" not in caplog.text
