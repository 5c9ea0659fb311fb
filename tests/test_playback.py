from core.frame_loop import FrameLoop
from core.time_controller import PlaybackController


def test_playback_defaults_to_playing():
    pc = PlaybackController()
    assert pc.playing and not pc.paused
    assert pc.label == "PAUSE"


def test_toggle_and_labels():
    pc = PlaybackController()
    assert pc.toggle() is False
    assert pc.label == "PLAY"
    assert pc.toggle() is True
    pc.pause()
    assert pc.paused
    pc.play()
    assert pc.playing


def test_step_counts_ticks_only_while_playing():
    pc = PlaybackController(playing=False)
    assert pc.step() is False
    pc.play()
    assert pc.step() is True
    assert pc.step() is True
    assert (pc.frames, pc.ticks) == (3, 2)


def test_frame_loop_order_and_bound():
    calls = []
    loop = FrameLoop(lambda: calls.append("wait") or 0.016,
                     lambda dt: calls.append(("advance", dt)),
                     lambda: calls.append("emit"))
    assert loop.run(max_frames=2) == 2
    assert calls == ["wait", ("advance", 0.016), "emit"] * 2
    assert loop.frames == 2
    assert not loop.running


def test_frame_loop_stop_finishes_current_frame():
    emitted = []
    loop = None

    def advance(dt):
        if loop.frames == 4:
            loop.stop()

    loop = FrameLoop(lambda: 0.0, advance, lambda: emitted.append(loop.frames))
    assert loop.run() == 5
    assert emitted == [0, 1, 2, 3, 4]
