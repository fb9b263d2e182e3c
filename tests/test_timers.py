from __future__ import annotations

from memorymatch.services.timers import DEFAULT_REVEAL_DELAY, RevealTimer, Stopwatch

from _helpers import ordered_game


def test_reveal_timer_fires_once_after_delay() -> None:
    timer = RevealTimer(delay=0.5)
    assert not timer.update(1.0)  # not armed

    timer.arm()
    assert timer.armed
    assert not timer.update(0.2)
    assert not timer.update(0.2)
    assert timer.update(0.2)
    assert not timer.armed
    assert not timer.update(0.2)


def test_cancelled_timer_does_not_fire() -> None:
    timer = RevealTimer()
    assert timer.delay == DEFAULT_REVEAL_DELAY
    timer.arm()
    timer.cancel()
    assert not timer.update(10.0)


def test_timer_drives_a_single_resolve() -> None:
    game = ordered_game(pair_count=2, player_count=2)
    timer = RevealTimer(delay=0.5)
    game.select_card(0)
    game.select_card(2)
    if game.phase == "resolving":
        timer.arm()

    resolved = 0
    for _ in range(60):  # one second of frames
        if timer.update(1 / 60):
            assert game.resolve_pending_selection().ok
            resolved += 1
    assert resolved == 1
    assert game.state.current_player == 1


def test_stopwatch_counts_until_stopped() -> None:
    watch = Stopwatch()
    watch.update(61.5)
    assert watch.format_elapsed() == "1:01"
    watch.stop()
    watch.update(30.0)
    assert watch.elapsed == 61.5

    watch.restart()
    assert watch.elapsed == 0.0
    watch.update(9.0)
    assert watch.format_elapsed() == "0:09"
