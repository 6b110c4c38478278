import pytest

from huehunt import Phase, SessionController
from huehunt.const import INITIAL_TIME, MAX_TIME

from conftest import wrong_index


def test_initial_state(controller):
    snap = controller.snapshot()
    assert snap.phase is Phase.NotStarted
    assert snap.score == 0
    assert snap.best_score == 0
    assert snap.round is None


def test_start_resets_everything(controller, scheduler):
    snap = controller.start()
    assert snap.phase is Phase.Active
    assert snap.score == 0
    assert snap.time_remaining == INITIAL_TIME == 15
    assert snap.round.grid_size == 2
    assert len(snap.round.tiles) == 4
    assert len(scheduler) == 1


def test_correct_guess_scores_adds_time_and_replaces_round(controller):
    controller.start()
    before = controller.round
    assert controller.guess(before.target_index) is True
    assert controller.score == 1
    assert controller.time_remaining == 17
    assert controller.round is not before


def test_second_point_grows_grid_to_three(controller):
    controller.start()
    controller.guess(controller.round.target_index)
    assert controller.round.grid_size == 2
    controller.guess(controller.round.target_index)
    assert controller.score == 2
    assert controller.round.grid_size == 3
    assert controller.round.total_tiles == 9


def test_time_bonus_caps_at_thirty(controller):
    controller.start()
    controller.time_remaining = 29
    controller.guess(controller.round.target_index)
    assert controller.time_remaining == MAX_TIME == 30


def test_wrong_guess_costs_three_seconds_only(controller):
    controller.start()
    rnd = controller.round
    assert controller.guess(wrong_index(rnd)) is True
    assert controller.time_remaining == 12
    assert controller.score == 0
    assert controller.round is rnd


def test_wrong_guess_floors_at_zero_without_ending(controller):
    controller.start()
    controller.time_remaining = 2
    controller.guess(wrong_index(controller.round))
    assert controller.time_remaining == 0
    assert controller.phase is Phase.Active
    # the next tick ends it
    controller.tick()
    assert controller.phase is Phase.Ended
    assert controller.time_remaining == 0


@pytest.mark.parametrize("index", [-1, 4, 100, 1.0, "0", None, True])
def test_out_of_range_guess_is_ignored(controller, index):
    controller.start()
    rnd = controller.round
    assert controller.guess(index) is False
    assert controller.snapshot().time_remaining == INITIAL_TIME
    assert controller.round is rnd


def test_guess_before_start_is_ignored(controller):
    assert controller.guess(0) is False
    snap = controller.snapshot()
    assert snap.phase is Phase.NotStarted
    assert snap.score == 0
    assert snap.time_remaining == INITIAL_TIME
    assert snap.round is None


def test_guess_after_game_over_is_ignored(controller, scheduler):
    controller.start()
    scheduler.advance(INITIAL_TIME * 1000)
    before = controller.snapshot()
    assert before.phase is Phase.Ended
    for i in range(4):
        assert controller.guess(i) is False
    assert controller.snapshot() == before


def test_tick_counts_down_once_per_second(controller, scheduler):
    controller.start()
    scheduler.advance(999)
    assert controller.time_remaining == 15
    scheduler.advance(1)
    assert controller.time_remaining == 14
    scheduler.advance(3000)
    assert controller.time_remaining == 11


def test_last_second_ends_the_session(controller):
    controller.start()
    controller.time_remaining = 1
    controller.tick()
    assert controller.time_remaining == 0
    assert controller.phase is Phase.Ended
    assert controller.round is None


def test_countdown_stops_after_game_over(controller, scheduler):
    controller.start()
    scheduler.advance(INITIAL_TIME * 1000)
    assert controller.phase is Phase.Ended
    assert len(scheduler) == 0

    scheduler.advance(10_000)
    assert controller.time_remaining == 0
    assert controller.phase is Phase.Ended


def test_game_over_happens_exactly_once(controller, scheduler, monkeypatch):
    ended = []
    original = controller._end
    monkeypatch.setattr(controller, "_end", lambda: (ended.append(1), original()))
    controller.start()
    # one big frame spanning more than the whole countdown
    scheduler.advance(60_000)
    assert ended == [1]


def test_tick_outside_active_is_ignored(controller):
    controller.tick()
    assert controller.time_remaining == INITIAL_TIME
    assert controller.phase is Phase.NotStarted


def test_restart_mid_game_cancels_previous_countdown(controller, scheduler):
    controller.start()
    controller.guess(controller.round.target_index)
    scheduler.advance(500)

    controller.start()
    assert controller.score == 0
    assert controller.time_remaining == 15
    assert controller.round.grid_size == 2
    assert len(scheduler) == 1

    scheduler.advance(1000)
    # one countdown only; a leaked one would have taken two seconds
    assert controller.time_remaining == 14


def test_restart_after_game_over(controller, scheduler):
    controller.start()
    scheduler.advance(INITIAL_TIME * 1000)
    snap = controller.start()
    assert snap.phase is Phase.Active
    assert snap.time_remaining == 15
    scheduler.advance(1000)
    assert controller.time_remaining == 14


def test_best_score_updates_only_when_session_ends(controller, scheduler):
    controller.start()
    for _ in range(3):
        controller.guess(controller.round.target_index)
    assert controller.best_score == 0

    controller.time_remaining = 1
    controller.tick()
    assert controller.best_score == 3


def test_best_score_never_decreases(controller):
    controller.start()
    for _ in range(4):
        controller.guess(controller.round.target_index)
    controller.time_remaining = 1
    controller.tick()
    assert controller.best_score == 4

    controller.start()
    controller.guess(controller.round.target_index)
    controller.time_remaining = 1
    controller.tick()
    assert controller.score == 1
    assert controller.best_score == 4


def test_restart_without_ending_does_not_record_best(controller):
    controller.start()
    for _ in range(5):
        controller.guess(controller.round.target_index)
    controller.start()
    assert controller.best_score == 0


def test_best_score_is_shared_across_controllers(scheduler, rng):
    first = SessionController(scheduler, rng=rng)
    first.start()
    first.guess(first.round.target_index)
    first.time_remaining = 1
    first.tick()

    second = SessionController(scheduler, rng=rng)
    assert second.snapshot().best_score == 1


def test_each_controller_owns_its_countdown(scheduler, rng):
    a = SessionController(scheduler, rng=rng)
    b = SessionController(scheduler, rng=rng)
    a.start()
    scheduler.advance(2000)
    b.start()
    scheduler.advance(1000)
    assert a.time_remaining == 12
    assert b.time_remaining == 14
    a.close()
    b.close()


def test_snapshot_derived_fields(controller):
    controller.start()
    for _ in range(6):
        controller.guess(controller.round.target_index)
    snap = controller.snapshot()
    assert snap.grid_size == 4
    assert snap.delta == 13
    assert snap.rank == "Color Novice"


def test_close_cancels_countdown(controller, scheduler):
    controller.start()
    controller.close()
    scheduler.advance(5000)
    assert controller.time_remaining == 15
    assert len(scheduler) == 0
