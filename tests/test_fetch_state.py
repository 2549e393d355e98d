import time

import pytest

from nexus_prover.fetch_state import TaskFetchState

BACKOFF = 120.0
FETCH_TASK_DELAY_TIME = 10
LOW_WATER_MARK = 1


def make_state(backoff=BACKOFF):
    return TaskFetchState(backoff, FETCH_TASK_DELAY_TIME, LOW_WATER_MARK)


def test_set_backoff_from_server():
    state = make_state()

    state.set_backoff_from_server(60)
    assert state.backoff_duration() == 60 + FETCH_TASK_DELAY_TIME

    state.set_backoff_from_server(300)
    assert state.backoff_duration() == 300 + FETCH_TASK_DELAY_TIME

    state.set_backoff_from_server(0)
    assert state.backoff_duration() == FETCH_TASK_DELAY_TIME


def test_server_retry_times_respected():
    state = make_state()
    state.set_backoff_from_server(3600)
    assert state.backoff_duration() == 3600 + FETCH_TASK_DELAY_TIME


def test_initial_backoff_is_base():
    assert make_state().backoff_duration() == BACKOFF


def test_first_fetch_allowed_immediately():
    state = make_state()
    assert state.can_fetch_now() is True
    assert state.should_fetch(0) is True


def test_fetch_blocked_after_attempt():
    state = make_state()
    state.record_fetch_attempt()
    assert state.can_fetch_now() is False
    assert state.should_fetch(0) is False


def test_fetch_allowed_after_backoff_elapses():
    state = make_state(backoff=0.01)
    state.record_fetch_attempt()
    time.sleep(0.05)
    assert state.can_fetch_now() is True


def test_zero_backoff_always_allows_fetch():
    state = make_state(backoff=0.0)
    state.record_fetch_attempt()
    assert state.can_fetch_now() is True


def test_should_fetch_respects_low_water_mark():
    state = TaskFetchState(BACKOFF, FETCH_TASK_DELAY_TIME, 3)
    assert state.should_fetch(2) is True
    assert state.should_fetch(3) is False
    assert state.should_fetch(10) is False


def test_increase_backoff_doubles_and_caps():
    state = make_state()
    state.increase_backoff_for_error()
    assert state.backoff_duration() == BACKOFF * 2
    state.increase_backoff_for_error()
    assert state.backoff_duration() == BACKOFF * 2


def test_increase_backoff_caps_server_backoff():
    state = make_state()
    state.set_backoff_from_server(3600)
    state.increase_backoff_for_error()
    assert state.backoff_duration() == BACKOFF * 2


def test_increase_backoff_from_small_server_value():
    state = make_state()
    state.set_backoff_from_server(5)
    state.increase_backoff_for_error()
    assert state.backoff_duration() == (5 + FETCH_TASK_DELAY_TIME) * 2


def test_negative_retry_after_rejected():
    state = make_state()
    with pytest.raises(ValueError):
        state.set_backoff_from_server(-1)


@pytest.mark.parametrize(
    "args",
    [(-1.0, FETCH_TASK_DELAY_TIME, LOW_WATER_MARK), (BACKOFF, -1, LOW_WATER_MARK), (BACKOFF, 0, -1)],
)
def test_invalid_construction_rejected(args):
    with pytest.raises(ValueError):
        TaskFetchState(*args)