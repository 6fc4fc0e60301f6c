"""
Tests for InstallTaskGroup.
"""

import threading
import time

import pytest

from lockvendor.installer.task_group import InstallTaskGroup, TaskOutcome


def test_empty_group_returns_no_outcomes():
    assert InstallTaskGroup().wait() == []


def test_failures_do_not_cancel_siblings():
    ran = []
    release = threading.Event()

    def slow_success():
        release.wait(timeout=5)
        ran.append("slow")

    def fast_failure():
        try:
            raise ValueError("boom")
        finally:
            release.set()

    group = InstallTaskGroup()
    group.go("slow", slow_success)
    group.go("fast", fast_failure)
    outcomes = group.wait()

    assert ran == ["slow"]
    by_key = {outcome.key: outcome for outcome in outcomes}
    assert by_key["slow"].ok
    assert isinstance(by_key["fast"].error, ValueError)


def test_outcomes_are_in_completion_order():
    second_may_finish = threading.Event()

    def first():
        second_may_finish.wait(timeout=5)
        # give the pool time to complete the second future before this one
        time.sleep(0.2)

    def second():
        second_may_finish.set()
        raise RuntimeError("second")

    group = InstallTaskGroup()
    group.go("first", first)
    group.go("second", second)
    outcomes = group.wait()

    assert [outcome.key for outcome in outcomes] == ["second", "first"]


def test_tasks_run_in_parallel_by_default():
    barrier = threading.Barrier(4, timeout=5)
    group = InstallTaskGroup()
    for i in range(4):
        group.go(str(i), barrier.wait)

    outcomes = group.wait()

    assert all(outcome.ok for outcome in outcomes)


def test_max_workers_bounds_concurrency():
    active = []
    peak = []
    lock = threading.Lock()

    def task():
        with lock:
            active.append(1)
            peak.append(len(active))
        threading.Event().wait(0.01)
        with lock:
            active.pop()

    group = InstallTaskGroup(max_workers=1)
    for i in range(5):
        group.go(str(i), task)

    assert len(group.wait()) == 5
    assert max(peak) == 1


def test_wait_clears_registered_tasks():
    group = InstallTaskGroup()
    group.go("a", lambda: None)
    assert len(group) == 1

    group.wait()

    assert len(group) == 0


@pytest.mark.parametrize("error, ok", [(None, True), (ValueError("x"), False)])
def test_task_outcome_ok(error, ok):
    assert TaskOutcome("key", error).ok is ok


@pytest.mark.parametrize("max_workers", [0, -1])
def test_non_positive_max_workers_is_rejected(max_workers):
    with pytest.raises(ValueError):
        InstallTaskGroup(max_workers=max_workers)
