"""Tests for the loading wait in :mod:`profile_app`."""

from __future__ import annotations

from types import SimpleNamespace

import profile_app
from services.edit_mode import EditModeMachine, ProfileMode


class DummyDispatcher:
    def apply(self, target, patch):  # pragma: no cover - never saves here
        raise AssertionError("unexpected save")


def test_loading_page_sleeps_out_the_timer_then_reruns() -> None:
    clock = {"t": 5.0}
    machine = EditModeMachine(DummyDispatcher(), loading_timeout_seconds=2.0, clock=lambda: clock["t"])
    machine.transition(ProfileMode.LOADING)
    clock["t"] = 5.5
    slept: list[float] = []
    reruns: list[bool] = []
    st_module = SimpleNamespace(rerun=lambda: reruns.append(True))

    profile_app._wait_for_loading(machine, st_module=st_module, sleep=slept.append)

    assert slept == [1.5]
    assert reruns == [True]


def test_no_wait_outside_loading() -> None:
    machine = EditModeMachine(DummyDispatcher())
    slept: list[float] = []
    st_module = SimpleNamespace(rerun=lambda: slept.append(-1.0))

    profile_app._wait_for_loading(machine, st_module=st_module, sleep=slept.append)

    assert slept == []
