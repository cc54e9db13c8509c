"""Shared fixtures for the REVAC test-suite."""

from __future__ import annotations

from typing import Callable, Iterable, List

import pytest


class ScriptedRandom:
    """Random source replaying fixed picks; uniform draws return a fixed fraction of the interval."""

    def __init__(self, picks: Iterable[int] = (), fraction: float = 0.5) -> None:
        self.picks: List[int] = list(picks)
        self.fraction = fraction
        self.intervals: List[tuple] = []

    def uniform(self, low: float, high: float) -> float:
        self.intervals.append((low, high))
        return low + (high - low) * self.fraction

    def pick(self, k: int) -> int:
        value = self.picks.pop(0) if self.picks else 0
        assert 0 <= value < k
        return value


@pytest.fixture
def scripted_random() -> Callable[..., ScriptedRandom]:
    return ScriptedRandom
