# -*- coding: utf-8 -*-

import pytest


class FakeClock:
    """Monotonic clock stand-in; time only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
