# tests/conftest.py
from __future__ import annotations

import pytest

from bigint import runtime


@pytest.fixture(autouse=True)
def fresh_runtime(tmp_path, monkeypatch):
    """Isolated workspace and a clean runtime ContextVar for every test."""
    monkeypatch.setenv("BIGINT_HOME", str(tmp_path / "home"))
    runtime.reset()
    yield
    runtime.reset()


class FixedRng:
    """Deterministic stand-in for random.SystemRandom: cycles through `values`."""

    def __init__(self, *values: int):
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        v = self.values[(len(self.calls) - 1) % len(self.values)]
        return min(max(v, a), b)


@pytest.fixture
def fixed_rng():
    return FixedRng
