"""Shared pytest fixtures for loki_client tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from loki_client.config import LokiConfig


class FixedClock:
    """Clock stub returning a scripted sequence of nanosecond readings."""

    def __init__(self, *readings: int) -> None:
        self._readings: Iterator[int] = iter(readings)
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        return next(self._readings)


@pytest.fixture
def fixed_clock() -> Callable[..., FixedClock]:
    """Return a factory for scripted clocks."""
    return FixedClock


@pytest.fixture
def base_url() -> str:
    """Base URL of the mocked Loki server."""
    return "http://loki.test:3100"


@pytest.fixture
def loki_config(base_url: str) -> LokiConfig:
    """Create test Loki config."""
    return LokiConfig(url=base_url, timeout=5)
