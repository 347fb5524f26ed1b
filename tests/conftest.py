"""Pytest configuration for layer-composer tests."""

from typing import Any

import pytest


class FakeSleep:
    """Awaitable clock that records requested delays without waiting."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "pixels: mark test as comparing rendered pixel values",
    )
