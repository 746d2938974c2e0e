"""
Pytest configuration and fixtures for difflife tests.
"""

from __future__ import annotations

import pytest

from difflife.display import DifferentialRenderer
from difflife.grid import CellularGrid
from difflife.rules import moore_kernel


class FakeWindow:
    """Minimal curses.window stand-in that records what gets drawn."""

    def __init__(self) -> None:
        self.writes: list[tuple[int, int, str, int]] = []
        self.attrs: list[int] = []
        self.cleared = 0
        self.refreshed = 0
        self.keys: list[int] = []

    def addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        self.writes.append((y, x, text, attr))

    def attrset(self, attr: int) -> None:
        self.attrs.append(attr)

    def clear(self) -> None:
        self.cleared += 1

    def refresh(self) -> None:
        self.refreshed += 1

    def getch(self) -> int:
        return self.keys.pop(0) if self.keys else -1

    def reset(self) -> None:
        self.writes.clear()
        self.attrs.clear()


@pytest.fixture
def window() -> FakeWindow:
    return FakeWindow()


@pytest.fixture
def renderer(window: FakeWindow) -> DifferentialRenderer:
    """A 10x20 renderer with one-character cells."""
    return DifferentialRenderer(window, 10, 20)


@pytest.fixture
def kernel() -> CellularGrid:
    return moore_kernel()


@pytest.fixture
def blinker() -> CellularGrid:
    """Vertical blinker in a 3x3 grid."""
    return CellularGrid.from_rows([[0, 1, 0], [0, 1, 0], [0, 1, 0]])
