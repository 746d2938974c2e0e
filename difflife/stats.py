"""CSV telemetry for a simulation run."""

from __future__ import annotations

import time
from pathlib import Path
from typing import IO, ClassVar


class StatsLogger:
    """Writes per-generation telemetry to CSV for post-hoc inspection."""

    HEADER: ClassVar[str] = "gen,time_s,population,sum,redrawn,event\n"

    def __init__(self, path: Path) -> None:
        self._path = path
        self._fh: IO[str] | None = None
        self._t0: float = time.monotonic()

    @property
    def is_open(self) -> bool:
        return self._fh is not None

    def open(self) -> None:
        try:
            self._fh = open(self._path, "w")
            self._fh.write(self.HEADER)
            self._fh.flush()
        except OSError:
            self._fh = None

    def log(
        self,
        gen: int,
        population: int,
        total: float,
        redrawn: int,
        event: str = "",
    ) -> None:
        if self._fh is None:
            return
        t = time.monotonic() - self._t0
        self._fh.write(f"{gen},{t:.1f},{population},{total:g},{redrawn},{event}\n")
        # Flush on events or periodically
        if event or gen % 50 == 0:
            try:
                self._fh.flush()
            except OSError:
                pass

    def close(self) -> None:
        if self._fh is not None:
            try:
                self._fh.close()
            except OSError:
                pass
            self._fh = None

    def __enter__(self) -> StatsLogger:
        self.open()
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
