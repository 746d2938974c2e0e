"""
Configuration dataclass for a difflife run.

Grid and cell sizes are bounded by what the renderer can draw.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from .display import (
    MAX_CELL_SIZE,
    MAX_COLUMNS,
    MAX_ROWS,
    MIN_CELL_SIZE,
    MIN_COLUMNS,
    MIN_ROWS,
)


@dataclass
class Config:
    """
    Complete configuration for a simulation run.

    Attributes:
        rows: Grid height in cells
        columns: Grid width in cells
        cell_width: Terminal characters per cell, horizontally
        cell_height: Terminal lines per cell
        probability: Chance that a cell starts alive
        seed: Random seed for the initial population (None = fresh entropy)
        delay: Pause between generations, in milliseconds
        max_generations: Stop after this many generations (None = until extinct)
        step: Wait for a key press between generations
        stats_path: CSV telemetry file (None = no telemetry)
    """

    rows: int = 20
    columns: int = 20
    cell_width: int = 2
    cell_height: int = 1
    probability: float = 0.25
    seed: int | None = None
    delay: float = 100.0
    max_generations: int | None = None
    step: bool = False
    stats_path: Path | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.stats_path is not None:
            self.stats_path = Path(self.stats_path)
        self._validate()

    def _validate(self) -> None:
        """Check that all parameters are in valid ranges."""
        if not MIN_ROWS <= self.rows <= MAX_ROWS:
            raise ValueError(f"rows must be in [{MIN_ROWS}, {MAX_ROWS}], got {self.rows}")

        if not MIN_COLUMNS <= self.columns <= MAX_COLUMNS:
            raise ValueError(
                f"columns must be in [{MIN_COLUMNS}, {MAX_COLUMNS}], got {self.columns}"
            )

        if not MIN_CELL_SIZE <= self.cell_width <= MAX_CELL_SIZE:
            raise ValueError(
                f"cell_width must be in [{MIN_CELL_SIZE}, {MAX_CELL_SIZE}], got {self.cell_width}"
            )

        if not MIN_CELL_SIZE <= self.cell_height <= MAX_CELL_SIZE:
            raise ValueError(
                f"cell_height must be in [{MIN_CELL_SIZE}, {MAX_CELL_SIZE}], got {self.cell_height}"
            )

        if not 0.0 <= self.probability <= 1.0:
            raise ValueError(f"probability must be in [0, 1], got {self.probability}")

        if self.delay < 0:
            raise ValueError(f"delay must be >= 0, got {self.delay}")

        if self.max_generations is not None and self.max_generations < 1:
            raise ValueError(f"max_generations must be >= 1, got {self.max_generations}")

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        d = asdict(self)
        if self.stats_path is not None:
            d["stats_path"] = str(self.stats_path)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Config:
        """Create config from dictionary."""
        return cls(**d)

    @classmethod
    def from_args(cls, args: Any) -> Config:
        """Create config from argparse namespace."""
        # Extract only known fields
        known_fields = {f.name for f in fields(cls)}
        config_dict = {k: v for k, v in vars(args).items() if k in known_fields and v is not None}
        return cls(**config_dict)
