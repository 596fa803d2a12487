"""
Tunable game constants.

Everything a host may tweak lives on `Settings`; the grid size is derived
from the screen size and the cell (unit) size, e.g. 600x600 px at 24 px
cells -> a 25x25 board.
"""
from dataclasses import dataclass
from typing import Optional


class ConfigError(ValueError):
    """Raised when a Settings combination cannot produce a playable board."""


@dataclass(frozen=True)
class Settings:
    screen_width: int = 600       # px
    screen_height: int = 600      # px
    unit_size: int = 24           # px per grid cell
    starting_body: int = 5        # cells
    base_interval_ms: int = 90    # delay between steps at the start
    speedup_step_ms: int = 5      # shaved off the delay on each speed-up
    min_interval_ms: int = 40     # floor for the delay
    apples_per_speedup: int = 5   # speed up every N apples
    max_apple_attempts: int = 10_000  # random samples before scanning for a free cell
    seed: Optional[int] = None

    def __post_init__(self):
        if self.unit_size <= 0:
            raise ConfigError(f"unit_size must be positive, got {self.unit_size}")
        if self.screen_width < self.unit_size or self.screen_height < self.unit_size:
            raise ConfigError(
                f"screen {self.screen_width}x{self.screen_height} is smaller than one "
                f"{self.unit_size}px cell"
            )
        if self.starting_body < 1:
            raise ConfigError(f"starting_body must be at least 1, got {self.starting_body}")
        # The body trails left of the centre column.
        if self.starting_body > self.grid_width // 2 + 1:
            raise ConfigError(
                f"starting_body {self.starting_body} does not fit left of the centre "
                f"of a {self.grid_width}-cell wide grid"
            )
        if self.starting_body >= self.grid_width * self.grid_height:
            raise ConfigError("starting_body leaves no free cell for an apple")
        if self.base_interval_ms <= 0 or self.min_interval_ms <= 0:
            raise ConfigError("tick intervals must be positive")
        if self.min_interval_ms > self.base_interval_ms:
            raise ConfigError(
                f"min_interval_ms ({self.min_interval_ms}) exceeds "
                f"base_interval_ms ({self.base_interval_ms})"
            )
        if self.speedup_step_ms <= 0:
            raise ConfigError(f"speedup_step_ms must be positive, got {self.speedup_step_ms}")
        if self.apples_per_speedup <= 0:
            raise ConfigError(
                f"apples_per_speedup must be positive, got {self.apples_per_speedup}"
            )
        if self.max_apple_attempts < 0:
            raise ConfigError("max_apple_attempts cannot be negative")

    @property
    def grid_width(self) -> int:
        return self.screen_width // self.unit_size

    @property
    def grid_height(self) -> int:
        return self.screen_height // self.unit_size

    @property
    def grid_size(self):
        """(columns, rows) of the board."""
        return self.grid_width, self.grid_height
