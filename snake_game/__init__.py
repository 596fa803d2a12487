"""Grid snake: a pygame arcade game around a render-agnostic engine."""
from .config import ConfigError, Settings
from .engine import AppleSpawnError, Command, Direction, GameEngine, GameState, OverlayLine

__version__ = "1.0.0"
