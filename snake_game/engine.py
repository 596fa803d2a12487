"""
Snake simulation core.

`GameEngine` owns the whole game: the snake, the apple, score, speed and the
Running / Paused / GameOver state machine. It knows nothing about pygame;
a host drives it with `tick()` on a timer and `handle_input()` on key
presses, and reads its attributes to draw a frame.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum

from .config import Settings

logger = logging.getLogger(__name__)

# Overlay font sizes (px)
BIG_TEXT = 48
SMALL_TEXT = 20


class AppleSpawnError(RuntimeError):
    """No free cell is left for an apple."""


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def offset(self):
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


class Command(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    TOGGLE_PAUSE = "toggle_pause"
    RESTART = "restart"
    QUIT = "quit"


_STEER = {
    Command.UP: Direction.UP,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}


class GameState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class OverlayLine:
    text: str
    size: int   # font size in px
    x: int      # left edge in px
    y: int      # top edge in px


class GameEngine:
    def __init__(self, settings=None, rng=None):
        self.settings = settings or Settings()
        self.rng = rng or random.Random(self.settings.seed)
        self.reset()

    # ---- read-only views for renderers ----
    @property
    def grid_width(self) -> int:
        return self.settings.grid_width

    @property
    def grid_height(self) -> int:
        return self.settings.grid_height

    @property
    def unit_size(self) -> int:
        return self.settings.unit_size

    @property
    def head(self):
        return self.snake[0]

    @property
    def alive(self) -> bool:
        return self.state is not GameState.GAME_OVER

    # ---- lifecycle ----
    def reset(self):
        """Start a fresh game: snake on the middle row heading right."""
        s = self.settings
        cx, cy = s.grid_width // 2, s.grid_height // 2
        self.snake = deque((cx - i, cy) for i in range(s.starting_body))
        self.direction = Direction.RIGHT
        self.next_direction = self.direction
        self.score = 0
        self.tick_interval = s.base_interval_ms
        self.state = GameState.RUNNING
        self.apple = None
        self.place_apple()
        logger.info("New game on a %dx%d grid", *s.grid_size)

    def in_bounds(self, cell) -> bool:
        x, y = cell
        return 0 <= x < self.grid_width and 0 <= y < self.grid_height

    def place_apple(self):
        """
        Put the apple on a random cell the snake does not occupy.

        Rejection sampling is fast while the board is mostly empty. After
        `max_apple_attempts` misses we pick among the free cells directly,
        and raise AppleSpawnError when there are none.
        """
        occupied = set(self.snake)
        w, h = self.grid_width, self.grid_height
        for _ in range(self.settings.max_apple_attempts):
            cell = (self.rng.randrange(w), self.rng.randrange(h))
            if cell not in occupied:
                self.apple = cell
                return cell

        free = [(x, y) for y in range(h) for x in range(w) if (x, y) not in occupied]
        if not free:
            raise AppleSpawnError(f"snake of length {len(self.snake)} fills the {w}x{h} grid")
        logger.debug("Apple sampling missed %d times; choosing among %d free cells",
                     self.settings.max_apple_attempts, len(free))
        self.apple = self.rng.choice(free)
        return self.apple

    # ---- input ----
    def handle_input(self, command: Command) -> bool:
        """Apply one command. Returns False when the host should quit."""
        if command is Command.QUIT:
            return False
        if command is Command.RESTART:
            self.reset()
        elif command is Command.TOGGLE_PAUSE:
            if self.state is GameState.RUNNING:
                self.state = GameState.PAUSED
            elif self.state is GameState.PAUSED:
                self.state = GameState.RUNNING
        else:
            self.steer(_STEER[command])
        return True

    def steer(self, direction: Direction):
        # Checked against the direction actually moved last tick, so two quick
        # turns between ticks cannot fold the head back onto the neck.
        if not self.alive:
            return
        if direction is self.direction.opposite:
            logger.debug("Ignoring reverse turn %s while heading %s",
                         direction.name, self.direction.name)
            return
        self.next_direction = direction

    # ---- simulation ----
    def tick(self):
        if self.state is not GameState.RUNNING:
            return

        self.direction = self.next_direction
        hx, hy = self.head
        dx, dy = self.direction.offset
        new_head = (hx + dx, hy + dy)
        self.snake.appendleft(new_head)
        tail = self.snake.pop()

        if new_head == self.apple:
            self.snake.append(tail)  # grow: keep the tail this tick
            self.score += 1
            self._maybe_speed_up()
            try:
                self.place_apple()
            except AppleSpawnError:
                # The snake covers the whole board: nothing left to play for.
                self.apple = None
                self.state = GameState.GAME_OVER
                logger.info("Board filled: score %d", self.score)
                return

        if self._hits_self() or not self.in_bounds(new_head):
            self.state = GameState.GAME_OVER
            logger.info("Game over: score %d, length %d", self.score, len(self.snake))

    def _hits_self(self) -> bool:
        head = self.snake[0]
        return any(cell == head for i, cell in enumerate(self.snake) if i > 0)

    def _maybe_speed_up(self):
        s = self.settings
        if self.score % s.apples_per_speedup == 0 and self.tick_interval > s.min_interval_ms:
            self.tick_interval = max(s.min_interval_ms, self.tick_interval - s.speedup_step_ms)
            logger.info("Speed up at score %d: %d ms per step", self.score, self.tick_interval)

    # ---- overlay text ----
    def overlay(self, measure):
        """
        Lay out the HUD and state messages for the current frame.

        `measure(text, size)` returns the rendered width in px of `text` at
        font size `size`; it is the only thing the engine asks of a display.
        """
        lines = [OverlayLine(f"Score: {self.score}", SMALL_TEXT, 12, 4)]
        mid = self.settings.screen_height // 2

        if self.state is GameState.PAUSED:
            texts = [("PAUSED", BIG_TEXT, mid - 48),
                     ("Press P to resume", SMALL_TEXT, mid + 10)]
        elif self.state is GameState.GAME_OVER:
            texts = [("GAME OVER", BIG_TEXT, mid - 58),
                     (f"Final Score: {self.score}", SMALL_TEXT, mid),
                     ("Press R to Restart or ESC to Quit", SMALL_TEXT, mid + 25)]
        else:
            texts = []

        for text, size, y in texts:
            x = (self.settings.screen_width - measure(text, size)) // 2
            lines.append(OverlayLine(text, size, x, y))
        return lines
