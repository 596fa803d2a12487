"""
Snake — pygame host.

Controls
- Arrow keys / WASD: move
- P: pause / resume
- R: restart (any time)
- Esc or window close: quit

The host maps keys to engine commands, drives `GameEngine.tick()` from a
single-shot pygame timer and draws whatever state the engine exposes.
"""
import logging

import pygame

from .config import Settings
from .engine import Command, GameEngine, GameState
from .timing import TickTimer

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1
FPS = 60

# Colors (R, G, B)
BG     = (18, 18, 18)
GRID   = (60, 60, 60)
APPLE  = (255, 68, 68)
HEAD   = (0, 200, 140)
TEXT   = (240, 240, 240)
UI_DIM = (0, 0, 0, 140)   # translucent overlay

KEY_BINDINGS = {
    pygame.K_UP:     Command.UP,
    pygame.K_w:      Command.UP,
    pygame.K_DOWN:   Command.DOWN,
    pygame.K_s:      Command.DOWN,
    pygame.K_LEFT:   Command.LEFT,
    pygame.K_a:      Command.LEFT,
    pygame.K_RIGHT:  Command.RIGHT,
    pygame.K_d:      Command.RIGHT,
    pygame.K_p:      Command.TOGGLE_PAUSE,
    pygame.K_r:      Command.RESTART,
    pygame.K_ESCAPE: Command.QUIT,
}


def command_for_event(event):
    """Translate a pygame event into an engine Command, or None."""
    if event.type == pygame.QUIT:
        return Command.QUIT
    if event.type == pygame.KEYDOWN:
        return KEY_BINDINGS.get(event.key)
    return None


def pygame_set_timer(generation, millis):
    pygame.time.set_timer(pygame.event.Event(TICK_EVENT, generation=generation), millis, 1)


def body_color(index, length):
    """Head color first, then a green fading towards the tail."""
    if index == 0:
        return HEAD
    shade = int(180 - (120.0 * index / max(1, length - 1)))
    return (0, max(shade, 40), 100)


class Renderer:
    def __init__(self, font_factory=None):
        self.font_factory = font_factory or (
            lambda size: pygame.font.SysFont("consolas", size, bold=True))
        self._fonts = {}

    def font(self, size):
        if size not in self._fonts:
            self._fonts[size] = self.font_factory(size)
        return self._fonts[size]

    def measure(self, text, size):
        return self.font(size).size(text)[0]

    def cell_rect(self, cell, unit, inset):
        x, y = cell
        return pygame.Rect(x * unit + inset, y * unit + inset, unit - 2 * inset, unit - 2 * inset)

    def draw(self, surface, engine):
        unit = engine.unit_size
        w, h = surface.get_size()
        surface.fill(BG)

        # Subtle grid
        for col in range(engine.grid_width):
            pygame.draw.line(surface, GRID, (col * unit, 0), (col * unit, h))
        for row in range(engine.grid_height):
            pygame.draw.line(surface, GRID, (0, row * unit), (w, row * unit))

        if engine.apple is not None:
            pygame.draw.rect(surface, APPLE, self.cell_rect(engine.apple, unit, 3), border_radius=4)

        length = len(engine.snake)
        for i, cell in enumerate(engine.snake):
            if not engine.in_bounds(cell):
                continue  # head that just left the board
            pygame.draw.rect(surface, body_color(i, length),
                             self.cell_rect(cell, unit, 2), border_radius=5)

        if engine.state is not GameState.RUNNING:
            overlay = pygame.Surface((w, h), pygame.SRCALPHA)
            overlay.fill(UI_DIM)
            surface.blit(overlay, (0, 0))

        for line in engine.overlay(self.measure):
            surface.blit(self.font(line.size).render(line.text, True, TEXT), (line.x, line.y))


class App:
    def __init__(self, settings=None, engine=None):
        self.settings = settings or Settings()
        pygame.init()
        pygame.display.set_caption("Snake")
        self.screen = pygame.display.set_mode(
            (self.settings.screen_width, self.settings.screen_height))
        self.clock = pygame.time.Clock()
        self.engine = engine or GameEngine(self.settings)
        self.renderer = Renderer()
        self.timer = TickTimer(pygame_set_timer)
        self.running = True
        self.timer.arm(self.engine.tick_interval)

    def rearm(self):
        if self.engine.state is GameState.GAME_OVER:
            self.timer.cancel()
        else:
            if self.timer.interval and self.timer.interval != self.engine.tick_interval:
                logger.info("Tick interval now %d ms", self.engine.tick_interval)
            self.timer.arm(self.engine.tick_interval)

    def handle_event(self, event):
        if event.type == TICK_EVENT:
            if self.timer.accept(getattr(event, "generation", None)):
                self.engine.tick()
                self.rearm()
            return

        command = command_for_event(event)
        if command is None:
            return
        if not self.engine.handle_input(command):
            self.running = False
        elif command is Command.RESTART:
            self.rearm()

    def run(self):
        while self.running:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                self.handle_event(event)
                if not self.running:
                    break
            self.renderer.draw(self.screen, self.engine)
            pygame.display.flip()
        logger.info("Quit with score %d", self.engine.score)
        pygame.quit()
