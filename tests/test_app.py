from __future__ import annotations

from collections import deque

import pygame
import pytest

from snake_game.app import (
    APPLE,
    BG,
    HEAD,
    KEY_BINDINGS,
    TICK_EVENT,
    App,
    Renderer,
    body_color,
    command_for_event,
)
from snake_game.config import Settings
from snake_game.engine import Command, GameState


@pytest.fixture
def app():
    a = App(Settings(seed=1))
    a.renderer = Renderer(font_factory=lambda size: pygame.font.Font(None, size))
    a.engine.apple = (20, 20)
    yield a
    pygame.quit()


def key(k: int) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def tick(a: App, generation: int | None = None) -> None:
    gen = a.timer.generation if generation is None else generation
    a.handle_event(pygame.event.Event(TICK_EVENT, generation=gen))


@pytest.mark.parametrize(
    "k, command",
    [
        (pygame.K_UP, Command.UP),
        (pygame.K_w, Command.UP),
        (pygame.K_s, Command.DOWN),
        (pygame.K_a, Command.LEFT),
        (pygame.K_RIGHT, Command.RIGHT),
        (pygame.K_p, Command.TOGGLE_PAUSE),
        (pygame.K_r, Command.RESTART),
        (pygame.K_ESCAPE, Command.QUIT),
    ],
)
def test_key_bindings(k: int, command: Command) -> None:
    assert command_for_event(key(k)) is command


def test_every_binding_targets_a_command() -> None:
    assert set(KEY_BINDINGS.values()) == set(Command)


def test_window_close_and_unbound_keys() -> None:
    assert command_for_event(pygame.event.Event(pygame.QUIT)) is Command.QUIT
    assert command_for_event(key(pygame.K_x)) is None
    assert command_for_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(0, 0))) is None


def test_tick_event_steps_engine_and_rearms(app: App) -> None:
    gen = app.timer.generation
    tick(app)
    assert app.engine.head == (13, 12)
    assert app.timer.pending is True
    assert app.timer.generation == gen + 1


def test_stale_tick_is_ignored(app: App) -> None:
    tick(app, generation=0)
    assert app.engine.head == (12, 12)


def test_keys_drive_engine(app: App) -> None:
    app.handle_event(key(pygame.K_DOWN))
    tick(app)
    assert app.engine.head == (12, 13)
    app.handle_event(key(pygame.K_p))
    assert app.engine.state is GameState.PAUSED


def test_escape_stops_the_loop(app: App) -> None:
    app.handle_event(key(pygame.K_ESCAPE))
    assert app.running is False


def test_game_over_cancels_timer_and_restart_rearms(app: App) -> None:
    app.engine.snake = deque([(24, 12), (23, 12), (22, 12), (21, 12), (20, 12)])
    tick(app)
    assert app.engine.state is GameState.GAME_OVER
    assert app.timer.pending is False

    app.handle_event(key(pygame.K_r))
    assert app.engine.state is GameState.RUNNING
    assert app.timer.pending is True
    assert app.timer.interval == 90


def test_body_color_fades_towards_tail() -> None:
    assert body_color(0, 5) == HEAD
    assert body_color(1, 5) == (0, 150, 100)
    assert body_color(4, 5) == (0, 60, 100)
    assert body_color(40, 41) == (0, 60, 100)
    assert body_color(1, 1000)[1] > body_color(999, 1000)[1]


def test_render_draws_snake_and_apple(app: App) -> None:
    app.renderer.draw(app.screen, app.engine)
    unit = app.engine.unit_size
    assert tuple(app.screen.get_at((20 * unit + unit // 2, 20 * unit + unit // 2)))[:3] == APPLE
    assert tuple(app.screen.get_at((12 * unit + unit // 2, 12 * unit + unit // 2)))[:3] == HEAD


def test_speed_up_rearms_timer_with_shorter_interval() -> None:
    a = App(Settings(seed=1, apples_per_speedup=1))
    try:
        a.engine.apple = (13, 12)
        tick(a)
        assert a.engine.score == 1
        assert a.timer.pending is True
        assert a.timer.interval == 85
    finally:
        pygame.quit()


@pytest.mark.parametrize("state", [GameState.PAUSED, GameState.GAME_OVER])
def test_render_dims_board_under_overlay(app: App, state: GameState) -> None:
    unit = app.engine.unit_size
    empty = (5 * unit + unit // 2, 20 * unit + unit // 2)
    app.renderer.draw(app.screen, app.engine)
    assert tuple(app.screen.get_at(empty))[:3] == BG

    app.engine.state = state
    app.renderer.draw(app.screen, app.engine)
    r, g, b = tuple(app.screen.get_at(empty))[:3]
    assert r < BG[0] and g < BG[1] and b < BG[2]


def test_render_skips_head_off_the_board(app: App) -> None:
    app.engine.snake = deque([(25, 12), (24, 12), (23, 12), (22, 12), (21, 12)])
    app.engine.state = GameState.GAME_OVER
    app.renderer.draw(app.screen, app.engine)
    unit = app.engine.unit_size
    r, g, b = tuple(app.screen.get_at((24 * unit + unit // 2, 12 * unit + unit // 2)))[:3]
    assert (r, g, b) != HEAD
    # Neck segment, dimmed: still body green rather than the head color.
    assert g > r and g < HEAD[1]


def test_renderer_measures_with_its_fonts() -> None:
    pygame.font.init()
    r = Renderer(font_factory=lambda size: pygame.font.Font(None, size))
    assert r.measure("GAME OVER", 48) > r.measure("GAME OVER", 20) > 0
    pygame.font.quit()
