from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.types import MAX_PLAYERS, MIN_PLAYERS

from ..app import GameContext, Scene, SceneTransition
from ..ui import BG_DARK, BG_LIGHT, GREY_TEXT, Button, draw_text, draw_text_centered


class SetupScene:
    """Choose theme, number of players and board size, then start a game."""

    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        assert ctx.catalog is not None
        catalog = ctx.catalog

        w = ctx.screen.get_width()
        self.panel = pygame.Rect(w // 2 - 327, 190, 654, 440)
        left = self.panel.x + 50
        inner = self.panel.width - 100

        self.theme_buttons: dict[str, Button] = {}
        ids = list(catalog.themes)
        bw = (inner - 20 * (len(ids) - 1)) // len(ids)
        for i, theme_id in enumerate(ids):
            self.theme_buttons[theme_id] = Button(
                rect=pygame.Rect(left + i * (bw + 20), self.panel.y + 80, bw, 52),
                text=catalog.themes[theme_id].name,
                on_click=lambda t=theme_id: self._set_theme(t),
            )

        self.player_buttons: dict[int, Button] = {}
        counts = list(range(MIN_PLAYERS, MAX_PLAYERS + 1))
        bw = (inner - 20 * (len(counts) - 1)) // len(counts)
        for i, n in enumerate(counts):
            self.player_buttons[n] = Button(
                rect=pygame.Rect(left + i * (bw + 20), self.panel.y + 180, bw, 52),
                text=str(n),
                on_click=lambda n=n: self._set_players(n),
            )

        self.grid_buttons: dict[str, Button] = {}
        ids = list(catalog.grids)
        bw = (inner - 20 * (len(ids) - 1)) // len(ids)
        for i, grid_id in enumerate(ids):
            self.grid_buttons[grid_id] = Button(
                rect=pygame.Rect(left + i * (bw + 20), self.panel.y + 280, bw, 52),
                text=catalog.grids[grid_id].name,
                on_click=lambda g=grid_id: self._set_grid(g),
            )

        self.btn_start = Button(
            rect=pygame.Rect(left, self.panel.y + 350, inner, 56),
            text="Start Game",
            on_click=self._on_start,
            accent=True,
        )
        self._sync()

    def _sync(self) -> None:
        choice = self.ctx.choice
        for theme_id, b in self.theme_buttons.items():
            b.selected = theme_id == choice.theme
        for n, b in self.player_buttons.items():
            b.selected = n == choice.players
        for grid_id, b in self.grid_buttons.items():
            b.selected = grid_id == choice.grid

    def _set_theme(self, theme_id: str) -> None:
        self.ctx.choice.theme = theme_id
        self._sync()

    def _set_players(self, n: int) -> None:
        self.ctx.choice.players = n
        self._sync()

    def _set_grid(self, grid_id: str) -> None:
        self.ctx.choice.grid = grid_id
        self._sync()

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _on_start(self) -> None:
        from .play import PlayScene

        self._go(PlayScene(self.ctx))

    def _buttons(self) -> list[Button]:
        return [
            *self.theme_buttons.values(),
            *self.player_buttons.values(),
            *self.grid_buttons.values(),
            self.btn_start,
        ]

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons():
            if b.handle_event(event):
                return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill(BG_DARK)
        fonts = self.ctx.fonts
        draw_text_centered(screen, fonts.big, "memory", (screen.get_width() // 2, 120))

        pygame.draw.rect(screen, BG_LIGHT, self.panel, border_radius=20)
        x = self.panel.x + 50
        draw_text(screen, fonts.ui, "Select Theme", (x, self.panel.y + 45), color=GREY_TEXT)
        draw_text(screen, fonts.ui, "Number of Players", (x, self.panel.y + 145), color=GREY_TEXT)
        draw_text(screen, fonts.ui, "Grid Size", (x, self.panel.y + 245), color=GREY_TEXT)
        for b in self._buttons():
            b.draw(screen, fonts.ui)
