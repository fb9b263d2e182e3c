from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.game import MemoryGame
from memorymatch.engine.types import Card
from memorymatch.services.timers import RevealTimer, Stopwatch

from ..app import GameContext, Scene, SceneTransition
from ..ui import (
    BG_LIGHT,
    GREY_TEXT,
    ORANGE,
    SLATE,
    SLATE_LIGHT,
    WHITE,
    Button,
    draw_modal,
    draw_text,
    draw_text_centered,
)


class PlayScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        assert ctx.catalog is not None
        choice = ctx.choice
        self.grid = ctx.catalog.grid(choice.grid)

        self.game = MemoryGame(seed=ctx.seed)
        self.game.reset(ctx.catalog.make_config(choice.theme, choice.grid, choice.players))
        self.reveal = RevealTimer(delay=ctx.reveal_delay)
        self.stopwatch = Stopwatch()
        self.ctx.telemetry.log_game("deal", self.game.state)

        w = ctx.screen.get_width()
        self.btn_restart = Button(
            rect=pygame.Rect(w - 330, 30, 130, 48), text="Restart", on_click=self._on_restart, accent=True
        )
        self.btn_new = Button(rect=pygame.Rect(w - 185, 30, 150, 48), text="New Game", on_click=self._on_new_game)

        self.btn_confirm = Button(
            rect=pygame.Rect(w // 2 - 200, 400, 190, 52), text="Restart", on_click=self._on_confirm, accent=True
        )
        self.btn_cancel = Button(
            rect=pygame.Rect(w // 2 + 10, 400, 190, 52), text="Resume", on_click=self._on_cancel
        )

        self.btn_again = Button(
            rect=pygame.Rect(w // 2 - 250, 580, 240, 52), text="Restart", on_click=self._on_play_again, accent=True
        )
        self.btn_setup = Button(
            rect=pygame.Rect(w // 2 + 10, 580, 240, 52), text="Setup New Game", on_click=self._on_new_game
        )

        self._card_rects = self._layout_cards()

    # -- layout ------------------------------------------------------------

    def _layout_cards(self) -> list[pygame.Rect]:
        size = self.grid.size
        board_px = 480 if size <= 4 else 520
        gap = 16 if size <= 4 else 12
        tile = (board_px - gap * (size - 1)) // size
        x0 = (self.ctx.screen.get_width() - board_px) // 2
        y0 = 110
        rects = []
        for i in range(size * size):
            r, c = divmod(i, size)
            rects.append(pygame.Rect(x0 + c * (tile + gap), y0 + r * (tile + gap), tile, tile))
        return rects

    # -- actions -----------------------------------------------------------

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _on_new_game(self) -> None:
        from .setup import SetupScene

        self._go(SetupScene(self.ctx))

    def _on_restart(self) -> None:
        self.game.request_restart()

    def _on_cancel(self) -> None:
        self.game.cancel_restart()

    def _on_confirm(self) -> None:
        res = self.game.confirm_restart()
        if not res.ok:
            return
        # The re-deal dropped any pending pair; its timer must not fire.
        self.reveal.cancel()
        self.stopwatch.restart()
        self.ctx.telemetry.log_game("restart", self.game.state)

    def _on_play_again(self) -> None:
        self.game.request_restart()
        self._on_confirm()

    def _on_card_click(self, card_id: int) -> None:
        res = self.game.select_card(card_id)
        if res.ok and self.game.phase == "resolving":
            self.reveal.arm()

    # -- scene protocol ----------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> None:
        state = self.game.state
        if state.restart_pending:
            self.btn_confirm.handle_event(event)
            self.btn_cancel.handle_event(event)
            return
        if state.status == "complete":
            self.btn_again.handle_event(event)
            self.btn_setup.handle_event(event)
            return

        if self.btn_restart.handle_event(event) or self.btn_new.handle_event(event):
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for card_id, rect in enumerate(self._card_rects):
                if rect.collidepoint(event.pos):
                    self._on_card_click(card_id)
                    return

    def update(self, dt: float) -> SceneTransition | None:
        state = self.game.state
        if state.restart_pending:
            return self._next
        if state.status == "in_progress":
            self.stopwatch.update(dt)
        if self.reveal.update(dt):
            self.game.resolve_pending_selection()
            if self.game.state.status == "complete":
                self.stopwatch.stop()
                self.ctx.telemetry.log_game(
                    "complete",
                    self.game.state,
                    elapsed=round(self.stopwatch.elapsed, 2),
                    leaders=self.game.leaders(),
                )
        return self._next

    # -- rendering ---------------------------------------------------------

    def _draw_card(self, screen: pygame.Surface, card: Card, rect: pygame.Rect) -> None:
        center = rect.center
        radius = rect.width // 2
        if card.is_matched:
            bg = SLATE_LIGHT
        elif card.is_face_up:
            bg = ORANGE
        else:
            bg = SLATE
        pygame.draw.circle(screen, bg, center, radius)
        if card.is_face_up:
            label = str(card.face_value)
            font = self.ctx.fonts.card if len(label) <= 3 else self.ctx.fonts.small
            draw_text_centered(screen, font, label, center, color=WHITE)

    def _draw_footer(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.fonts
        state = self.game.state
        y = 660
        if len(state.scores) == 1:
            boxes = [("Time", self.stopwatch.format_elapsed()), ("Moves", str(state.move_count))]
            active = -1
        else:
            boxes = [(f"Player {i + 1}", str(s)) for i, s in enumerate(state.scores)]
            active = state.current_player
        box_w = 200
        gap = 24
        x = (screen.get_width() - (box_w * len(boxes) + gap * (len(boxes) - 1))) // 2
        for i, (label, value) in enumerate(boxes):
            rect = pygame.Rect(x + i * (box_w + gap), y, box_w, 64)
            on = i == active
            pygame.draw.rect(screen, ORANGE if on else (223, 231, 236), rect, border_radius=10)
            fg = WHITE if on else GREY_TEXT
            draw_text(screen, fonts.ui, label, (rect.x + 16, rect.y + 22), color=fg)
            img = fonts.big.render(value, True, WHITE if on else SLATE)
            screen.blit(img, (rect.right - 16 - img.get_width(), rect.y + 14))

    def _draw_restart_modal(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.fonts
        w = screen.get_width()
        panel = pygame.Rect(w // 2 - 260, 260, 520, 230)
        draw_modal(screen, panel)
        draw_text_centered(screen, fonts.big, "Restart game?", (w // 2, 310), color=SLATE)
        draw_text_centered(screen, fonts.ui, "The current board will be lost.", (w // 2, 355), color=GREY_TEXT)
        self.btn_confirm.draw(screen, fonts.ui)
        self.btn_cancel.draw(screen, fonts.ui)

    def _draw_results(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.fonts
        state = self.game.state
        w = screen.get_width()
        panel = pygame.Rect(w // 2 - 300, 110, 600, 560)
        draw_modal(screen, panel)

        if len(state.scores) == 1:
            title = "You did it!"
            subtitle = "Game over! Here's how you got on..."
            rows = [
                ("Time Elapsed", self.stopwatch.format_elapsed(), False),
                ("Moves Taken", f"{state.move_count} Moves", False),
            ]
        else:
            leaders = self.game.leaders()
            title = f"Player {leaders[0] + 1} Wins!" if len(leaders) == 1 else "It's a tie!"
            subtitle = "Game over! Here are the results..."
            ranking = sorted(range(len(state.scores)), key=lambda i: (-state.scores[i], i))
            rows = []
            for i in ranking:
                tag = " (Winner!)" if i in leaders else ""
                rows.append((f"Player {i + 1}{tag}", f"{state.scores[i]} Pairs", i in leaders))

        draw_text_centered(screen, fonts.big, title, (w // 2, panel.y + 55), color=SLATE)
        draw_text_centered(screen, fonts.ui, subtitle, (w // 2, panel.y + 100), color=GREY_TEXT)
        y = panel.y + 140
        for label, value, highlight in rows:
            rect = pygame.Rect(panel.x + 50, y, panel.width - 100, 48)
            pygame.draw.rect(screen, SLATE if highlight else (223, 231, 236), rect, border_radius=10)
            fg = WHITE if highlight else GREY_TEXT
            draw_text(screen, fonts.ui, label, (rect.x + 20, rect.y + 14), color=fg)
            img = fonts.ui.render(value, True, WHITE if highlight else SLATE)
            screen.blit(img, (rect.right - 20 - img.get_width(), rect.y + 14))
            y += 60

        self.btn_again.draw(screen, fonts.ui)
        self.btn_setup.draw(screen, fonts.ui)

    def render(self, screen: pygame.Surface) -> None:
        screen.fill(BG_LIGHT)
        fonts = self.ctx.fonts
        draw_text(screen, fonts.big, "memory", (40, 38), color=(21, 41, 56))
        self.btn_restart.draw(screen, fonts.ui)
        self.btn_new.draw(screen, fonts.ui)

        for card, rect in zip(self.game.state.cards, self._card_rects):
            self._draw_card(screen, card, rect)
        self._draw_footer(screen)

        if self.game.state.restart_pending:
            self._draw_restart_modal(screen)
        elif self.game.state.status == "complete":
            self._draw_results(screen)
