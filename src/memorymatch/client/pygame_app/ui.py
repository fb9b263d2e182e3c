from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]


Color = tuple[int, int, int]

BG_DARK: Color = (21, 41, 56)
BG_LIGHT: Color = (242, 242, 242)
SLATE: Color = (48, 72, 89)
SLATE_LIGHT: Color = (188, 206, 217)
ORANGE: Color = (253, 162, 20)
WHITE: Color = (252, 252, 252)
GREY_TEXT: Color = (112, 138, 157)


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font
    card: pygame.font.Font


def load_fonts() -> Fonts:
    pygame.font.init()
    return Fonts(
        ui=pygame.font.SysFont(None, 28),
        small=pygame.font.SysFont(None, 20),
        big=pygame.font.SysFont(None, 44),
        card=pygame.font.SysFont(None, 40),
    )


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = WHITE,
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_text_centered(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    center: tuple[int, int],
    color: Color = WHITE,
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, img.get_rect(center=center).topleft)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True
    selected: bool = False
    accent: bool = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        if self.accent:
            bg, fg = ORANGE, WHITE
        elif self.selected:
            bg, fg = SLATE, WHITE
        else:
            bg, fg = SLATE_LIGHT, SLATE
        if not self.enabled:
            bg = (90, 90, 90)
        pygame.draw.rect(screen, bg, self.rect, border_radius=26)
        draw_text_centered(screen, font, self.text, self.rect.center, color=fg)


def draw_modal(screen: pygame.Surface, rect: pygame.Rect) -> None:
    """Dim the whole screen and draw an empty dialog panel."""
    shade = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    shade.fill((0, 0, 0, 140))
    screen.blit(shade, (0, 0))
    pygame.draw.rect(screen, BG_LIGHT, rect, border_radius=12)
