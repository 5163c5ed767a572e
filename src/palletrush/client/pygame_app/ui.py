from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]

from palletrush.engine.pallet import Cell
from palletrush.engine.topology import Coordinate
from palletrush.services.content import BoardGeometry, Color


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = (60, 60, 60) if self.enabled else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        img = font.render(self.text, True, (240, 240, 240))
        r = img.get_rect(center=self.rect.center)
        screen.blit(img, r.topleft)


def cell_rect(geometry: BoardGeometry, coord: Coordinate) -> pygame.Rect:
    size = geometry.cell_size
    return pygame.Rect(geometry.margin_x + coord.column * size, geometry.margin_y + coord.row * size, size, size)


def draw_pallet(
    screen: pygame.Surface,
    font: pygame.font.Font,
    rect: pygame.Rect,
    cell: Cell,
    colors: dict[str, Color],
    radius: int,
) -> None:
    """Draw the markers of a pallet as offset discs, bottom marker first."""
    markers = cell.markers()
    for i, player in enumerate(markers):
        cx = rect.centerx - 6 * (len(markers) - 1) + 12 * i
        cy = rect.centery + 6 * (len(markers) - 1) - 12 * i
        pygame.draw.circle(screen, colors.get(player.name, (200, 200, 200)), (cx, cy), radius)
        pygame.draw.circle(screen, (0, 0, 0), (cx, cy), radius, width=2)
    if len(markers) > 1:
        img = font.render(str(len(markers)), True, (250, 250, 250))
        screen.blit(img, (rect.right - img.get_width() - 6, rect.y + 4))
