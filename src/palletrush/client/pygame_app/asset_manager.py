from __future__ import annotations

from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font
    marker: pygame.font.Font


class AssetManager:
    """Fonts only: the board is drawn from primitives, so no image assets ship."""

    def __init__(self) -> None:
        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 34),
            marker=pygame.font.SysFont(None, 28),
        )
