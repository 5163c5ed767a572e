from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from ..app import GameContext, Scene, SceneTransition
from ..ui import Button, draw_text
from .match import MatchScene


class MainMenuScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        x, y, w, h, gap = 60, 160, 320, 56, 14
        self._buttons = [
            Button(rect=pygame.Rect(x, y, w, h), text="New game (hot seat)", on_click=self._on_new_game),
            Button(
                rect=pygame.Rect(x, y + (h + gap), w, h),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            ),
        ]

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _on_new_game(self) -> None:
        assert self.ctx.theme is not None
        self.ctx.telemetry.log("match_started", {})
        self._go(MatchScene(self.ctx, self.ctx.theme))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                break

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        assert self.ctx.theme is not None
        screen.fill(self.ctx.theme.colors.background)
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, self.ctx.theme.title, (60, 70))
        draw_text(
            screen,
            fonts.small,
            "Reach the far row with a marker nobody can retake.",
            (60, 112),
            color=(180, 180, 200),
        )
        for b in self._buttons:
            b.draw(screen, fonts.ui)
