from __future__ import annotations

import dataclasses
import traceback

import pygame  # type: ignore[import-not-found]

from palletrush.services.content import ContentError

from ..app import GameContext, SceneTransition
from ..ui import Button, draw_text
from .main_menu import MainMenuScene


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            self.ctx.content.validate_all()
            theme = self.ctx.content.load_theme()
            if self.ctx.window_size is not None:
                theme = dataclasses.replace(theme, width=self.ctx.window_size[0], height=self.ctx.window_size[1])
            self.ctx.theme = theme
            pygame.display.set_caption(theme.title)
            if self.ctx.screen.get_size() != (theme.width, theme.height):
                self.ctx.screen = pygame.display.set_mode((theme.width, theme.height))
            self.ctx.telemetry.log("boot", {"ok": True})
            return SceneTransition(MainMenuScene(self.ctx))
        except ContentError as e:
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self.ctx.telemetry.log("boot", {"ok": False, "error": str(e)})
            self._quit_button = Button(
                rect=pygame.Rect(20, self.ctx.screen.get_height() - 64, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((10, 10, 10))
        draw_text(screen, self.ctx.assets.fonts.big, "palletrush", (20, 20))

        font2 = self.ctx.assets.fonts.ui
        if self._error is None:
            draw_text(screen, font2, "Booting... validating data.", (20, 80))
        else:
            draw_text(screen, font2, "BOOT ERROR", (20, 80), color=(240, 80, 80))
            y = 120
            for line in self._error.splitlines()[:22]:
                draw_text(screen, self.ctx.assets.fonts.small, line[:120], (20, y), color=(230, 230, 230))
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, font2)
