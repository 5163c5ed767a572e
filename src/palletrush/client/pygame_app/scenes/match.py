from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from palletrush.engine.actions import Action
from palletrush.engine.battle import Battle
from palletrush.engine.topology import ALL_COORDINATES, Coordinate, Direction
from palletrush.services.content import Theme

from ..app import GameContext, Scene, SceneTransition
from ..ui import Button, cell_rect, draw_pallet, draw_text


class MatchScene:
    def __init__(self, ctx: GameContext, theme: Theme) -> None:
        self.ctx = ctx
        self.theme = theme
        self.battle = Battle.start()

        self._next: SceneTransition | None = None
        self._message: str = ""
        self._selected: Coordinate | None = None

        w = theme.width
        self.btn_menu = Button(rect=pygame.Rect(w - 160, 20, 140, 40), text="Menu", on_click=self._on_menu)
        self.btn_undo = Button(rect=pygame.Rect(20, theme.height - 64, 140, 44), text="Undo", on_click=self._on_undo)
        self.btn_reset = Button(
            rect=pygame.Rect(180, theme.height - 64, 140, 44), text="New game", on_click=self._on_reset
        )

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _on_menu(self) -> None:
        from .main_menu import MainMenuScene

        self._go(MainMenuScene(self.ctx))

    def _on_undo(self) -> None:
        if self.battle.undo():
            self.ctx.telemetry.log("undo", {"moves": len(self.battle.moves)})
            self._message = ""
        self._selected = None

    def _on_reset(self) -> None:
        self.battle.reset()
        self.ctx.telemetry.log("reset", {})
        self._selected = None
        self._message = ""

    def _play(self, direction: Direction) -> None:
        if self._selected is None:
            return
        action = Action(source=self._selected, direction=direction)
        res = self.battle.play(action)
        if not res.ok:
            assert res.error is not None
            self.ctx.telemetry.action_rejected(action, res.error)
            self._message = str(res.error)
            return
        self.ctx.telemetry.action_accepted(action, res.game)
        self._selected = None
        self._message = ""

    def handle_event(self, event: pygame.event.Event) -> None:
        self.btn_menu.handle_event(event)
        self.btn_undo.handle_event(event)
        self.btn_reset.handle_event(event)

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            hit = self._hit_test_cell(event.pos)
            if hit is not None:
                self._handle_click(hit)

        if event.type == pygame.KEYDOWN:
            self._handle_key(pygame.key.name(event.key))

    def _handle_key(self, key_name: str) -> None:
        if key_name == "escape":
            self._selected = None
            return
        if key_name == self.theme.undo_key:
            self._on_undo()
            return
        if key_name == self.theme.reset_key:
            self._on_reset()
            return
        direction = self.theme.direction_keys.get(key_name)
        if direction is not None and self._selected is not None:
            self._play(direction)

    def _handle_click(self, coord: Coordinate) -> None:
        game = self.battle.game
        if game.is_over():
            return
        if self._selected is not None:
            direction = Direction.between(self._selected, coord)
            if direction is not None:
                self._play(direction)
                return
        # Only the mover's own pallets can be picked up.
        if coord in game.phase.territory:
            self._selected = coord
            self._message = ""
        else:
            self._selected = None

    def _hit_test_cell(self, pos: tuple[int, int]) -> Coordinate | None:
        for coord in ALL_COORDINATES:
            if cell_rect(self.theme.board, coord).collidepoint(pos):
                return coord
        return None

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        colors = self.theme.colors
        fonts = self.ctx.assets.fonts
        game = self.battle.game
        screen.fill(colors.background)

        self.btn_menu.draw(screen, fonts.ui)
        self.btn_undo.enabled = self.battle.can_undo()
        self.btn_undo.draw(screen, fonts.ui)
        self.btn_reset.draw(screen, fonts.ui)

        player = game.current_player()
        status = f"Player {player.name} to move" if not game.is_over() else "Game over"
        draw_text(screen, fonts.big, status, (20, 24), color=colors.players.get(player.name, colors.text))
        draw_text(screen, fonts.small, f"Moves: {len(self.battle.moves)}", (20, 64), color=colors.text)

        legal: set[Coordinate] = set()
        if self._selected is not None:
            for d in game.legal_directions(self._selected):
                legal.add(d.step(self._selected))

        for coord in ALL_COORDINATES:
            rect = cell_rect(self.theme.board, coord)
            pygame.draw.rect(screen, colors.cell, rect)
            pygame.draw.rect(screen, colors.grid, rect, width=1)
            draw_pallet(
                screen,
                fonts.small,
                rect,
                game.board.cell_at(coord),
                colors.players,
                self.theme.board.marker_radius,
            )
            if coord == self._selected:
                pygame.draw.rect(screen, colors.selected, rect, width=4)
            elif coord in legal:
                pygame.draw.rect(screen, colors.legal, rect, width=3)

        if self._message:
            draw_text(screen, fonts.ui, self._message, (340, self.theme.height - 52), color=colors.error)

        if game.winner is not None:
            self._draw_game_over(screen)

    def _draw_game_over(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        screen.blit(overlay, (0, 0))
        winner = self.battle.game.winner
        assert winner is not None
        title = f"PLAYER {winner.name} WINS"
        img = self.ctx.assets.fonts.big.render(title, True, self.theme.colors.text)
        screen.blit(img, img.get_rect(center=screen.get_rect().center))
