from __future__ import annotations

import argparse

import pygame  # type: ignore[import-not-found]

from palletrush.paths import get_paths
from palletrush.services.content import ContentService
from palletrush.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="palletrush")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    args = parser.parse_args()

    window_size = None
    if args.width is not None or args.height is not None:
        window_size = (args.width or 720, args.height or 820)

    pygame.init()
    screen = pygame.display.set_mode(window_size or (720, 820))
    pygame.display.set_caption("palletrush")

    clock = pygame.time.Clock()
    paths = get_paths()

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=AssetManager(),
        content=ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir),
        telemetry=TelemetryService(paths.userdata_dir / "telemetry.jsonl"),
        window_size=window_size,
    )

    app = App(ctx, BootScene(ctx))
    try:
        return app.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())
