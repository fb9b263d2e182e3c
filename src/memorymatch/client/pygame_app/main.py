from __future__ import annotations

import argparse

import pygame  # type: ignore[import-not-found]

from memorymatch.paths import get_paths
from memorymatch.services.content import ContentService
from memorymatch.services.telemetry import TelemetryService
from memorymatch.services.timers import DEFAULT_REVEAL_DELAY

from .app import App, GameContext, SetupChoice
from .scenes.boot import BootScene
from .ui import load_fonts


def main() -> int:
    parser = argparse.ArgumentParser(prog="memorymatch")
    parser.add_argument("--width", type=int, default=1024)
    parser.add_argument("--height", type=int, default=768)
    parser.add_argument("--seed", type=int, default=None, help="seed the shuffle for a reproducible board")
    parser.add_argument(
        "--reveal-delay",
        type=int,
        default=int(DEFAULT_REVEAL_DELAY * 1000),
        help="milliseconds a revealed pair stays up before it resolves",
    )
    parser.add_argument("--theme", default="numbers")
    parser.add_argument("--grid", default="4x4")
    parser.add_argument("--players", type=int, choices=range(1, 5), default=1)
    args = parser.parse_args()

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Memory Match")

    clock = pygame.time.Clock()
    paths = get_paths()

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        fonts=load_fonts(),
        content=ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir),
        telemetry=TelemetryService(paths.userdata_dir / "telemetry.jsonl"),
        seed=args.seed,
        reveal_delay=args.reveal_delay / 1000.0,
        choice=SetupChoice(theme=args.theme, grid=args.grid, players=args.players),
    )

    app = App(ctx, BootScene(ctx))
    return app.run()
