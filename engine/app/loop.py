from __future__ import annotations
import logging
import time
import pygame

from engine.api.config import EngineConfig
from engine.api.frame_data import FrameData
from engine.app.context import Context
from engine.app.loader import game_root_for, load_game_manifest, load_game_module
from engine.app.scheduler import FrameScheduler
from engine.input.pointer_input import PointerInput

log = logging.getLogger(__name__)

BACKGROUND = (12, 14, 18)


def run_game(game_id: str, cfg: EngineConfig) -> None:
    # load before opening a window so a bad game id fails fast
    game_root = game_root_for(game_id)
    manifest = load_game_manifest(game_root)
    module = load_game_module(game_root)
    game = module.get_game()

    if cfg.seed is not None:
        manifest["options"] = {**(manifest.get("options") or {}), "seed": cfg.seed}

    pygame.init()
    pygame.display.set_caption(manifest.get("title", game_id))
    screen = pygame.display.set_mode(cfg.screen_size)
    clock = pygame.time.Clock()
    scheduler = FrameScheduler()

    input_layer = PointerInput(cfg.screen_size, mirror=cfg.mirror)

    # Render target: draw to off-screen if mirroring, otherwise draw directly to screen
    render_surface = screen if not cfg.mirror else pygame.Surface(
        cfg.screen_size).convert()

    ctx = Context(
        screen=render_surface,
        clock=clock,
        cfg=cfg,
        scheduler=scheduler,
        screen_size=cfg.screen_size,
    )

    game.on_load(ctx, manifest)
    log.info("loaded game %s (%dx%d, mirror=%s)", game_id, *cfg.screen_size, cfg.mirror)

    running = True
    try:
        while running:
            dt = clock.tick(cfg.fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                input_layer.handle_pygame_event(event)
                game.on_event(event)

            # timers first so the game draws post-tick state
            scheduler.advance(dt)
            frame_data = FrameData(timestamp=time.time(), clicks=input_layer.drain())

            # ---- draw to render_surface ----
            render_surface.fill(BACKGROUND)
            game.on_update(dt, frame_data)
            game.on_draw(render_surface)

            # ---- present to window ----
            if cfg.mirror:
                flipped = pygame.transform.flip(render_surface, True, False)
                screen.blit(flipped, (0, 0))

            pygame.display.flip()

    finally:
        game.on_unload()
        scheduler.cancel_all()
        pygame.quit()
        log.info("game %s closed", game_id)
