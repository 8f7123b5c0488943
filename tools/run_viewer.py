#!/usr/bin/env python3
# Minimal scrolling viewer for generated levels (no gameplay).
# - LEFT/RIGHT: scroll    PAGEUP/PAGEDOWN: next/previous level
# - R: reroll with a fresh seed    S: print the current seed
# - 60 Hz fixed loop

import argparse, logging
import pygame

from beerrun.levelgen.assembler import generate
from beerrun.levelgen.errors import GenerationError
from beerrun.render.strip import StripView, draw_level

SCROLL_SPEED = 40.0  # world units per second


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--level", type=int, default=1, help="Starting level number")
    ap.add_argument("--seed", type=int, default=None, help="Seed for the first level")
    ap.add_argument("--scale", type=int, default=8, help="Pixels per world unit")
    ap.add_argument("--width", type=int, default=960, help="Window width in pixels")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    pygame.init()
    clock = pygame.time.Clock()
    view = StripView(scale=args.scale, height=12 * args.scale)
    screen = pygame.display.set_mode((args.width, view.height))

    level_no, seed = args.level, args.seed

    def load(level_no, seed):
        try:
            return generate(level_no, seed)
        except GenerationError as e:
            print(f"[viewer] {e}")
            return None

    level = load(level_no, seed)
    running = True
    while running:
        dt = clock.tick(60) / 1000.0
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key == pygame.K_PAGEUP:
                    level_no += 1
                    level, view.offset_x = load(level_no, seed), 0.0
                elif ev.key == pygame.K_PAGEDOWN:
                    level_no = max(1, level_no - 1)
                    level, view.offset_x = load(level_no, seed), 0.0
                elif ev.key == pygame.K_r:
                    seed = None
                    level, view.offset_x = load(level_no, seed), 0.0
                elif ev.key == pygame.K_s and level is not None:
                    print(f"[viewer] level {level_no} seed {level.seed}")

        keys = pygame.key.get_pressed()
        if level is not None:
            max_off = max(0.0, level.length - args.width / view.scale)
            if keys[pygame.K_RIGHT]:
                view.offset_x = min(max_off, view.offset_x + SCROLL_SPEED * dt)
            if keys[pygame.K_LEFT]:
                view.offset_x = max(0.0, view.offset_x - SCROLL_SPEED * dt)

        screen.fill((0, 0, 0))
        if level is not None:
            draw_level(screen, level, view)
            pygame.display.set_caption(
                f"beerrun viewer - level {level_no}  seed {level.seed}  "
                f"obstacles {level.obstacle_count}  enemies {level.enemy_count}  money {level.money_count}"
            )
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
