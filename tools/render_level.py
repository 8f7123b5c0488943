#!/usr/bin/env python3
# Render generated levels to PNG strips using Pillow (one file per level).

import argparse, os
from PIL import Image, ImageDraw

from beerrun.levelgen.assembler import generate
from beerrun.render.palette import (
    END_MARK, GROUND, MONEY, SPAWN_MARK, enemy_color, obstacle_color, role_color,
)
from beerrun.render.strip import ENEMY_HEIGHT, GROUND_ROWS, OBSTACLE_HEIGHT


def render_level(level, scale=8, height=64):
    w = max(1, int(round(level.length * scale)))
    g = height - int(GROUND_ROWS * scale)
    img = Image.new("RGB", (w, height), (0, 0, 0))
    draw = ImageDraw.Draw(img)

    def px(x):
        return int(round(x * scale))

    for seg in level.segments:
        draw.rectangle([px(seg.start_x), 0, px(seg.end_x) - 1, g - 1], fill=role_color(seg.role))
    draw.rectangle([0, g, w - 1, height - 1], fill=GROUND)

    for p in level.obstacles:
        x0 = px(p.x - p.payload.width / 2)
        x1 = max(x0, px(p.x + p.payload.width / 2) - 1)
        if p.payload.lethal:
            draw.rectangle([x0, g, x1, height - 1], fill=obstacle_color(p.payload.kind))
        else:
            draw.rectangle([x0, g - px(OBSTACLE_HEIGHT), x1, g - 1], fill=obstacle_color(p.payload.kind))

    for p in level.enemies:
        draw.rectangle([px(p.x - 0.5), g - px(ENEMY_HEIGHT), px(p.x + 0.5) - 1, g - 1],
                       fill=enemy_color(p.payload.kind))

    r = max(2, scale // 3)
    for p in level.money:
        cx, cy = px(p.x), g - px(p.y + 0.5)
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=MONEY)

    draw.line([(0, 0), (0, g)], fill=SPAWN_MARK, width=2)
    draw.line([(w - 2, 0), (w - 2, g)], fill=END_MARK, width=2)
    return img


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--first", type=int, default=1, help="First level number")
    ap.add_argument("--last", type=int, default=10, help="Last level number")
    ap.add_argument("--seed", type=int, default=None, help="Seed shared by every level")
    ap.add_argument("--outdir", type=str, default="out/png", help="Where to write PNGs")
    ap.add_argument("--scale", type=int, default=8, help="Pixels per world unit")
    args = ap.parse_args()

    os.makedirs(args.outdir, exist_ok=True)
    for lvl in range(args.first, args.last + 1):
        level = generate(lvl, args.seed)
        path = os.path.join(args.outdir, f"level_{lvl:03d}_{level.seed}.png")
        render_level(level, scale=args.scale).save(path)
    print(f"Wrote PNGs to {args.outdir}")


if __name__ == "__main__":
    main()
