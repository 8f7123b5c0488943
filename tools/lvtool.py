#!/usr/bin/env python3
import argparse, csv, json, logging, os, sys
from pathlib import Path

from beerrun.config import DEFAULT_CONFIG, load_config
from beerrun.levelgen.assembler import generate
from beerrun.levelgen.errors import GenerationError


def _config(args):
    return load_config(Path(args.config)) if args.config else DEFAULT_CONFIG


def cmd_emit(args):
    level = generate(args.level, args.seed, config=_config(args))
    data = json.dumps(level.to_dict(), indent=2)
    if args.out == "-":
        print(data)
        return
    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        f.write(data + "\n")
    print(f"Wrote {args.out} (seed {level.seed})")


def cmd_stats(args):
    cfg = _config(args)
    w = csv.writer(sys.stdout, delimiter="\t")
    w.writerow(["level", "seed", "length", "segments", "obstacle_density", "enemy_density",
                "difficulty", "obstacles", "lethal", "enemies", "money", "money_value"])
    for lvl in range(args.first, args.last + 1):
        try:
            lv = generate(lvl, args.seed, config=cfg)
        except GenerationError as e:
            print(f"# level {lvl}: {e}", file=sys.stderr)
            continue
        p = lv.parameters
        w.writerow([lvl, lv.seed, f"{p.length:.2f}", p.segment_count,
                    f"{p.obstacle_density:.3f}", f"{p.enemy_density:.3f}", f"{p.difficulty_score:.3f}",
                    lv.obstacle_count, sum(1 for o in lv.obstacles if o.payload.lethal),
                    lv.enemy_count, lv.money_count, lv.total_money_value])


def main():
    p = argparse.ArgumentParser(description="Generate and inspect beerrun levels")
    p.add_argument("--config", type=str, default=None, help="JSON file of generator overrides")
    p.add_argument("-v", "--verbose", action="count", default=0)
    sub = p.add_subparsers(dest="cmd", required=True)
    p1 = sub.add_parser("emit")
    p1.add_argument("--level", type=int, required=True)
    p1.add_argument("--seed", type=int, default=None)
    p1.add_argument("--out", type=str, default="-")
    p1.set_defaults(func=cmd_emit)
    p2 = sub.add_parser("stats")
    p2.add_argument("--first", type=int, default=1)
    p2.add_argument("--last", type=int, default=25)
    p2.add_argument("--seed", type=int, default=None)
    p2.set_defaults(func=cmd_stats)
    args = p.parse_args()

    level = logging.WARNING if args.verbose == 0 else logging.INFO if args.verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except GenerationError as e:
        raise SystemExit(f"generation failed: {e}")


if __name__ == "__main__":
    main()
