#!/usr/bin/env python3
# Command-line helper: generate levels, write level packs, verify and render snapshots.

import argparse, logging, os

from wormgrid.config import DEFAULTS
from wormgrid.engine.state import GameState
from wormgrid.rng import PMRandom, seed_from_index
from wormgrid.snapshot import LevelSnapshot, SnapshotError, hydrate


def _config(args):
    return DEFAULTS.with_overrides(
        target_density=args.density,
        min_worm_count=args.min_worms,
        max_retries=args.retries,
    )


def _generate(args, seed):
    gs = GameState(args.width, args.height, rng=PMRandom(seed), config=_config(args))
    if not gs.generate():
        raise SystemExit(f"[wormtool] generation failed for seed {seed}; try again or relax --min-worms")
    return gs


def _read_snapshot(path):
    with open(path, encoding="utf-8") as f:
        text = f.read()
    try:
        return LevelSnapshot.from_json(text)
    except SnapshotError as e:
        raise SystemExit(f"{path}: {e}")


def cmd_emit(args):
    gs = _generate(args, args.seed)
    with open(args.out, "w", encoding="utf-8") as f:
        f.write(gs.export_json(indent=args.indent))
    print(f"Wrote {args.out} ({len(gs.grid)} worms, density {gs.grid.density():.1%})")


def cmd_pack(args):
    os.makedirs(args.outdir, exist_ok=True)
    for i in range(args.count):
        gs = _generate(args, seed_from_index(args.seed, i))
        path = os.path.join(args.outdir, f"{i + 1:03d}.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write(gs.export_json())
    print(f"Wrote {args.count} levels to {args.outdir}")


def cmd_verify(args):
    snap = _read_snapshot(args.path)
    gs = GameState(snap.width, snap.height)
    gs.restore(snap)
    # Removing a worm never blocks another, so greedy draining decides clearability.
    while not gs.is_cleared():
        free = gs.free_worms()
        if not free:
            raise SystemExit(f"{args.path}: stuck with {len(gs.grid)} worms left")
        for wid in free:
            gs.try_remove(wid)
    print(f"{args.path}: OK ({len(snap.worms)} worms, {gs.moves} removals)")


def cmd_png(args):
    from wormgrid.render.image import save_png
    snap = _read_snapshot(args.path)
    out = args.out or os.path.splitext(args.path)[0] + ".png"
    save_png(hydrate(snap), out, cell=args.cell)
    print(f"Wrote {out}")


def _add_gen_options(p):
    p.add_argument('--width', type=int, default=25)
    p.add_argument('--height', type=int, default=35)
    p.add_argument('--seed', type=int, default=1)
    p.add_argument('--density', type=float, default=None)
    p.add_argument('--min-worms', type=int, default=None)
    p.add_argument('--retries', type=int, default=None)


def main():
    p = argparse.ArgumentParser()
    p.add_argument('-v', '--verbose', action='store_true')
    sub = p.add_subparsers(dest='cmd', required=True)
    p1 = sub.add_parser('emit')
    _add_gen_options(p1)
    p1.add_argument('--out', type=str, required=True)
    p1.add_argument('--indent', type=int, default=None)
    p1.set_defaults(func=cmd_emit)
    p2 = sub.add_parser('pack')
    _add_gen_options(p2)
    p2.add_argument('--count', type=int, default=10)
    p2.add_argument('--outdir', type=str, required=True)
    p2.set_defaults(func=cmd_pack)
    p3 = sub.add_parser('verify')
    p3.add_argument('path')
    p3.set_defaults(func=cmd_verify)
    p4 = sub.add_parser('png')
    p4.add_argument('path')
    p4.add_argument('--out', type=str, default=None)
    p4.add_argument('--cell', type=int, default=16)
    p4.set_defaults(func=cmd_png)
    args = p.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args.func(args)

if __name__ == '__main__':
    main()
