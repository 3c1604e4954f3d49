#!/usr/bin/env python3
# Interactive viewer for generated levels.
# - Click a worm: remove it if its path is clear, otherwise flash its blockers
# - N: new level   R: restart level   H: show hint   S: save snapshot JSON
# - Optional --load to play a saved snapshot
# - 60 Hz fixed loop

import argparse, logging
import pygame

from wormgrid.engine.state import GameState
from wormgrid.render.board import board_size, cell_at, draw_board

BLOCKER_FLASH_FRAMES = 30


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--width", type=int, default=25)
    ap.add_argument("--height", type=int, default=35)
    ap.add_argument("--cell", type=int, default=20, help="Cell size in pixels")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--density", type=float, default=0.95)
    ap.add_argument("--min-worms", type=int, default=0)
    ap.add_argument("--load", type=str, default=None, help="Snapshot JSON to play instead of generating")
    ap.add_argument("--save", type=str, default="level.json", help="Where S writes the snapshot")
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    gs = GameState(args.width, args.height, seed=args.seed)
    if args.load:
        with open(args.load, encoding="utf-8") as f:
            if not gs.import_json(f.read()):
                raise SystemExit(f"{args.load}: not a valid level snapshot")
    elif not gs.generate(args.density, args.min_worms):
        raise SystemExit("[viewer] generation failed; run again")

    pygame.init()
    clock = pygame.time.Clock()
    screen = pygame.display.set_mode(board_size(gs.grid, args.cell))

    blockers, flash = [], 0
    hint = None
    running = True
    while running:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                x, y = cell_at(ev.pos[0], ev.pos[1], args.cell)
                wid = gs.grid.id_at(x, y)
                res = gs.try_remove(wid)
                if res.ok:
                    hint = None
                elif res.blockers:
                    blockers, flash = res.blockers, BLOCKER_FLASH_FRAMES
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key == pygame.K_n:
                    if not gs.generate(args.density, args.min_worms):
                        print("[viewer] generation failed; press N to retry")
                    hint = None
                    screen = pygame.display.set_mode(board_size(gs.grid, args.cell))
                elif ev.key == pygame.K_r:
                    gs.reset_level()
                    hint = None
                elif ev.key == pygame.K_h:
                    hint = gs.hint()
                elif ev.key == pygame.K_s:
                    text = gs.export_json()
                    if text is not None:
                        with open(args.save, "w", encoding="utf-8") as f:
                            f.write(text)
                        print(f"[viewer] wrote {args.save}")

        flash = max(0, flash - 1)
        draw_board(screen, gs.grid, args.cell, hint=hint, blockers=blockers if flash else ())
        status = "CLEARED" if gs.is_cleared() else f"{len(gs.grid)} worms left"
        pygame.display.set_caption(f"wormgrid - {gs.width}x{gs.height}  moves {gs.moves}  {status}")
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()

if __name__ == "__main__":
    main()
