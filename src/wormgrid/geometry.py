# src/wormgrid/geometry.py
# Grid-relative coordinates and the four exit directions.
# Screen convention: x grows right, y grows down.

from enum import IntEnum
from typing import Dict, Tuple

XY = Tuple[int, int]


class Direction(IntEnum):
    # Values are the snapshot wire codes.
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


DIR_DELTA: Dict[Direction, XY] = {
    Direction.UP:    ( 0, -1),
    Direction.DOWN:  ( 0,  1),
    Direction.LEFT:  (-1,  0),
    Direction.RIGHT: ( 1,  0),
}

ALL_DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def step(p: XY, d: Direction) -> XY:
    dx, dy = DIR_DELTA[d]
    return (p[0] + dx, p[1] + dy)


def is_adjacent(a: XY, b: XY) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1
