# Worm colours (packed 0xRRGGBB). Soft candy tones that read well on a dark board.

from typing import Tuple

from .rng import PMRandom

PALETTE = (
    0xF87171, 0xFB923C, 0xFBBF24, 0xA3E635,
    0x34D399, 0x22D3EE, 0x60A5FA, 0xA78BFA,
    0xE879F9, 0xFB7185, 0x38BDF8, 0x4ADE80,
    0xFACC15, 0xF472B6, 0x67E8F9, 0xC084FC,
)

BOARD_BG = 0x1E1E2E
GRID_LINE = 0x313244


def pick_color(rng: PMRandom) -> int:
    return rng.choice(PALETTE)


def unpack_rgb(color: int) -> Tuple[int, int, int]:
    return ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)


def darken(color: int, factor: float = 0.6) -> Tuple[int, int, int]:
    r, g, b = unpack_rgb(color)
    return (int(r * factor), int(g * factor), int(b * factor))
