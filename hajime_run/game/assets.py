# hajime_run/game/assets.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict
import pygame

from .config import (
    ASSET_FILES, RUN_GRID, JUMP_GRID, SEG_NORMAL_W, SEG_GAP_W, FLOOR_H,
    COLOR_RUNNER, COLOR_RUNNER_ALT, COLOR_FLOOR, COLOR_FLOOR_TOP, COLOR_CRACK,
)

logger = logging.getLogger(__name__)

FRAME_PX = 64   # placeholder sheet cell size


class AssetError(RuntimeError):
    """An image could not be loaded; fatal before the game starts."""


def load_assets(res_dir: str | Path) -> Dict[str, pygame.Surface]:
    """Load the four sheets by logical name from res_dir."""
    res_dir = Path(res_dir)
    images: Dict[str, pygame.Surface] = {}
    for name, filename in ASSET_FILES.items():
        path = res_dir / filename
        if not path.exists():
            raise AssetError(f"missing asset '{name}': {path}")
        try:
            images[name] = pygame.image.load(str(path))
        except pygame.error as e:
            raise AssetError(f"could not decode asset '{name}': {path}") from e
        logger.debug("loaded %s from %s (%dx%d)", name, path, *images[name].get_size())
    return images


def _runner_sheet(grid, color, alt) -> pygame.Surface:
    """Blocky runner; every cell shifts the legs so frames are distinguishable."""
    nx, ny = grid
    sheet = pygame.Surface((nx * FRAME_PX, ny * FRAME_PX), pygame.SRCALPHA)
    for i in range(nx * ny):
        ox, oy = (i % nx) * FRAME_PX, (i // nx) * FRAME_PX
        pygame.draw.rect(sheet, color, (ox + 20, oy + 8, 24, 32))
        stride = (i % 4) * 4
        pygame.draw.rect(sheet, alt, (ox + 16 + stride, oy + 40, 8, 20))
        pygame.draw.rect(sheet, alt, (ox + 40 - stride, oy + 40, 8, 20))
    return sheet


def _floor_tile(w: int, cracked: bool) -> pygame.Surface:
    tile = pygame.Surface((w, FLOOR_H), pygame.SRCALPHA)
    tile.fill(COLOR_FLOOR)
    pygame.draw.rect(tile, COLOR_FLOOR_TOP, (0, 0, w, 8))
    if cracked:
        # hole drawn where the lethal window sits
        pygame.draw.rect(tile, (0, 0, 0, 0), (w // 2 - 60, 0, 120, FLOOR_H))
        pygame.draw.line(tile, COLOR_CRACK, (w // 2 - 60, 0), (w // 2 - 60, FLOOR_H), 3)
        pygame.draw.line(tile, COLOR_CRACK, (w // 2 + 60, 0), (w // 2 + 60, FLOOR_H), 3)
    return tile


def placeholder_assets() -> Dict[str, pygame.Surface]:
    """Procedural stand-in art with the same frame grids as the real sheets."""
    return {
        "run": _runner_sheet(RUN_GRID, COLOR_RUNNER, COLOR_RUNNER_ALT),
        "jump": _runner_sheet(JUMP_GRID, COLOR_RUNNER_ALT, COLOR_RUNNER),
        "floor_normal": _floor_tile(SEG_NORMAL_W, cracked=False),
        "floor_cracked": _floor_tile(SEG_GAP_W, cracked=True),
    }
