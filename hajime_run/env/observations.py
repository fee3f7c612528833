# hajime_run/env/observations.py
from __future__ import annotations
from typing import Tuple
import numpy as np

from hajime_run.game.config import SPEED_MAX, PLAYER_HIT_LEFT, PLAYER_HIT_RIGHT
from hajime_run.game.session import PlayerState

# Probe distances upstream of the hitbox (the belt carries gaps toward +x)
PROBE_OFFSETS: Tuple[int, ...] = (0, 100, 200, 300, 400)
PROBE_HALF_W = (PLAYER_HIT_RIGHT - PLAYER_HIT_LEFT) // 2
OBS_SIZE = 3 + len(PROBE_OFFSETS)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _lethal_near(windows, center: float, half_w: float = PROBE_HALF_W) -> bool:
    lo, hi = center - half_w, center + half_w
    return any(a < hi and b > lo for a, b in windows)


def build_observation(controller, probe_offsets: Tuple[int, ...] = PROBE_OFFSETS) -> np.ndarray:
    """
    Returns a fixed (3 + len(probe_offsets),) float32 vector:
      [ time_scale_norm, airborne, jump_progress, lethal@+0, lethal@-100, ... ]
    - time_scale_norm in [0,1] over [1, SPEED_MAX]
    - airborne is 1.0 while the jump animation plays
    - jump_progress in [0,1]: fraction of the jump animation already shown
    - lethal flags are 0.0/1.0; probe k looks probe_offsets[k] px upstream
      of the hitbox centre (0 means "overlapping the hitbox right now")
    """
    s = controller.session
    ts_norm = _clamp01((s.time_scale - 1.0) / max(1e-8, SPEED_MAX - 1.0))
    airborne = 1.0 if s.player_state is PlayerState.JUMP else 0.0

    js = controller.jump_sprite
    total = js.nx * js.ny
    shown = js.iy * js.nx + js.ix
    progress = 0.0
    if airborne:
        progress = 1.0 if js.ended else _clamp01(shown / total)

    windows = controller.floor.lethal_windows()
    center = (PLAYER_HIT_LEFT + PLAYER_HIT_RIGHT) / 2
    feats = [ts_norm, airborne, progress]
    for dx in probe_offsets:
        feats.append(1.0 if _lethal_near(windows, center - dx) else 0.0)
    return np.asarray(feats, dtype=np.float32)
