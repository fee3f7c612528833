# hajime_run/game/floor.py
from __future__ import annotations
import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple
import pygame

from .config import (
    WIDTH, FLOOR_SPEED, HOLE_PROB, HOLE_PROB_MUL,
    SEG_NORMAL_W, SEG_GAP_W, FLOOR_Y, FLOOR_H,
    PLAYER_HIT_LEFT, PLAYER_HIT_RIGHT, GAP_HIT_LEFT, GAP_HIT_RIGHT,
)
from .render import Canvas

logger = logging.getLogger(__name__)


@dataclass
class FloorSegment:
    image: Optional[pygame.Surface]
    x: float          # left edge; grows as the belt scrolls
    is_gap: bool = False

    @property
    def width(self) -> int:
        return SEG_GAP_W if self.is_gap else SEG_NORMAL_W

    @property
    def right(self) -> float:
        return self.x + self.width

    def lethal_window(self) -> Tuple[float, float]:
        """Part of a gap that counts as a hit (narrower than the art)."""
        return self.x + GAP_HIT_LEFT, self.x + GAP_HIT_RIGHT


class FloorGen:
    """
    Endless belt of floor tiles scrolling toward +x.
    New tiles are laid back-to-front on the left while the unfilled
    horizon is positive; tiles past the right edge are evicted.
    """
    def __init__(self, seed: int | None = None,
                 img_normal: pygame.Surface | None = None,
                 img_cracked: pygame.Surface | None = None,
                 rng: random.Random | None = None,
                 width: int = WIDTH,
                 belt_speed: float = FLOOR_SPEED,
                 hole_prob: float = HOLE_PROB,
                 hole_prob_mul: float = HOLE_PROB_MUL):
        if rng is None:
            if seed is None:
                seed = random.randrange(0, 2**32 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng
        self.img_normal = img_normal
        self.img_cracked = img_cracked
        self.width = width
        self.belt_speed = belt_speed
        self.hole_prob = hole_prob
        self.hole_prob_mul = hole_prob_mul
        self._pending = float(width)
        self._segs: Deque[FloorSegment] = deque()

    @property
    def segments(self) -> Tuple[FloorSegment, ...]:
        """Oldest (rightmost) first."""
        return tuple(self._segs)

    @property
    def pending(self) -> float:
        return self._pending

    def hole_probability(self, time_scale: float) -> float:
        # not clamped: p >= 1 makes every new tile a gap
        return self.hole_prob + (time_scale - 1.0) * self.hole_prob_mul

    def advance(self, delta: float, holes_enabled: bool = True, time_scale: float = 1.0):
        dx = self.belt_speed * delta
        self._pending += dx

        for seg in self._segs:
            seg.x += dx
        while self._segs and self._segs[0].x > self.width:
            self._segs.popleft()

        prob = self.hole_probability(time_scale)
        while self._pending > 0:
            hole = holes_enabled and (self.rng.random() < prob)
            self._pending -= SEG_GAP_W if hole else SEG_NORMAL_W
            self._segs.append(FloorSegment(
                image=self.img_cracked if hole else self.img_normal,
                x=self._pending,
                is_gap=hole,
            ))

    def reset(self):
        """Fresh belt: one screen of solid floor, no randomness consumed."""
        self._segs.clear()
        self._pending = float(self.width)
        self.advance(0.0, holes_enabled=False)
        logger.debug("floor reset: %d segments", len(self._segs))

    def lethal_windows(self) -> List[Tuple[float, float]]:
        return [s.lethal_window() for s in self._segs if s.is_gap]

    def checkhit(self) -> bool:
        for a, b in self.lethal_windows():
            if a < PLAYER_HIT_RIGHT and b > PLAYER_HIT_LEFT:
                return True
        return False

    def covered_span(self) -> Tuple[float, float]:
        """(left, right) of the belt; (0, 0) when empty."""
        if not self._segs:
            return 0.0, 0.0
        return self._segs[-1].x, self._segs[0].right

    def draw(self, canvas: Canvas):
        for seg in self._segs:
            if seg.image is None:
                continue
            w, h = seg.image.get_size()
            canvas.blit(seg.image, 0, 0, w, h, seg.x, FLOOR_Y, seg.width, FLOOR_H)
