# hajime_run/game/sprite.py
from __future__ import annotations
from typing import Tuple
import pygame

from .render import Canvas


class AnimatedSprite:
    """
    Frame-grid animation over one sprite sheet.
    - the sheet is cut into nx columns x ny rows, traversed row-major
    - frame_duration is seconds per frame
    - repeat=False plays once: `ended` flips when the last frame has been
      shown for a full frame_duration, and the last frame is held until reset()
    """
    def __init__(self, image: pygame.Surface, nx: int, ny: int,
                 frame_duration: float, repeat: bool = True):
        if nx < 1 or ny < 1:
            raise ValueError(f"frame grid must be at least 1x1, got {nx}x{ny}")
        if frame_duration <= 0:
            raise ValueError(f"frame_duration must be > 0, got {frame_duration}")
        self.image = image
        self.nx = int(nx)
        self.ny = int(ny)
        self.frame_duration = float(frame_duration)
        w, h = image.get_size()
        self.frame_w = w / self.nx
        self.frame_h = h / self.ny
        self.repeat = repeat
        self.ix = 0
        self.iy = 0
        self.t_acc = 0.0
        self.ended = False

    def advance(self, delta: float):
        """Move the local clock forward; may cross several frames at once."""
        self.t_acc += delta
        while self.t_acc >= self.frame_duration:
            self.t_acc -= self.frame_duration
            if self.ended:
                continue
            self.ix += 1
            if self.ix == self.nx:
                self.ix = 0
                self.iy += 1
                if self.iy == self.ny:
                    if self.repeat:
                        self.iy = 0
                    else:
                        # hold the last frame
                        self.ended = True
                        self.ix = self.nx - 1
                        self.iy = self.ny - 1

    def frame_rect(self) -> Tuple[float, float, float, float]:
        return (self.ix * self.frame_w, self.iy * self.frame_h, self.frame_w, self.frame_h)

    def draw(self, canvas: Canvas, dst: Tuple[float, float, float, float]):
        sx, sy, sw, sh = self.frame_rect()
        dx, dy, dw, dh = dst
        canvas.blit(self.image, sx, sy, sw, sh, dx, dy, dw, dh)

    def draw_and_advance(self, canvas: Canvas, dst: Tuple[float, float, float, float], delta: float):
        self.draw(canvas, dst)
        self.advance(delta)

    def reset(self):
        self.ix = 0
        self.iy = 0
        self.t_acc = 0.0
        self.ended = False
