# hajime_run/game/render.py
from __future__ import annotations
from typing import Dict, Protocol, Tuple
import pygame

from .config import WIDTH, HEIGHT

Color = Tuple[int, int, int]
Font = Tuple[int, str]   # (size, family)


class Canvas(Protocol):
    """
    Drawing primitives the game needs, expressed on a fixed logical
    canvas of WIDTH x HEIGHT units.
    """
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...

    def draw_text(self, text: str, x: float, y: float, font: Font,
                  align: str = "left", color: Color = (255, 255, 255)) -> None: ...

    def blit(self, image: pygame.Surface,
             sx: float, sy: float, sw: float, sh: float,
             dx: float, dy: float, dw: float, dh: float) -> None: ...


class NullCanvas:
    """Discards every draw call (headless simulation)."""

    def fill_rect(self, x, y, w, h, color) -> None:
        pass

    def draw_text(self, text, x, y, font, align="left", color=(255, 255, 255)) -> None:
        pass

    def blit(self, image, sx, sy, sw, sh, dx, dy, dw, dh) -> None:
        pass


class PygameCanvas:
    """
    Canvas over a pygame Surface of the logical size.
    - draw_text y is the text baseline (like a 2D canvas fillText)
    - blit crops the source rect and scales it to the destination size;
      scaled crops are cached per (image, src, size)
    """
    def __init__(self, surface: pygame.Surface | None = None):
        self.surface = surface if surface is not None else pygame.Surface((WIDTH, HEIGHT))
        self._fonts: Dict[Font, pygame.font.Font] = {}
        self._frames: Dict[Tuple[int, Tuple[int, int, int, int], Tuple[int, int]], pygame.Surface] = {}

    def _font(self, font: Font) -> pygame.font.Font:
        f = self._fonts.get(font)
        if f is None:
            if not pygame.font.get_init():
                pygame.font.init()
            size, family = font
            f = pygame.font.SysFont(family, size)
            self._fonts[font] = f
        return f

    def fill_rect(self, x, y, w, h, color) -> None:
        self.surface.fill(color, pygame.Rect(int(x), int(y), int(w), int(h)))

    def draw_text(self, text, x, y, font, align="left", color=(255, 255, 255)) -> None:
        f = self._font(font)
        img = f.render(text, True, color)
        left = x - img.get_width() // 2 if align == "center" else x
        top = y - f.get_ascent()
        self.surface.blit(img, (int(left), int(top)))

    def blit(self, image, sx, sy, sw, sh, dx, dy, dw, dh) -> None:
        src = (int(sx), int(sy), int(sw), int(sh))
        size = (int(dw), int(dh))
        key = (id(image), src, size)
        frame = self._frames.get(key)
        if frame is None:
            frame = image.subsurface(pygame.Rect(src))
            if size != (src[2], src[3]):
                frame = pygame.transform.scale(frame, size)
            self._frames[key] = frame
        self.surface.blit(frame, (round(dx), round(dy)))

    def present(self, window: pygame.Surface) -> None:
        """Copy the logical surface onto the window, scaled to fit."""
        if window.get_size() == self.surface.get_size():
            window.blit(self.surface, (0, 0))
        else:
            window.blit(pygame.transform.scale(self.surface, window.get_size()), (0, 0))
