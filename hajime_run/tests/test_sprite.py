# hajime_run/tests/test_sprite.py
"""
Frame-grid animation tests.

Usage (from repo root):
  pytest hajime_run/tests/test_sprite.py
  python -m hajime_run.tests.test_sprite
"""
from __future__ import annotations
import pygame
import pytest

from hajime_run.game.sprite import AnimatedSprite
from hajime_run.tests.fakes import RecordingCanvas

# dyadic durations keep the float accumulator exact
FRAME_S = 0.25


def make_sprite(nx=4, ny=3, repeat=True) -> AnimatedSprite:
    return AnimatedSprite(pygame.Surface((nx * 50, ny * 40)), nx, ny, FRAME_S, repeat=repeat)


def test_frame_size_and_first_rect():
    sp = make_sprite()
    assert (sp.frame_w, sp.frame_h) == (50, 40)
    assert sp.frame_rect() == (0, 0, 50, 40)
    assert (sp.ix, sp.iy, sp.t_acc, sp.ended) == (0, 0, 0.0, False)


def test_row_major_traversal():
    sp = make_sprite()
    sp.advance(FRAME_S)
    assert (sp.ix, sp.iy) == (1, 0)
    sp.advance(3 * FRAME_S)           # crosses the end of row 0 in one call
    assert (sp.ix, sp.iy) == (0, 1)
    assert sp.frame_rect() == (0, 40, 50, 40)
    sp.advance(FRAME_S / 2)
    assert (sp.ix, sp.iy) == (0, 1)
    assert sp.t_acc == FRAME_S / 2


def test_repeat_wraps_to_first_frame():
    sp = make_sprite(nx=4, ny=2)
    sp.advance(8 * FRAME_S)
    assert (sp.ix, sp.iy) == (0, 0)
    assert not sp.ended


def test_batching_invariance():
    deltas = [0.5, 0.125, 0.375, 0.25, 0.125, 1.0, 0.0, 0.625]
    for repeat in (True, False):
        one = make_sprite(repeat=repeat)
        many = make_sprite(repeat=repeat)
        one.advance(sum(deltas))
        for d in deltas:
            many.advance(d)
        assert (one.ix, one.iy, one.t_acc, one.ended) == (many.ix, many.iy, many.t_acc, many.ended)


def test_accumulator_stays_below_frame_duration():
    sp = make_sprite()
    for d in (0.1, 0.3, 0.7, 1.9, 0.05, 2.5):
        sp.advance(d)
        assert 0.0 <= sp.t_acc < FRAME_S


def test_non_repeating_ends_once_and_holds_last_frame():
    sp = make_sprite(nx=4, ny=3, repeat=False)
    sp.advance(11 * FRAME_S)
    assert (sp.ix, sp.iy) == (3, 2)
    assert not sp.ended

    sp.advance(FRAME_S)               # 12th frame advance = nx * ny
    assert sp.ended
    assert (sp.ix, sp.iy) == (3, 2)
    assert sp.frame_rect() == (150, 80, 50, 40)

    sp.advance(10.0)
    assert sp.ended
    assert (sp.ix, sp.iy) == (3, 2)


def test_reset_restarts_non_repeating_sequence():
    sp = make_sprite(repeat=False)
    sp.advance(100.0)
    assert sp.ended
    sp.reset()
    assert (sp.ix, sp.iy, sp.t_acc, sp.ended) == (0, 0, 0.0, False)
    sp.advance(11 * FRAME_S)
    assert not sp.ended
    sp.advance(FRAME_S)
    assert sp.ended


def test_single_cell_sheet():
    sp = AnimatedSprite(pygame.Surface((20, 10)), 1, 1, 1.0)
    sp.advance(5.5)
    assert sp.frame_rect() == (0, 0, 20, 10)
    assert sp.t_acc == 0.5


def test_invalid_grid_or_duration():
    img = pygame.Surface((10, 10))
    with pytest.raises(ValueError):
        AnimatedSprite(img, 0, 1, 0.1)
    with pytest.raises(ValueError):
        AnimatedSprite(img, 1, 1, 0.0)


def test_draw_blits_current_frame_then_advances():
    sp = make_sprite()
    canvas = RecordingCanvas()
    sp.draw_and_advance(canvas, (700, 80, 200, 200), FRAME_S)
    (_, image, src, dst), = canvas.blits
    assert image is sp.image
    assert src == (0, 0, 50, 40)       # drawn before advancing
    assert dst == (700, 80, 200, 200)
    assert (sp.ix, sp.iy) == (1, 0)


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("✓ Sprite tests ok")


if __name__ == "__main__":
    main()
