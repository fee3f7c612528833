# hajime_run/game/controller.py
from __future__ import annotations
import logging
from typing import Any, Dict, Optional
import pygame

from .config import (
    WIDTH, HEIGHT,
    SPEED_INC, SPEED_INC_START, SPEED_MAX,
    JUMP_FLOOR_FACTOR, SCORE_PER_S,
    RUN_GRID, RUN_FRAME_S, JUMP_GRID, JUMP_FRAME_S, RUN_DST, JUMP_DST,
    TITLE_TEXT, GAME_OVER_TEXT, BLINK_PERIOD_S,
    PROMPT_VERB_KEY, PROMPT_VERB_TOUCH,
    FONT_TITLE, FONT_BIG, FONT_SMALL, FONT_SCORE,
    COLOR_BG, COLOR_FG,
)
from .floor import FloorGen
from .render import Canvas, NullCanvas
from .session import GameSession, GameState, JumpLatch, PlayerState
from .sprite import AnimatedSprite

logger = logging.getLogger(__name__)


def prompt_verb(touch: bool) -> str:
    return PROMPT_VERB_TOUCH if touch else PROMPT_VERB_KEY


def blink_visible(now: float) -> bool:
    """Prompt shows during the second half of every blink period."""
    return (now % BLINK_PERIOD_S) > BLINK_PERIOD_S / 2


class GameController:
    """
    Owns the session and drives floor, sprites and collision once per frame.

    TITLE --jump--> PLAY --hit while grounded--> GAME_OVER --jump--> TITLE
    Inside PLAY the runner alternates RUN --jump--> JUMP --anim ends--> RUN.
    """
    def __init__(self, images: Dict[str, pygame.Surface],
                 canvas: Optional[Canvas] = None,
                 seed: int | None = None,
                 floor: FloorGen | None = None,
                 verb: str = PROMPT_VERB_KEY):
        self.canvas: Canvas = canvas if canvas is not None else NullCanvas()
        self.session = GameSession()
        self.latch = JumpLatch()
        self.verb = verb

        self.run_sprite = AnimatedSprite(images["run"], *RUN_GRID, RUN_FRAME_S)
        self.jump_sprite = AnimatedSprite(images["jump"], *JUMP_GRID, JUMP_FRAME_S, repeat=False)
        if floor is None:
            floor = FloorGen(seed, images["floor_normal"], images["floor_cracked"])
        self.floor = floor

    # -------------------- Input --------------------

    def record_jump_press(self):
        self.latch.press()

    # -------------------- Transitions --------------------

    def _game_start(self):
        s = self.session
        s.move_to(GameState.PLAY)
        s.player_state = PlayerState.JUMP
        s.score = 0.0
        s.run_time = 0.0
        s.runs += 1
        self.floor.reset()
        self.jump_sprite.reset()
        logger.info("run %d started (time_scale=%.3f)", s.runs, s.time_scale)

    def _game_stop(self):
        s = self.session
        s.move_to(GameState.GAME_OVER)
        s.time_scale = 1.0
        logger.info("game over: score=%s after %.2fs", s.score_text, s.run_time)

    def _back_to_title(self):
        self.session.move_to(GameState.TITLE)

    # -------------------- Frame --------------------

    def update(self, real_delta: float, now: float) -> GameState:
        """
        One frame. real_delta is wall-clock seconds since the previous call,
        now is a free-running clock (seconds) used only for blinking text.
        """
        s = self.session
        delta = real_delta * s.time_scale
        jump = self.latch.poll()

        self.canvas.fill_rect(0, 0, WIDTH, HEIGHT, COLOR_BG)

        if s.state is GameState.TITLE:
            self._update_title(now, jump)
        elif s.state is GameState.PLAY:
            self._update_play(real_delta, delta, jump)
        elif s.state is GameState.GAME_OVER:
            self._update_game_over(now, jump)
        else:
            raise ValueError(f"unhandled game state {s.state}")
        return s.state

    def _update_title(self, now: float, jump: bool):
        c = self.canvas
        c.draw_text(TITLE_TEXT, WIDTH // 2, 100, FONT_TITLE, "center", COLOR_FG)
        if blink_visible(now):
            c.draw_text(f"{self.verb} to jump", WIDTH // 2, 200, FONT_SMALL, "center", COLOR_FG)
        if jump:
            self._game_start()

    def _update_play(self, real_delta: float, delta: float, jump: bool):
        s = self.session
        s.run_time += real_delta
        if s.run_time >= SPEED_INC_START:
            s.time_scale = min(s.time_scale + SPEED_INC * real_delta, SPEED_MAX)

        s.score += delta * SCORE_PER_S

        airborne = s.player_state is PlayerState.JUMP
        self.floor.advance(delta * (JUMP_FLOOR_FACTOR if airborne else 1.0),
                           time_scale=s.time_scale)

        if s.player_state is PlayerState.RUN and jump:
            s.player_state = PlayerState.JUMP
            self.jump_sprite.reset()
            logger.debug("jump at score=%s", s.score_text)

        if s.player_state is not PlayerState.JUMP and self.floor.checkhit():
            self._game_stop()

        if s.player_state is PlayerState.JUMP:
            self.jump_sprite.draw_and_advance(self.canvas, JUMP_DST, delta)
            if self.jump_sprite.ended:
                s.player_state = PlayerState.RUN
                self.run_sprite.reset()
                logger.debug("landed at score=%s", s.score_text)
        elif s.player_state is PlayerState.RUN:
            self.run_sprite.draw_and_advance(self.canvas, RUN_DST, delta)
        else:
            raise ValueError(f"unhandled player state {s.player_state}")

        self.floor.draw(self.canvas)
        self.canvas.draw_text(s.score_text, 20, 40, FONT_SCORE, "left", COLOR_FG)

    def _update_game_over(self, now: float, jump: bool):
        c = self.canvas
        c.draw_text(GAME_OVER_TEXT, WIDTH // 2, 100, FONT_BIG, "center", COLOR_FG)
        c.draw_text(f"SCORE: {self.session.score_text}", WIDTH // 2, 150, FONT_SMALL, "center", COLOR_FG)
        if blink_visible(now):
            c.draw_text(f"{self.verb} to return", WIDTH // 2, 200, FONT_SMALL, "center", COLOR_FG)
        self.run_sprite.draw(c, RUN_DST)
        self.floor.draw(c)
        if jump:
            self._back_to_title()

    # -------------------- Introspection --------------------

    def snapshot(self) -> Dict[str, Any]:
        s = self.session
        return {
            "state": s.state.name,
            "player_state": s.player_state.name,
            "score": s.score,
            "time_scale": s.time_scale,
            "run_time": s.run_time,
            "runs": s.runs,
            "segments": len(self.floor.segments),
            "seed": self.floor.seed,
        }
