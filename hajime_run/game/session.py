# hajime_run/game/session.py
from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum

from .config import SCORE_DIGITS


class GameState(Enum):
    TITLE = 1
    PLAY = 2
    GAME_OVER = 3


class PlayerState(Enum):
    RUN = 1
    JUMP = 2


# only legal moves of the outer state machine
NEXT_STATE = {
    GameState.TITLE: GameState.PLAY,
    GameState.PLAY: GameState.GAME_OVER,
    GameState.GAME_OVER: GameState.TITLE,
}


@dataclass
class GameSession:
    """
    Everything that outlives a single frame.
    player_state is only meaningful while state == PLAY.
    """
    state: GameState = GameState.TITLE
    player_state: PlayerState = PlayerState.RUN
    score: float = 0.0
    time_scale: float = 1.0
    run_time: float = 0.0     # real seconds spent in the current PLAY run
    runs: int = 0

    def move_to(self, target: GameState):
        if NEXT_STATE[self.state] is not target:
            raise ValueError(f"illegal transition {self.state.name} -> {target.name}")
        self.state = target

    @property
    def score_text(self) -> str:
        return score_text(self.score)


def score_text(score: float, digits: int = SCORE_DIGITS) -> str:
    return str(math.floor(score)).zfill(digits)


class JumpLatch:
    """
    Two-state (IDLE/ARMED) latch turning raw press events into a jump edge
    that is true for exactly one frame.
    - press(): called once per physical event, any number of times per frame
    - poll(): called once at the frame boundary; True once per armed period
    """
    IDLE = 0
    ARMED = 1

    def __init__(self):
        self.state = JumpLatch.IDLE

    def press(self):
        self.state = JumpLatch.ARMED

    def poll(self) -> bool:
        if self.state == JumpLatch.ARMED:
            self.state = JumpLatch.IDLE
            return True
        return False
