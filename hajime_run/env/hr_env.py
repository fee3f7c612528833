# hajime_run/env/hr_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from hajime_run.game.config import WIDTH, HEIGHT, FPS
from hajime_run.game.assets import placeholder_assets
from hajime_run.game.controller import GameController
from hajime_run.game.render import NullCanvas, PygameCanvas
from hajime_run.game.session import GameState, PlayerState
from hajime_run.env.observations import build_observation, OBS_SIZE


class HajimeRunEnv(gym.Env):
    """
    Hajime Run Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), real_delta = 1/60 per frame.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (OBS_SIZE,), float32, see observations.build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.sim_fps = FPS
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=0.0, high=1.0, shape=(OBS_SIZE,), dtype=np.float32)

        self.game: Optional[GameController] = None
        self.images = None
        self.canvas = None
        self.sim_time: float = 0.0
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        self.window = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Explicit seed drives the floor directly; otherwise draw one from np_random
        if seed is not None:
            level_seed = int(seed)
        else:
            level_seed = int(self.np_random.integers(0, 2**31 - 1))

        if self.images is None:
            self.images = placeholder_assets()
        if self.canvas is None:
            if self.render_mode is None:
                self.canvas = NullCanvas()
            else:
                pygame.init()
                self.canvas = PygameCanvas()

        self.game = GameController(self.images, canvas=self.canvas, seed=level_seed)
        self.sim_time = 0.0
        self.timestep = 0
        self.current_seed = level_seed

        # TITLE -> PLAY on the very first frame
        self.game.record_jump_press()
        self.game.update(0.0, self.sim_time)
        assert self.game.session.state is GameState.PLAY

        return self._get_obs(), self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.game is not None

        if int(action) == 1:
            self.game.record_jump_press()

        state = self.game.session.state
        for _ in range(self.frame_skip):
            self.sim_time += self.dt
            state = self.game.update(self.dt, self.sim_time)
            if state is GameState.GAME_OVER:
                break

        alive = state is GameState.PLAY
        reward = 1.0 if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.game is not None
        return build_observation(self.game)

    def _info(self) -> Dict[str, Any]:
        info = self.game.snapshot()
        info["timestep"] = self.timestep
        info["grounded"] = self.game.session.player_state is PlayerState.RUN
        return info

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.canvas is None:
            return

        if self.render_mode == "rgb_array":
            # (H, W, 3) uint8
            arr = pygame.surfarray.array3d(self.canvas.surface)  # (W, H, 3)
            return np.transpose(arr, (1, 0, 2))

        if self.window is None:
            pygame.display.init()
            self.window = pygame.display.set_mode((WIDTH, HEIGHT))
            pygame.display.set_caption("Hajime Run — Gym Env")
            self.clock = pygame.time.Clock()

        # Pump minimal event queue so the OS doesn't think we're hung
        pygame.event.pump()
        self.canvas.present(self.window)
        pygame.display.flip()
        if self.clock is not None:
            self.clock.tick(self.metadata.get("render_fps", 60))

    def close(self):
        if self.window is not None:
            pygame.display.quit()
            pygame.quit()
            self.window = None
            self.clock = None
