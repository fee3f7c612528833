# hajime_run/tests/test_env.py
"""
Quick tests for HajimeRunEnv (Gymnasium environment).

Usage (from repo root):
  pytest hajime_run/tests/test_env.py
  python -m hajime_run.tests.test_env
"""
from __future__ import annotations
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from hajime_run.env.hr_env import HajimeRunEnv
from hajime_run.env.observations import build_observation, OBS_SIZE, PROBE_OFFSETS
from hajime_run.game.floor import FloorGen, FloorSegment
from hajime_run.game.controller import GameController
from hajime_run.game.session import GameState
from hajime_run.tests.fakes import make_images


def test_api_check():
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = HajimeRunEnv(frame_skip=4)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_reset_starts_in_play():
    env = HajimeRunEnv()
    try:
        obs, info = env.reset(seed=7)
        assert env.observation_space.contains(obs)
        assert obs.shape == (OBS_SIZE,) and obs.dtype == np.float32
        assert info["state"] == "PLAY"
        assert info["seed"] == 7
        assert obs[1] == 1.0            # opening jump
    finally:
        env.close()


def test_noop_rollout_eventually_falls_in():
    env = HajimeRunEnv(frame_skip=4, time_limit_seconds=None)
    try:
        env.reset(seed=11)
        r, term, info = 0.0, False, {}
        for _ in range(20_000):
            _, r, term, trunc, info = env.step(0)
            assert not trunc
            if term:
                break
        assert term, "a runner that never jumps must hit a gap"
        assert r == -1.0
        assert info["state"] == "GAME_OVER"
        assert info["time_scale"] == 1.0
    finally:
        env.close()


def test_time_limit_truncates():
    env = HajimeRunEnv(frame_skip=4, time_limit_seconds=0.5)
    try:
        env.reset(seed=3)
        # 0.5 s at 15 decisions/s -> 7 decisions, all over the solid opening
        trunc = False
        for t in range(7):
            _, r, term, trunc, _ = env.step(0)
            assert not term and r == 1.0
        assert trunc
    finally:
        env.close()


def test_determinism():
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = HajimeRunEnv(frame_skip=4)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.random_sample() < 0.1) for _ in range(400)]
    t1 = rollout(123, action_seq)
    t2 = rollout(123, action_seq)
    assert len(t1) == len(t2)
    for (o1, r1, te1, tr1), (o2, r2, te2, tr2) in zip(t1, t2):
        assert np.array_equal(o1, o2)
        assert (r1, te1, tr1) == (r2, te2, tr2)


def test_observation_flags_gap_at_hitbox_and_upstream():
    floor = FloorGen(seed=0, hole_prob=0.0, hole_prob_mul=0.0)
    game = GameController(make_images(), floor=floor)
    game.record_jump_press()
    game.update(0.0, 0.0)
    assert game.session.state is GameState.PLAY

    floor._segs.clear()
    floor._segs.append(FloorSegment(None, 500.0, is_gap=True))   # window [770, 820]
    floor._segs.append(FloorSegment(None, 200.0, is_gap=True))   # window [470, 520]
    obs = build_observation(game)

    probes = dict(zip(PROBE_OFFSETS, obs[3:]))
    assert probes[0] == 1.0
    assert probes[100] == 0.0
    assert probes[300] == 1.0
    assert obs[0] == 0.0              # time_scale at its floor
    assert obs[1] == 1.0              # airborne
    assert 0.0 <= obs[2] < 1.0


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("🎉 All env tests passed")


if __name__ == "__main__":
    main()
