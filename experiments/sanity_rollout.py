# /experiments/sanity_rollout.py
"""
Sanity rollouts for HajimeRunEnv.

Plays a no-op, a random and a gap-watching policy over fixed seeds and writes
one CSV row per episode (score reached, peak time_scale, jumps taken).

Usage examples (from repo root):
  python -m experiments.sanity_rollout
  python -m experiments.sanity_rollout --policies watcher --seeds 7,8,9
  python -m experiments.sanity_rollout --decisions 600 --csv /tmp/hajime.csv
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np

from hajime_run.env.hr_env import HajimeRunEnv

# obs layout: [time_scale_norm, airborne, jump_progress, lethal@0, lethal@100, ...]
AIRBORNE_IDX = 1
TRIGGER_PROBE_IDX = 4   # lethal window ~100 px upstream of the hitbox

Policy = Callable[[np.ndarray], int]
FIELDS = ["policy", "seed", "decisions", "score", "time_scale_peak", "jumps", "outcome"]


def make_policy(name: str, seed: int) -> Policy:
    if name == "noop":
        return lambda obs: 0
    if name == "random":
        rng = np.random.default_rng(10_000 + seed)
        return lambda obs: int(rng.random() < 0.1)
    if name == "watcher":
        # grounded and a gap about to reach the hitbox: the slowed belt
        # carries it past while the jump animation plays
        return lambda obs: int(obs[AIRBORNE_IDX] < 0.5 and obs[TRIGGER_PROBE_IDX] > 0.5)
    raise ValueError(f"unknown policy {name!r}")


def play(policy_name: str, seed: int, frame_skip: int, max_decisions: int) -> Dict:
    env = HajimeRunEnv(frame_skip=frame_skip, time_limit_seconds=None)
    policy = make_policy(policy_name, seed)
    jumps = 0
    peak = 1.0
    outcome = "alive"
    try:
        obs, info = env.reset(seed=seed)
        for t in range(max_decisions):
            action = policy(obs)
            jumps += action
            obs, _, terminated, _, info = env.step(action)
            if terminated:
                outcome = "fell"
                break
            peak = max(peak, info["time_scale"])
    finally:
        env.close()
    return {
        "policy": policy_name,
        "seed": seed,
        "decisions": info["timestep"],
        "score": int(info["score"]),
        "time_scale_peak": round(peak, 4),
        "jumps": jumps,
        "outcome": outcome,
    }


def main():
    ap = argparse.ArgumentParser(description="Roll simple policies through HajimeRunEnv.")
    ap.add_argument("--policies", default="noop,random,watcher",
                    help="Comma-separated subset of noop,random,watcher")
    ap.add_argument("--seeds", default="101-120", help="Comma list or lo-hi range")
    ap.add_argument("--decisions", type=int, default=2000, help="Decision cap per episode")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--csv", default="experiments/runs/episodes.csv")
    args = ap.parse_args()

    if "-" in args.seeds:
        lo, hi = (int(v) for v in args.seeds.split("-", 1))
        seeds = list(range(lo, hi + 1))
    else:
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    policies = [p.strip() for p in args.policies.split(",") if p.strip()]

    rows: List[Dict] = []
    for name in policies:
        for seed in seeds:
            row = play(name, seed, args.frame_skip, args.decisions)
            rows.append(row)
            print(f"[{name}] seed={seed}  score={row['score']}  jumps={row['jumps']}  "
                  f"peak_ts={row['time_scale_peak']}  {row['outcome']}")

    out = Path(args.csv)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDS)
        writer.writeheader()
        writer.writerows(rows)

    for name in policies:
        scores = [r["score"] for r in rows if r["policy"] == name]
        print(f"{name:>8}: mean score {np.mean(scores):.0f}  best {max(scores)}")
    print(f"✓ {len(rows)} episodes written to {out}")


if __name__ == "__main__":
    main()
