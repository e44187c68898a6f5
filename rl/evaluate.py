"""
Evaluation script for scripted collector policies
"""

import os
import csv
import time
import argparse
from typing import Callable, Dict, List, Optional

import numpy as np

from game.collector import CollectorEnv
from game.collector.utils import distance
from rl.configs.collector_config import ENV_CONFIG, REWARD_CONFIG, EVAL_CONFIG


# ----------------------------
# Policies
# ----------------------------

def idle_policy(env: CollectorEnv) -> np.ndarray:
    """Never press anything"""
    return np.zeros(4, dtype=np.int64)


def random_policy(env: CollectorEnv) -> np.ndarray:
    """Uniformly random key combination"""
    return env.action_space.sample()


def greedy_policy(env: CollectorEnv, deadzone: float = 3.0) -> np.ndarray:
    """
    Head straight for the nearest collectible.

    Vertical and horizontal keys are chosen independently, so the avatar
    moves diagonally until one axis lines up.
    """
    s = env.session
    a = s.avatar
    if not s.collectibles:
        return idle_policy(env)

    target = min(s.collectibles, key=lambda c: distance(a.x, a.y, c.x, c.y))
    dx = target.x - a.x
    dy = target.y - a.y

    up = dy < -deadzone
    down = dy > deadzone
    left = dx < -deadzone
    right = dx > deadzone
    return np.array([up, down, left, right], dtype=np.int64)


POLICIES: Dict[str, Callable[[CollectorEnv], np.ndarray]] = {
    "idle": idle_policy,
    "random": random_policy,
    "greedy": greedy_policy,
}


# ----------------------------
# Evaluation
# ----------------------------

def evaluate_policy(
    policy: str = "greedy",
    n_episodes: int = 10,
    seed: Optional[int] = 42,
    max_steps: Optional[int] = None,
    render: bool = False,
    csv_path: Optional[str] = None,
) -> Dict[str, object]:
    """
    Run a scripted policy for several episodes and summarise the results

    Args:
        policy: One of POLICIES
        n_episodes: Number of episodes to run
        seed: Base seed; episode i is seeded with seed + i
        max_steps: Override the step budget from ENV_CONFIG
        render: Show the Arcade window while playing
        csv_path: Write one row per episode to this file
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}")
    act = POLICIES[policy]

    env_kwargs = dict(ENV_CONFIG)
    if max_steps is not None:
        env_kwargs["max_steps"] = max_steps
    env = CollectorEnv(render_mode="human" if render else None,
                       rewards=REWARD_CONFIG, **env_kwargs)
    env.action_space.seed(seed)

    rows: List[Dict[str, object]] = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(act(env))
            total_reward += reward
            steps += 1

            if render:
                time.sleep(env.frame_ms / 1000.0)

        rows.append({
            "episode": episode + 1,
            "reward": total_reward,
            "length": steps,
            "score": info["score"],
            "collected": info["collected"],
            "health": info["health"],
            "survived": int(not terminated),
        })

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Score = {info['score']}, "
              f"Collected = {info['collected']}, Health = {info['health']}, Length = {steps}")

    env.close()

    if csv_path:
        write_csv(csv_path, rows)

    rewards = np.array([r["reward"] for r in rows], dtype=np.float64)
    scores = np.array([r["score"] for r in rows], dtype=np.float64)
    lengths = np.array([r["length"] for r in rows], dtype=np.float64)

    results = {
        "policy": policy,
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_score": float(np.mean(scores)),
        "std_score": float(np.std(scores)),
        "mean_length": float(np.mean(lengths)),
        "survival_rate": float(np.mean([r["survived"] for r in rows])),
        "episodes": rows,
    }

    print("\n" + "=" * 50)
    print(f"Evaluation Results: {policy} ({n_episodes} episodes)")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Score: {results['mean_score']:.1f} ± {results['std_score']:.1f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print(f"Survival Rate: {results['survival_rate']:.0%}")
    print("=" * 50)

    return results


def write_csv(csv_path: str, rows: List[Dict[str, object]]):
    """Dump per-episode rows to CSV for plotting"""
    directory = os.path.dirname(csv_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    fields = ["episode", "reward", "length", "score", "collected", "health", "survived"]
    with open(csv_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fields)
        writer.writeheader()
        writer.writerows(rows)

    print(f"Saved episode metrics to {csv_path}")


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(description="Evaluate scripted policies on the collector game")
    parser.add_argument(
        "--policy",
        type=str,
        default="greedy",
        choices=sorted(POLICIES),
        help="Policy to run (default: greedy)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=EVAL_CONFIG["n_episodes"],
        help=f"Number of evaluation episodes (default: {EVAL_CONFIG['n_episodes']})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=EVAL_CONFIG["seed"],
        help=f"Random seed (default: {EVAL_CONFIG['seed']})",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Step budget per episode (default: from ENV_CONFIG)",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Show the game window",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write per-episode metrics to this CSV file",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help=f"Also evaluate the {EVAL_CONFIG['baseline_policy']} policy for comparison",
    )

    args = parser.parse_args(argv)

    results = evaluate_policy(
        policy=args.policy,
        n_episodes=args.n_episodes,
        seed=args.seed,
        max_steps=args.max_steps,
        render=args.render,
        csv_path=args.csv,
    )

    baseline = EVAL_CONFIG["baseline_policy"]
    if args.compare_random and args.policy != baseline:
        print("\n")
        baseline_results = evaluate_policy(
            policy=baseline,
            n_episodes=args.n_episodes,
            seed=args.seed,
            max_steps=args.max_steps,
        )

        improvement = results["mean_score"] - baseline_results["mean_score"]
        print(f"\nScore improvement over {baseline}: {improvement:.1f}")


if __name__ == "__main__":
    main()
