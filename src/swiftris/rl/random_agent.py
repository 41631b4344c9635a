from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import gymnasium as gym

import swiftris.env  # noqa: F401


logger = logging.getLogger(__name__)


def run_random(episodes: int = 5, seed: Optional[int] = None, max_steps: int = 5000) -> List[dict]:
    env = gym.make("Swiftris-10x20-v0", max_episode_steps=max_steps)
    env.action_space.seed(seed)
    results: List[dict] = []
    try:
        for ep in range(episodes):
            obs, info = env.reset(seed=None if seed is None else seed + ep)
            total_reward = 0.0
            steps = 0
            while True:
                action = env.action_space.sample()
                obs, reward, terminated, truncated, info = env.step(action)
                total_reward += float(reward)
                steps += 1
                if "LevelUp" in info["events"]:
                    logger.info("episode %d reached level %d", ep + 1, info["level"])
                if terminated or truncated:
                    break
            results.append({
                "episode": ep + 1,
                "steps": steps,
                "reward": total_reward,
                "score": info["score"],
                "lines": info["lines_cleared"],
                "level": info["level"],
            })
    finally:
        env.close()
    return results


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Swiftris with uniformly random actions")
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max-steps", type=int, default=5000)
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    for result in run_random(args.episodes, args.seed, args.max_steps):
        print(
            f"Episode {result['episode']}: steps={result['steps']} reward={result['reward']:.1f} "
            f"score={result['score']} lines={result['lines']} level={result['level']}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
