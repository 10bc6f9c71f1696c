from __future__ import annotations

import argparse

import gymnasium as gym

# Ensure envs are registered
import tetris_engine.env  # noqa: F401


def run_random(episodes: int = 3, seed: int | None = None, max_steps: int = 5000) -> list[float]:
    env = gym.make("Tetris-v0", max_episode_steps=max_steps)
    env.action_space.seed(seed)
    returns: list[float] = []
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    while len(returns) < episodes:
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            returns.append(total_reward)
            print(f"episode {len(returns)}: score={info['score']} lines={info['lines_cleared_total']} "
                  f"steps={info['steps']}")
            total_reward = 0.0
            obs, info = env.reset()
    env.close()
    return returns


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=3)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max_steps", type=int, default=5000)
    return p


def main() -> None:
    args = build_parser().parse_args()
    returns = run_random(args.episodes, args.seed, args.max_steps)
    print(f"Random agent mean return: {sum(returns) / max(1, len(returns)):.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
