from __future__ import annotations

from typing import Optional

import gymnasium as gym

import tetris_rl.env  # noqa: F401  ensure registration
from tetris_rl.visualization.text import print_board


def run_random(steps: int = 200, seed: Optional[int] = None, show_final: bool = True) -> float:
    env = gym.make("Tetris-10x20-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            print(f"Episode {episodes}: score={info['score']} lines={info['lines_cleared_total']}")
            if show_final:
                print_board(env.unwrapped.game.snapshot())
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    run_random()
