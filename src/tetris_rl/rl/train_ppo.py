from __future__ import annotations

import argparse
import os

import gymnasium as gym

# Ensure envs are registered
import tetris_rl.env  # noqa: F401


ENV_ID = "Tetris-10x20-v0"


def make_env(gravity_every: int = 1, seed: int | None = None) -> gym.Env:
    env = gym.make(ENV_ID, gravity_every=gravity_every)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--timesteps", type=int, default=200_000)
    p.add_argument("--gravity_every", type=int, default=1,
                   help="Agent steps between automatic one-row falls")
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_tetris.zip")
    p.add_argument("--n_envs", type=int, default=4)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()

    from stable_baselines3 import PPO
    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    def make_env_idx(i: int):
        def thunk():
            seed = None if args.seed is None else args.seed + i
            return make_env(args.gravity_every, seed)
        return thunk

    vec_env = SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)])
    vec_env = VecMonitor(vec_env)
    model = PPO(
        policy="MultiInputPolicy",
        env=vec_env,
        verbose=1,
        tensorboard_log=args.logdir,
        seed=args.seed,
    )

    os.makedirs(os.path.dirname(args.save_path), exist_ok=True)
    model.learn(total_timesteps=args.timesteps)
    model.save(args.save_path)
    print(f"Saved model to {args.save_path}")


if __name__ == "__main__":  # pragma: no cover
    main()
