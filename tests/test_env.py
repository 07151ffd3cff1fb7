import unittest

import gymnasium as gym
import numpy as np

import tetris_rl.env  # noqa: F401
from tetris_rl.env.tetris_env import TetrisEnv
from tetris_rl.game import Action, ActivePiece, MOVEMENT_ACTIONS, TetrominoType


class TetrisEnvTests(unittest.TestCase):
    def test_reset_observation_matches_space(self):
        env = TetrisEnv()
        obs, info = env.reset(seed=3)
        self.assertTrue(env.observation_space.contains(obs))
        self.assertEqual(obs["board"].shape, (20, 10))
        self.assertEqual(info["score"], 0)
        self.assertEqual(info["level"], 1)

    def test_same_seed_same_episode(self):
        def rollout(seed):
            env = TetrisEnv()
            obs, _ = env.reset(seed=seed)
            trace = [obs["next"]]
            for i in range(40):
                obs, _, terminated, truncated, _ = env.step(i % len(MOVEMENT_ACTIONS))
                trace.append(obs["next"])
                if terminated or truncated:
                    break
            return trace, obs["board"]

        a_trace, a_board = rollout(7)
        b_trace, b_board = rollout(7)
        self.assertEqual(a_trace, b_trace)
        np.testing.assert_array_equal(a_board, b_board)

    def test_gravity_follows_each_step(self):
        env = TetrisEnv(gravity_every=1)
        env.reset(seed=1)
        y = env.game.current_piece.y
        env.step(int(Action.MOVE_LEFT))
        self.assertEqual(env.game.current_piece.y, y + 1)

    def test_line_clear_rewards_score(self):
        env = TetrisEnv()
        env.reset(seed=1)
        env.game.current_piece = ActivePiece(TetrominoType.I, 1, 7, -2)
        env.game.grid.grid[19, :9] = 2
        _, reward, terminated, _, info = env.step(int(Action.HARD_DROP))
        self.assertEqual(info["engine_score_delta"], 40)
        self.assertEqual(info["lines_cleared_total"], 1)
        self.assertGreater(reward, 0.0)
        self.assertFalse(terminated)

    def test_stacking_to_the_top_terminates(self):
        env = TetrisEnv(terminal_penalty=-10.0)
        env.reset(seed=5)
        terminated = False
        info = {}
        for _ in range(100):
            _, _, terminated, truncated, info = env.step(int(Action.HARD_DROP))
            if terminated or truncated:
                break
        self.assertTrue(terminated)
        self.assertFalse(env.game.game_over)
        self.assertEqual(info["reward_components"]["terminal"], -10.0)
        self.assertTrue(env.game.grid.grid[0].any())

    def test_ordinary_lock_does_not_terminate(self):
        env = TetrisEnv()
        env.reset(seed=5)
        _, _, terminated, _, info = env.step(int(Action.HARD_DROP))
        self.assertFalse(terminated)
        self.assertNotIn("terminal", info["reward_components"])

    def test_truncates_after_max_steps(self):
        env = TetrisEnv(max_episode_steps=3)
        env.reset(seed=0)
        truncated = False
        for _ in range(3):
            _, _, _, truncated, _ = env.step(int(Action.ROTATE_CW))
        self.assertTrue(truncated)

    def test_ansi_render(self):
        env = TetrisEnv(render_mode="ansi")
        env.reset(seed=0)
        self.assertIn("Score: 0", env.render())

    def test_rgb_render(self):
        env = TetrisEnv(render_mode="rgb_array")
        env.reset(seed=0)
        img = env.render()
        self.assertEqual(img.shape, (20 * 12, 10 * 12, 3))

    def test_registered(self):
        env = gym.make("Tetris-10x20-v0")
        obs, _ = env.reset(seed=0)
        self.assertIn("board", obs)
        env.close()

    def test_gravity_every_validated(self):
        with self.assertRaises(ValueError):
            TetrisEnv(gravity_every=0)


if __name__ == "__main__":
    unittest.main()
