"""
Tests for Gymnasium environment API.
"""

import pytest
import numpy as np

from breakfast_blitz.blitz_core.env_gym import BlitzEnv


@pytest.fixture
def env():
    env = BlitzEnv()
    yield env
    env.close()


def first_valid_action(env) -> int:
    return int(np.flatnonzero(env.valid_action_mask())[0])


class TestBlitzEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        """Reset should return (observation, info) tuple."""
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)

    def test_observation_structure(self, env):
        """Observation should have expected keys and shapes."""
        obs, _ = env.reset(seed=42)

        assert set(obs) == {"board", "score", "target_score", "moves_remaining", "status", "inventory"}
        assert obs["board"].shape == (7, 7)
        assert obs["board"].dtype == np.int8
        assert obs["inventory"].shape == (7,)
        assert int(obs["score"]) == 0
        assert int(obs["target_score"]) == 1000
        assert int(obs["moves_remaining"]) == 20

    def test_observation_in_space(self, env):
        obs, _ = env.reset(seed=42)
        assert env.observation_space.contains(obs)

    def test_no_empty_cells_after_reset(self, env):
        obs, _ = env.reset(seed=42)
        assert np.all(obs["board"] > 0)

    def test_action_space(self, env):
        """One action per adjacent swap on a 7x7 board."""
        assert env.action_space.n == 2 * 7 * 6

    def test_step_returns_correct_tuple(self, env):
        """Step should return (obs, reward, terminated, truncated, info)."""
        env.reset(seed=42)
        result = env.step(first_valid_action(env))

        assert len(result) == 5
        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert isinstance(terminated, bool)
        assert truncated is False
        assert isinstance(info, dict)

    def test_reward_always_zero(self, env):
        """Reward is always 0.0; callers use info["delta_score"]."""
        env.reset(seed=42)
        _, reward, _, _, info = env.step(first_valid_action(env))
        assert reward == 0.0
        assert info["delta_score"] >= 150

    def test_matching_step_costs_one_move(self, env):
        env.reset(seed=42)
        _, _, _, _, info = env.step(first_valid_action(env))
        assert info["matched"] is True
        assert info["moves_remaining"] == 19
        assert info["cascades"] >= 1

    def test_invalid_swap_is_free(self, env):
        env.reset(seed=42)
        invalid = np.flatnonzero(~env.valid_action_mask())
        if len(invalid) == 0:
            pytest.skip("every swap matches on this board")
        _, _, _, _, info = env.step(int(invalid[0]))
        assert info["matched"] is False
        assert info["delta_score"] == 0
        assert info["moves_remaining"] == 20

    def test_numpy_action(self, env):
        env.reset(seed=42)
        action = np.array(first_valid_action(env))
        _, _, _, _, info = env.step(action)
        assert info["matched"] is True

    def test_out_of_range_action(self, env):
        env.reset(seed=42)
        with pytest.raises(ValueError):
            env.step(env.action_space.n)

    def test_seed_reproducibility(self, env):
        """Same seed should produce the same board."""
        obs1, _ = env.reset(seed=7)
        obs2, _ = env.reset(seed=7)
        np.testing.assert_array_equal(obs1["board"], obs2["board"])

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            BlitzEnv(level_id=5000)

    def test_episode_progress(self, env):
        """Matched steps always add score until the level ends."""
        env.reset(seed=3)
        score = 0
        terminated = False
        for _ in range(50):
            mask = env.valid_action_mask()
            if terminated or not mask.any():
                break
            _, _, terminated, _, info = env.step(int(np.flatnonzero(mask)[0]))
            assert info["score"] > score
            score = info["score"]

        if terminated:
            assert info["status"] in ("won", "lost")

    def test_render_ansi(self):
        env = BlitzEnv(render_mode="ansi")
        env.reset(seed=1)
        text = env.render()
        assert "score=0/1000" in text
        assert len(text.splitlines()) == 8
        env.close()

    def test_render_headless(self, env):
        env.reset(seed=1)
        assert env.render() is None
