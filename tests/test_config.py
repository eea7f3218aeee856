"""
Tests for configuration loading and validation.
"""

import os

import pytest
import yaml

import breakfast_blitz
from breakfast_blitz.blitz_core.config_loader import get_config, load_config, reload_config

DEFAULT_PATH = os.path.join(os.path.dirname(breakfast_blitz.__file__), "game_config.yaml")


@pytest.fixture
def raw_config():
    with open(DEFAULT_PATH, "r") as f:
        return yaml.safe_load(f)


@pytest.fixture
def write_config(tmp_path):
    def _write(raw: dict) -> str:
        path = tmp_path / "game_config.yaml"
        path.write_text(yaml.safe_dump(raw))
        return str(path)
    return _write


class TestLoadConfig:
    """Test loading the shipped configuration."""

    def test_default_config_loads(self, config):
        """Default config has the 7x7 board and six piece kinds."""
        assert config.board.size == 7
        assert config.num_piece_kinds == 6
        assert config.pieces[0] == "toast"
        assert config.board.obstacles_in_refill is False

    def test_scoring_values(self, config):
        assert config.scoring.match_points == 50
        assert config.scoring.hammer_points == 100
        assert config.scoring.color_bomb_points == 50
        assert config.scoring.bacon_bomb_points == 75
        assert config.scoring.maple_syrup_points == 30

    def test_starting_inventory(self, config):
        inventory = config.power_ups.inventory_dict()
        assert inventory["hammer"] == 3
        assert inventory["shuffle"] == 2
        assert inventory["coffeeBoost"] == 1

    def test_inventory_dict_is_a_fresh_copy(self, config):
        first = config.power_ups.inventory_dict()
        first["hammer"] = 0
        assert config.power_ups.inventory_dict()["hammer"] == 3

    def test_obstacles(self, config):
        burnt = config.get_obstacle("burnt-toast")
        assert burnt.health == 2
        assert config.get_obstacle("melting-butter").timer == 5
        assert config.get_obstacle("sticky-honey").sticky is True

    def test_unknown_obstacle_raises(self, config):
        with pytest.raises(ValueError):
            config.get_obstacle("ice")

    def test_levels_and_worlds(self, config):
        assert [level.id for level in config.levels] == [1, 2, 3, 4, 5]
        assert config.levels[0].name == "Toast Town Basics"
        assert len(config.worlds.entries) == 20
        assert config.worlds.max_level_id == 1000

    def test_config_is_immutable(self, config):
        with pytest.raises(Exception):
            config.board.size = 9

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reload_config_replaces_cache(self):
        before = get_config()
        after = reload_config()
        assert after is not before
        assert get_config() is after


class TestConfigValidation:
    """Test that inconsistent configs are rejected."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_round_trip_of_default(self, raw_config, write_config):
        config = load_config(write_config(raw_config))
        assert config.board.size == 7

    def test_board_too_small(self, raw_config, write_config):
        raw_config["board"]["size"] = 2
        with pytest.raises(ValueError):
            load_config(write_config(raw_config))

    def test_obstacle_chance_out_of_range(self, raw_config, write_config):
        raw_config["board"]["obstacle_chance"] = 1.5
        with pytest.raises(ValueError):
            load_config(write_config(raw_config))

    def test_unknown_piece_kind(self, raw_config, write_config):
        raw_config["pieces"].append("bagel")
        with pytest.raises(ValueError):
            load_config(write_config(raw_config))

    def test_negative_starting_inventory(self, raw_config, write_config):
        raw_config["power_ups"]["starting_inventory"]["hammer"] = -1
        with pytest.raises(ValueError):
            load_config(write_config(raw_config))

    def test_descending_star_thresholds(self, raw_config, write_config):
        raw_config["rewards"]["star_thresholds"] = [2.0, 1.5, 1.0]
        with pytest.raises(ValueError):
            load_config(write_config(raw_config))

    def test_level_ids_must_be_sequential(self, raw_config, write_config):
        raw_config["levels"][1]["id"] = 7
        with pytest.raises(ValueError):
            load_config(write_config(raw_config))

    def test_adjacency_rule_can_be_disabled(self, raw_config, write_config):
        raw_config["rules"]["require_adjacent"] = False
        config = load_config(write_config(raw_config))
        assert config.rules.require_adjacent is False
