"""
Tests for the piece model and the seedable piece generator.
"""

from collections import Counter
from dataclasses import replace

import pytest

from breakfast_blitz.blitz_core.pieces import (
    EMPTY_PIECE,
    NORMAL_TYPES,
    Piece,
    PieceType,
    SpecialKind,
)
from breakfast_blitz.blitz_core.rng import PieceGenerator


@pytest.fixture
def obstacle_config(config):
    """Every obstacle roll succeeds."""
    return replace(config, board=replace(config.board, obstacle_chance=1.0))


class TestPieceType:
    """Test piece kinds and their codes."""

    def test_empty_has_code_zero(self):
        assert PieceType.EMPTY.code == 0
        assert PieceType.from_code(0) is PieceType.EMPTY

    def test_codes_are_unique(self):
        codes = [kind.code for kind in PieceType]
        assert codes == list(range(len(PieceType)))

    def test_obstacle_kinds(self):
        assert PieceType.BURNT_TOAST.is_obstacle
        assert PieceType.STICKY_HONEY.is_obstacle
        assert not PieceType.TOAST.is_obstacle
        assert not any(kind.is_obstacle for kind in NORMAL_TYPES)

    def test_string_values(self):
        assert PieceType("burnt-toast") is PieceType.BURNT_TOAST
        assert PieceType.TOAST == "toast"


class TestPiece:
    """Test the immutable piece value."""

    def test_empty_piece(self):
        assert EMPTY_PIECE.is_empty
        assert not EMPTY_PIECE.is_obstacle

    def test_default_special_is_none(self):
        piece = Piece(type=PieceType.WAFFLE, id="abc")
        assert piece.special is SpecialKind.NONE

    def test_damaged_returns_copy(self):
        piece = Piece(type=PieceType.BURNT_TOAST, id="x", health=2)
        hurt = piece.damaged()
        assert hurt.health == 1
        assert piece.health == 2
        assert hurt.id == piece.id

    def test_pieces_are_frozen(self):
        piece = Piece(type=PieceType.TOAST)
        with pytest.raises(Exception):
            piece.type = PieceType.HONEY


class TestPieceGenerator:
    """Test determinism and spawn rules."""

    def test_same_seed_same_pieces(self, config):
        a = PieceGenerator(config, seed=7)
        b = PieceGenerator(config, seed=7)
        assert [a.normal_piece() for _ in range(20)] == [b.normal_piece() for _ in range(20)]

    def test_different_seeds_differ(self, config):
        a = PieceGenerator(config, seed=1)
        b = PieceGenerator(config, seed=2)
        assert [a.normal_piece() for _ in range(20)] != [b.normal_piece() for _ in range(20)]

    def test_reset_replays_sequence(self, generator):
        first = [generator.normal_piece() for _ in range(10)]
        generator.reset()
        assert [generator.normal_piece() for _ in range(10)] == first

    def test_reset_with_new_seed(self, generator):
        generator.reset(seed=99)
        assert generator.seed == 99

    def test_normal_pieces_use_configured_kinds(self, generator, config):
        kinds = {generator.normal_piece().type for _ in range(300)}
        assert kinds == {PieceType(name) for name in config.pieces}

    def test_ids_are_nine_alphanumerics(self, generator):
        piece_id = generator.new_id()
        assert len(piece_id) == 9
        assert piece_id.isalnum()
        assert piece_id == piece_id.lower()

    def test_spawn_without_obstacles(self, obstacle_config):
        generator = PieceGenerator(obstacle_config, seed=0)
        assert not any(generator.spawn().is_obstacle for _ in range(50))

    def test_spawn_with_obstacles(self, obstacle_config):
        generator = PieceGenerator(obstacle_config, seed=0)
        assert all(generator.spawn(with_obstacles=True).is_obstacle for _ in range(50))

    def test_refill_never_spawns_obstacles_by_default(self, obstacle_config):
        generator = PieceGenerator(obstacle_config, seed=0)
        assert not any(generator.refill_piece().is_obstacle for _ in range(50))

    def test_refill_obstacles_when_enabled(self, obstacle_config):
        cfg = replace(obstacle_config, board=replace(obstacle_config.board, obstacles_in_refill=True))
        generator = PieceGenerator(cfg, seed=0)
        assert generator.refill_piece().is_obstacle

    def test_obstacle_attributes(self, generator):
        burnt = generator.obstacle_piece(PieceType.BURNT_TOAST)
        assert burnt.health == 2
        assert burnt.timer is None

        butter = generator.obstacle_piece(PieceType.MELTING_BUTTER)
        assert butter.health == 1
        assert butter.timer == 5

        honey = generator.obstacle_piece(PieceType.STICKY_HONEY)
        assert honey.sticky is True

    def test_shuffle_is_a_permutation(self, generator):
        items = list(range(30))
        generator.shuffle(items)
        assert sorted(items) == list(range(30))
        assert items != list(range(30))

    def test_shuffle_keeps_multiset(self, generator):
        items = [generator.normal_piece().type for _ in range(49)]
        before = Counter(items)
        generator.shuffle(items)
        assert Counter(items) == before
