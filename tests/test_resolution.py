"""
Tests for swap resolution and the cascade loop.
"""

import pytest

from breakfast_blitz.blitz_core.board import Coordinate
from breakfast_blitz.blitz_core.match_detector import find_matches
from breakfast_blitz.blitz_core.resolution import ResolutionEngine


@pytest.fixture
def single_run_board(make_board):
    # Swapping (0,2)<->(1,2) completes the toast run on row 0 and nothing else
    return make_board(
        "TTPH",
        "PHTB",
        "BWSW",
        "SBHS",
    )


@pytest.fixture
def cascade_board(make_board):
    # Swapping (3,2)<->(3,3) clears honey on row 3; the drop lines up pancakes
    return make_board(
        "WBTS",
        "BTWH",
        "SPPB",
        "HHPH",
    )


class TestResolveSwap:
    """Test single-swap resolution."""

    def test_no_match_swap_is_noop(self, single_run_board, config, scripted):
        generator = scripted()
        engine = ResolutionEngine(generator, config)
        before = single_run_board.clone()

        result = engine.resolve_swap(single_run_board, Coordinate(2, 0), Coordinate(2, 1))

        assert not result.matched
        assert result.reason == "no_match"
        assert result.board is single_run_board
        assert single_run_board == before
        assert result.score_delta == 0
        assert result.cascades == 0

    def test_isolated_three_run_scores_150(self, single_run_board, config, scripted, board_letters):
        engine = ResolutionEngine(scripted("WSB"), config)

        result = engine.resolve_swap(single_run_board, Coordinate(0, 2), Coordinate(1, 2))

        assert result.matched
        assert result.score_delta == 150
        assert result.cleared == 3
        assert result.cascades == 1
        assert board_letters(result.board) == [
            "WSBH",
            "PHPB",
            "BWSW",
            "SBHS",
        ]

    def test_caller_board_not_aliased(self, single_run_board, config, scripted):
        engine = ResolutionEngine(scripted("WSB"), config)
        before = single_run_board.clone()

        result = engine.resolve_swap(single_run_board, Coordinate(0, 2), Coordinate(1, 2))

        assert result.board is not single_run_board
        assert single_run_board == before

    def test_cascade_pass_count(self, cascade_board, config, scripted, board_letters):
        engine = ResolutionEngine(scripted("THBPSW"), config)

        result = engine.resolve_swap(cascade_board, Coordinate(3, 2), Coordinate(3, 3))

        assert result.matched
        assert result.cascades == 2
        assert result.cleared == 6
        assert result.score_delta == 300
        assert [event.cascade for event in result.events] == [1, 2]
        assert [event.points for event in result.events] == [150, 150]
        assert board_letters(result.board) == [
            "TPSW",
            "WHBS",
            "BBTH",
            "STWB",
        ]

    def test_result_board_is_stable(self, cascade_board, config, scripted):
        engine = ResolutionEngine(scripted("THBPSW"), config)
        result = engine.resolve_swap(cascade_board, Coordinate(3, 2), Coordinate(3, 3))
        assert find_matches(result.board) == set()
        assert result.board.is_complete()
        assert not result.board.has_empty()

    def test_random_refills_terminate_with_full_board(self, cascade_board, config, generator):
        engine = ResolutionEngine(generator, config)
        result = engine.resolve_swap(cascade_board, Coordinate(3, 2), Coordinate(3, 3))
        assert result.cascades >= 2
        assert result.score_delta == result.cleared * config.scoring.match_points
        assert find_matches(result.board) == set()
        assert result.board.shape == cascade_board.shape


class TestRunCascade:
    """Test the cascade loop on boards that already hold runs."""

    def test_existing_runs_resolve(self, make_board, config, scripted):
        board = make_board(
            "TTTP",
            "PBWS",
            "HWHB",
            "SHPB",
        )
        engine = ResolutionEngine(scripted("HSW"), config)
        outcome = engine.run_cascade(board)
        assert outcome.passes == 1
        assert outcome.points == 150
        assert find_matches(board) == set()

    def test_stable_board_takes_no_passes(self, single_run_board, config, generator):
        engine = ResolutionEngine(generator, config)
        outcome = engine.run_cascade(single_run_board)
        assert outcome.passes == 0
        assert outcome.points == 0
        assert outcome.events == []
