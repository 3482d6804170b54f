"""Tests for boardcore/game_base.py - the shared stack and move pipeline.

Cephalopod is used as the concrete engine since its rules are small.
"""

import random

import pytest

from boardcore.errors import (
    FailsafeError,
    GameOverError,
    StateError,
    ValidationFailure,
)
from boardcore.game_base import normalise_move
from boardcore.games import GAMES, AmazonsGame, CephalopodGame, StigmergyGame, get_game
from boardcore.models import Completeness


class TestConstruction:
    """Test building games from nothing, text, mappings and records."""

    def test_fresh_game(self, ceph):
        assert ceph.currplayer == 1
        assert ceph.board == {}
        assert len(ceph.stack) == 1
        assert not ceph.gameover
        assert ceph.numplayers == 2

    def test_from_text(self, ceph):
        ceph.move("a1")
        restored = CephalopodGame(ceph.serialize())
        assert restored.board == ceph.board
        assert restored.fingerprint() == ceph.fingerprint()

    def test_from_mapping(self, ceph):
        ceph.move("a1")
        restored = CephalopodGame(ceph.state().model_dump(by_alias=True))
        assert restored.board == {"a1": (1, 1)}

    def test_from_record(self, ceph):
        ceph.move("a1")
        restored = CephalopodGame(ceph.state())
        assert len(restored.stack) == 2

    def test_wrong_game_rejected(self, ceph):
        with pytest.raises(StateError):
            AmazonsGame(ceph.serialize())

    def test_unknown_variant_rejected(self):
        with pytest.raises(StateError):
            CephalopodGame(variants=["hexagonal"])

    def test_unsupported_state_type(self):
        with pytest.raises(StateError):
            CephalopodGame(42)


class TestMovePipeline:
    """Test move application, rejection and bookkeeping."""

    def test_placement_scenario(self, ceph):
        """A first placement changes the board, the player and the stack."""
        ceph.move("a1")
        assert ceph.board == {"a1": (1, 1)}
        assert ceph.currplayer == 2
        assert len(ceph.stack) == 2
        assert [r.type for r in ceph.results] == ["place"]

    def test_move_is_normalised(self, ceph):
        ceph.move("  A 1 ")
        assert ceph.lastmove == "a1"

    def test_normalise_move(self):
        assert normalise_move(" B2 = A2\t+ C2 ") == "b2=a2+c2"

    def test_rejected_move_leaves_stack_unchanged(self, ceph):
        before = ceph.fingerprint()
        with pytest.raises(ValidationFailure) as exc_info:
            ceph.move("z9")
        assert exc_info.value.move == "z9"
        assert len(ceph.stack) == 1
        assert ceph.fingerprint() == before

    def test_failsafe_for_incomplete_move(self, ceph_with_board):
        """A valid prefix that is not a legal move trips the failsafe."""
        game = ceph_with_board({"a2": (1, 2), "b1": (2, 3)})
        assert game.validate_move("a1").valid
        with pytest.raises(FailsafeError) as exc_info:
            game.move("a1")
        assert isinstance(exc_info.value, StateError)
        assert len(game.stack) == 1

    def test_trusted_skips_validation(self, ceph):
        ceph.move("c3", trusted=True)
        assert ceph.board == {"c3": (1, 1)}

    def test_validation_is_pure(self, ceph_with_board):
        game = ceph_with_board({"a2": (1, 2), "b1": (2, 3)})
        before = (game.fingerprint(), dict(game.board), game.currplayer)
        for m in ["", "a1", "a1=a2", "a1=a2+b1", "a1=a2+a2", "zz", "a2"]:
            game.validate_move(m)
        assert (game.fingerprint(), dict(game.board), game.currplayer) == before

    def test_validation_normalises_input(self, ceph):
        """validate_move and move agree on case and whitespace."""
        assert ceph.validate_move(" A1 ") == ceph.validate_move("a1")
        assert ceph.validate_move(" A1 ").valid
        ceph.move(" A1 ")
        assert ceph.board == {"a1": (1, 1)}

    def test_partial_preview_is_not_saved(self, ceph_with_board):
        game = ceph_with_board({"a2": (1, 2), "b1": (2, 3)})
        game.move("a1=a2", partial=True)
        assert len(game.stack) == 1
        with pytest.raises(StateError):
            game.move("c3")
        game.load()
        game.move("a1=a2+b1")
        assert len(game.stack) == 2

    def test_move_after_game_over(self, ceph):
        ceph.resign(1)
        with pytest.raises(GameOverError):
            ceph.move("a1")

    def test_next_player_wraps(self, ceph):
        assert ceph.next_player(1) == 2
        assert ceph.next_player(2) == 1


class TestStack:
    """Test load, branching policy, history and cloning."""

    def test_load_head_reproduces_last_snapshot(self, ceph):
        for m in ["a1", "e5", "c3"]:
            ceph.move(m)
        ceph.load(-1)
        head = ceph.stack[-1]
        assert ceph.board == head.board
        assert ceph.currplayer == head.currplayer
        assert ceph.lastmove == head.lastmove == "c3"
        assert ceph.results == head.results

    def test_load_zero_reproduces_initial_snapshot(self, ceph):
        for m in ["a1", "e5", "c3"]:
            ceph.move(m)
        ceph.load(0)
        assert ceph.board == {}
        assert ceph.currplayer == 1
        assert ceph.lastmove is None

    def test_load_out_of_range(self, ceph):
        with pytest.raises(StateError):
            ceph.load(3)
        with pytest.raises(StateError):
            ceph.load(-2)

    def test_no_moves_from_history(self, ceph):
        ceph.move("a1")
        ceph.move("e5")
        ceph.load(1)
        assert not ceph.at_head
        with pytest.raises(StateError):
            ceph.move("c3")
        with pytest.raises(StateError):
            ceph.resign(1)
        assert len(ceph.stack) == 3
        ceph.load()
        ceph.move("c3")
        assert len(ceph.stack) == 4

    def test_snapshots_are_not_shared_with_working_board(self, ceph):
        ceph.move("a1")
        ceph.board["b1"] = (2, 1)
        assert "b1" not in ceph.stack[-1].board

    def test_clone_is_independent(self, ceph):
        ceph.move("a1")
        twin = ceph.clone()
        assert twin.fingerprint() == ceph.fingerprint()
        twin.move("e5")
        assert len(ceph.stack) == 2
        assert "e5" not in ceph.board

    def test_move_history(self, ceph):
        for m in ["a1", "e5", "c3"]:
            ceph.move(m)
        assert ceph.move_history() == [["a1", "e5"], ["c3"]]

    def test_ply(self, ceph):
        ceph.move("a1")
        ceph.move("e5")
        assert ceph.ply == 2
        ceph.load(0)
        assert ceph.ply == 0


class TestResign:

    def test_resign(self, ceph):
        ceph.move("a1")
        ceph.resign(2)
        assert ceph.gameover
        assert ceph.winner == [1]
        assert [r.type for r in ceph.results] == ["resigned", "eog", "winners"]
        assert len(ceph.stack) == 3

    def test_resign_survives_serialization(self, ceph):
        ceph.resign(1)
        restored = CephalopodGame(ceph.serialize())
        assert restored.gameover
        assert restored.winner == [2]

    def test_unknown_player(self, ceph):
        with pytest.raises(StateError):
            ceph.resign(3)


class TestRandomMoveAndClicks:

    def test_random_move_is_legal(self, ceph):
        rng = random.Random(7)
        for _ in range(6):
            m = ceph.random_move(rng)
            assert m in ceph.moves()
            ceph.move(m)

    def test_random_move_is_reproducible(self, ceph):
        assert ceph.random_move(random.Random(3)) == ceph.random_move(random.Random(3))

    def test_random_move_after_game_over(self, ceph):
        ceph.resign(1)
        assert ceph.random_move() == ""

    def test_click_never_raises(self, ceph):
        result = ceph.handle_click("", 99, 99)
        assert not result.valid
        assert result.move == ""
        assert "99" in result.message


class TestRegistry:

    def test_games_keyed_by_uid(self):
        assert GAMES == {
            "amazons": AmazonsGame,
            "ceph": CephalopodGame,
            "stigmergy": StigmergyGame,
        }

    def test_get_game(self):
        assert get_game("ceph") is CephalopodGame

    def test_unknown_game(self):
        with pytest.raises(StateError):
            get_game("chess")

    @pytest.mark.parametrize("uid", sorted(GAMES))
    def test_every_game_round_trips(self, uid):
        game = get_game(uid)()
        assert get_game(uid)(game.serialize()).fingerprint() == game.fingerprint()

    def test_completeness_values(self):
        assert [c.value for c in Completeness] == [-1, 0, 1]
