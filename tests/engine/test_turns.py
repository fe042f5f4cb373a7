"""Tests for turn rotation and win conditions."""

import logging

import pytest

from side_effects.turns import TurnError, can_continue, next_turn, targetable_players, winner

THREE = ["player1", "player2", "player3"]
FOUR = ["player1", "player2", "player3", "player4"]


class TestNextTurn:
    def test_next_in_order(self) -> None:
        assert next_turn("player1", THREE) == "player2"

    def test_wraps_around(self) -> None:
        assert next_turn("player3", THREE) == "player1"

    def test_two_players(self) -> None:
        assert next_turn("player1", ["player1", "player2"]) == "player2"
        assert next_turn("player2", ["player1", "player2"]) == "player1"

    def test_single_player_order(self) -> None:
        assert next_turn("player1", ["player1"]) == "player1"

    def test_skips_eliminated(self) -> None:
        assert next_turn("player1", THREE, ["player1", "player3"]) == "player3"

    def test_skips_several_eliminated(self) -> None:
        assert next_turn("player1", FOUR, ["player1", "player4"]) == "player4"

    def test_wraps_while_skipping(self) -> None:
        assert next_turn("player4", FOUR, ["player2", "player4"]) == "player2"

    def test_eliminated_current_passes_to_next_alive(self) -> None:
        assert next_turn("player1", THREE, ["player2", "player3"]) == "player2"

    def test_eliminated_current_scans_from_its_slot(self) -> None:
        assert next_turn("player3", FOUR, ["player1", "player2"]) == "player1"

    def test_sole_survivor_keeps_turn(self) -> None:
        assert next_turn("player2", THREE, ["player2"]) == "player2"

    def test_accepts_any_collection_for_alive(self) -> None:
        assert next_turn("player1", FOUR, {"player1", "player4"}) == "player4"

    def test_empty_order_raises(self) -> None:
        with pytest.raises(TurnError, match="playerOrder cannot be empty"):
            next_turn("player1", [])

    def test_empty_alive_raises(self) -> None:
        with pytest.raises(TurnError, match="No active players remaining"):
            next_turn("player1", ["player1", "player2"], [])

    def test_turn_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            next_turn("player1", [])

    def test_unknown_current_is_unchanged(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="side_effects.turns"):
            assert next_turn("ghost", THREE) == "ghost"
        assert "ghost" in caplog.text

    def test_alive_outside_order_raises(self) -> None:
        with pytest.raises(TurnError):
            next_turn("player1", THREE, ["player9"])


class TestTargetablePlayers:
    def test_excludes_current(self) -> None:
        assert targetable_players("player1", THREE) == ["player2", "player3"]

    def test_alone(self) -> None:
        assert targetable_players("player1", ["player1"]) == []

    def test_filters_eliminated(self) -> None:
        assert targetable_players("player1", THREE, ["player1", "player3"]) == ["player3"]

    def test_everyone_else_eliminated(self) -> None:
        assert targetable_players("player1", THREE, ["player1"]) == []

    def test_keeps_turn_order(self) -> None:
        assert targetable_players("player2", FOUR) == ["player1", "player3", "player4"]
        assert targetable_players("player2", FOUR, ["player4", "player1"]) == ["player1", "player4"]


class TestCanContinue:
    def test_two_or_more(self) -> None:
        assert can_continue(["player1", "player2"]) is True
        assert can_continue(THREE) is True

    def test_fewer_than_two(self) -> None:
        assert can_continue(["player1"]) is False
        assert can_continue([]) is False

    def test_custom_minimum(self) -> None:
        assert can_continue(["player1", "player2"], 3) is False
        assert can_continue(THREE, 3) is True


class TestWinner:
    def test_none_while_several_alive(self) -> None:
        assert winner(["player1", "player2"]) is None
        assert winner(THREE) is None

    def test_last_player_standing(self) -> None:
        assert winner(["player2"]) == "player2"
        assert winner(["player3"]) == "player3"

    def test_nobody_left(self) -> None:
        assert winner([]) is None
