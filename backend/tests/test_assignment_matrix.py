import logging

import pytest

from game.assignment_matrix import (
    generate_assignment_matrix,
    get_matrix_round,
    secure_shuffle,
)
from game.errors import InvalidGameState
from game.schedule import LINES_PER_POEM


def _players(n: int) -> list[str]:
    return [f"p{i}" for i in range(n)]


def _rotating_shuffle():
    """Deterministic shuffle: each call rotates the input one step further."""
    calls = {"n": 0}

    def shuffle(items):
        items = list(items)
        k = calls["n"] % len(items)
        calls["n"] += 1
        return items[k:] + items[:k]

    return shuffle


class TestSecureShuffle:

    def test_is_permutation(self):
        items = list(range(20))
        result = secure_shuffle(items)
        assert sorted(result) == items

    def test_returns_new_list(self):
        items = [1, 2, 3]
        result = secure_shuffle(items)
        assert result is not items
        assert items == [1, 2, 3]

    def test_empty_and_single(self):
        assert secure_shuffle([]) == []
        assert secure_shuffle(["x"]) == ["x"]


class TestGenerateMatrix:

    @pytest.mark.parametrize("n", [2, 3, 4, 8])
    def test_shape_and_permutations(self, n):
        players = _players(n)
        matrix = generate_assignment_matrix(players)
        assert len(matrix) == LINES_PER_POEM
        for row in matrix:
            assert sorted(row) == players

    @pytest.mark.parametrize("n", [2, 3, 5, 8])
    def test_no_consecutive_turns_on_same_poem(self, n):
        matrix = generate_assignment_matrix(_players(n))
        for r in range(1, LINES_PER_POEM):
            for poem in range(n):
                assert matrix[r][poem] != matrix[r - 1][poem]

    def test_uses_injected_shuffle(self):
        matrix = generate_assignment_matrix(["a", "b", "c"], shuffle=_rotating_shuffle())
        assert matrix[0] == ["a", "b", "c"]
        assert matrix[1] == ["b", "c", "a"]
        assert matrix[2] == ["c", "a", "b"]

    def test_empty_players(self):
        assert generate_assignment_matrix([]) == []

    def test_unresolvable_conflict_is_accepted_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="game.assignment_matrix"):
            matrix = generate_assignment_matrix(["solo"])
        assert matrix == [["solo"]] * LINES_PER_POEM
        assert "No conflict-free permutation" in caplog.text


class TestGetMatrixRound:

    def test_returns_row(self):
        matrix = [["a", "b"], ["b", "a"]]
        assert get_matrix_round(matrix, 1) == ["b", "a"]

    def test_out_of_bounds(self):
        matrix = [["a", "b"]]
        with pytest.raises(InvalidGameState, match="out of bounds"):
            get_matrix_round(matrix, 1)
        with pytest.raises(InvalidGameState):
            get_matrix_round(matrix, -1)
