"""Tests for the move() ordering primitive"""
import itertools

import pytest

from src.core.errors import InvalidReferenceError
from src.utils.ordering import check_index, move


class TestMove:
    """Test move function"""

    def test_move_first_to_last(self):
        """Moving position 0 to 2 of [a, b, c] yields [b, c, a]"""
        items = ["a", "b", "c"]
        move(items, 0, 2)
        assert items == ["b", "c", "a"]

    def test_move_last_to_first(self):
        items = ["a", "b", "c"]
        move(items, 2, 0)
        assert items == ["c", "a", "b"]

    def test_move_returns_same_list(self):
        items = ["a", "b"]
        assert move(items, 0, 1) is items

    def test_move_same_index_is_noop(self):
        items = ["a", "b", "c"]
        move(items, 1, 1)
        assert items == ["a", "b", "c"]

    def test_every_move_is_a_reversible_permutation(self):
        """Every index pair permutes the list and the inverse move restores it"""
        original = ["a", "b", "c", "d", "e"]
        for i, j in itertools.product(range(len(original)), repeat=2):
            items = list(original)
            move(items, i, j)
            assert sorted(items) == sorted(original)
            assert items[j] == original[i]
            move(items, j, i)
            assert items == original

    def test_move_out_of_range(self):
        with pytest.raises(InvalidReferenceError) as exc_info:
            move(["a", "b"], 0, 5, what="group")
        assert "group index 5 out of range" in exc_info.value.message
        assert exc_info.value.status_code == 500

    def test_move_negative_index(self):
        with pytest.raises(InvalidReferenceError):
            move(["a", "b"], -1, 0)


class TestCheckIndex:
    """Test check_index function"""

    def test_valid_index(self):
        assert check_index(["a"], 0) == 0

    def test_empty_list(self):
        with pytest.raises(InvalidReferenceError):
            check_index([], 0)

    def test_bool_is_not_an_index(self):
        with pytest.raises(InvalidReferenceError):
            check_index(["a", "b"], True)
