"""Tests for board coordinates and compass geometry."""

import pytest

from kelasu.game.position import VICTORY_TILES, Pos, all_positions


class TestPos:
    """Tests for the Pos class."""

    def test_row_and_col(self):
        """Test splitting an index into row and column."""
        pos = Pos(37)

        assert pos.row == 3
        assert pos.col == 7
        assert Pos.from_coords(3, 7) == pos

    def test_out_of_range(self):
        """Test positions must lie on the board."""
        with pytest.raises(ValueError):
            Pos(100)
        with pytest.raises(ValueError):
            Pos(-1)
        with pytest.raises(ValueError):
            Pos.from_coords(0, 10)

    def test_str_is_two_digits(self):
        """Test positions format as <yx>."""
        assert str(Pos(7)) == "07"
        assert str(Pos(90)) == "90"

    def test_victory_tiles(self):
        """Test the four center cells are the victory tiles."""
        assert {p.index for p in VICTORY_TILES} == {44, 45, 54, 55}


class TestDirTo:
    """Tests for Pos.dir_to."""

    def test_self_is_not_reachable(self):
        """Test no position has a direction to itself."""
        for pos in all_positions():
            assert pos.dir_to(pos) is None

    def test_knight_offsets(self):
        """Test knight-like offsets are not compass moves."""
        assert Pos(0).dir_to(Pos(21)) is None
        assert Pos(21).dir_to(Pos(0)) is None
        assert Pos(44).dir_to(Pos(63)) is None

    def test_orthogonal(self):
        """Test straight rays give a unit vector and distance."""
        assert Pos(0).dir_to(Pos(90)) == ((0, 1), 9)
        assert Pos(90).dir_to(Pos(0)) == ((0, -1), 9)
        assert Pos(45).dir_to(Pos(42)) == ((-1, 0), 3)
        assert Pos(45).dir_to(Pos(49)) == ((1, 0), 4)

    def test_diagonal(self):
        """Test diagonal rays give a unit vector and distance."""
        assert Pos(0).dir_to(Pos(99)) == ((1, 1), 9)
        assert Pos(30).dir_to(Pos(21)) == ((1, -1), 1)
        assert Pos(9).dir_to(Pos(90)) == ((-1, 1), 9)

    def test_row_boundary_is_not_a_ray(self):
        """Test consecutive indices across a row boundary are not adjacent."""
        assert Pos(9).dir_to(Pos(10)) is None

    def test_defined_iff_colinear(self):
        """Test dir_to is defined exactly for orthogonal or diagonal pairs."""
        for a in all_positions():
            for b in all_positions():
                dx = b.col - a.col
                dy = b.row - a.row
                colinear = a != b and (dx == 0 or dy == 0 or abs(dx) == abs(dy))
                assert (a.dir_to(b) is not None) == colinear


class TestShift:
    """Tests for Pos.shift."""

    def test_shift_inside(self):
        """Test shifting within the board."""
        assert Pos(44).shift(1, 0) == Pos(45)
        assert Pos(44).shift(0, 1) == Pos(54)
        assert Pos(44).shift(-1, -1) == Pos(33)

    def test_no_wraparound_on_columns(self):
        """Test shifting off the right or left edge fails instead of wrapping."""
        assert Pos(9).shift(1, 0) is None
        assert Pos(39).shift(1, 0) is None
        assert Pos(40).shift(-1, 0) is None

    def test_no_wraparound_on_rows(self):
        """Test shifting off the top or bottom fails."""
        assert Pos(95).shift(0, 1) is None
        assert Pos(5).shift(0, -1) is None

    def test_neighbors_at_corner(self):
        """Test corner cells only have two neighbors."""
        assert set(Pos(0).neighbors()) == {Pos(1), Pos(10)}
        assert set(Pos(99).neighbors()) == {Pos(98), Pos(89)}
        assert Pos(10) not in Pos(9).neighbors()
