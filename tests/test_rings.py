"""Tests for ring assembly and shell/hole classification."""

import pytest

from fast_shapefile import (
    MalformedRecordError,
    assign_holes,
    classify_rings,
    is_clockwise,
    signed_area,
    split_parts,
)
from shp_builder import FAR_HOLE_CCW, HOLE_CCW, SQUARE2_CW, SQUARE_CW


class TestSplitParts:
    def test_single_part(self):
        pts = [(0, 0), (1, 1), (2, 0)]
        assert split_parts(pts, [0]) == [pts]

    def test_last_part_runs_to_end(self):
        pts = [(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)]
        parts = split_parts(pts, [0, 2])
        assert parts == [[(0, 0), (1, 1)], [(2, 2), (3, 3), (4, 4)]]

    def test_repeated_offsets_give_empty_part(self):
        pts = [(0, 0), (1, 1)]
        assert split_parts(pts, [0, 0]) == [[], [(0, 0), (1, 1)]]

    def test_no_offsets(self):
        assert split_parts([(0, 0)], []) == []

    def test_decreasing_offsets(self):
        with pytest.raises(MalformedRecordError, match="part 0"):
            split_parts([(0, 0), (1, 1), (2, 2)], [2, 1], record_index=7)

    def test_offset_beyond_points(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            split_parts([(0, 0)], [0, 5], record_index=3)
        assert exc_info.value.record_index == 3


class TestWinding:
    def test_signed_area_orientation(self):
        assert signed_area(SQUARE_CW) == -100.0
        assert signed_area(HOLE_CCW) == 36.0

    def test_unclosed_ring(self):
        assert signed_area([(0, 0), (1, 0), (1, 1), (0, 1)]) == 1.0

    def test_degenerate_ring(self):
        assert signed_area([(0, 0), (1, 1)]) == 0.0
        assert not is_clockwise([(0, 0), (1, 1)])

    def test_is_clockwise(self):
        assert is_clockwise(SQUARE_CW)
        assert not is_clockwise(HOLE_CCW)

    def test_classify_preserves_order(self):
        shells, holes = classify_rings([HOLE_CCW, SQUARE_CW, FAR_HOLE_CCW, SQUARE2_CW])
        assert shells == [SQUARE_CW, SQUARE2_CW]
        assert holes == [HOLE_CCW, FAR_HOLE_CCW]

    def test_classify_skips_empty_parts(self):
        shells, holes = classify_rings([[], HOLE_CCW, []])
        assert shells == []
        assert holes == [HOLE_CCW]


class TestAssignHoles:
    def test_single_shell_takes_every_hole(self):
        result = assign_holes([SQUARE_CW], [HOLE_CCW, FAR_HOLE_CCW])
        assert result == [(SQUARE_CW, [HOLE_CCW, FAR_HOLE_CCW])]

    def test_holes_go_to_enclosing_shell(self):
        hole2 = [(22.0, 2.0), (28.0, 2.0), (28.0, 8.0), (22.0, 8.0), (22.0, 2.0)]
        result = assign_holes([SQUARE_CW, SQUARE2_CW], [hole2, HOLE_CCW])
        assert result == [(SQUARE_CW, [HOLE_CCW]), (SQUARE2_CW, [hole2])]

    def test_claimed_holes_come_out_in_reverse_scan_order(self):
        small1 = [(1.0, 1.0), (2.0, 1.0), (2.0, 2.0), (1.0, 1.0)]
        small2 = [(5.0, 5.0), (6.0, 5.0), (6.0, 6.0), (5.0, 5.0)]
        result = assign_holes([SQUARE_CW, SQUARE2_CW], [small1, small2])
        assert result[0] == (SQUARE_CW, [small2, small1])

    def test_unclaimed_hole_is_promoted_and_reversed(self):
        result = assign_holes([SQUARE_CW, SQUARE2_CW], [FAR_HOLE_CCW])
        assert len(result) == 3
        assert result[0] == (SQUARE_CW, [])
        assert result[1] == (SQUARE2_CW, [])
        shell, holes = result[2]
        assert shell == list(reversed(FAR_HOLE_CCW))
        assert is_clockwise(shell)
        assert holes == []

    def test_no_shells_promotes_every_hole(self):
        result = assign_holes([], [HOLE_CCW])
        assert result == [(list(reversed(HOLE_CCW)), [])]

    def test_envelope_touching_edge_is_contained(self):
        edge_hole = [(0.0, 0.0), (5.0, 0.0), (5.0, 5.0), (0.0, 0.0)]
        result = assign_holes([SQUARE_CW, SQUARE2_CW], [edge_hole])
        assert result[0] == (SQUARE_CW, [edge_hole])

    def test_strict_nesting_rejects_envelope_only_match(self):
        # L-shaped shell whose envelope covers the notch at (6..9, 6..9)
        l_shell = [
            (0.0, 0.0), (0.0, 10.0), (5.0, 10.0), (5.0, 5.0),
            (10.0, 5.0), (10.0, 0.0), (0.0, 0.0),
        ]
        notch = [(6.0, 6.0), (9.0, 6.0), (9.0, 9.0), (6.0, 9.0), (6.0, 6.0)]

        loose = assign_holes([l_shell, SQUARE2_CW], [notch])
        assert loose[0] == (l_shell, [notch])

        strict = assign_holes([l_shell, SQUARE2_CW], [notch], strict=True)
        assert len(strict) == 3
        assert strict[0] == (l_shell, [])
        assert strict[2] == (list(reversed(notch)), [])

    def test_strict_nesting_accepts_true_hole(self):
        result = assign_holes([SQUARE_CW, SQUARE2_CW], [HOLE_CCW], strict=True)
        assert result[0] == (SQUARE_CW, [HOLE_CCW])
        assert len(result) == 2
