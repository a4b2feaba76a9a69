import numpy as np
import pytest

from analysis import calculate_board_stats, count_tile_shapes
from board import Board
from constants import Direction
from utils import SURVEY_COLUMNS

L, U, R, D = Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN


def test_default_board_stats():
    stats = calculate_board_stats(Board(8, 9))
    assert stats == {
        "width": 8,
        "height": 9,
        "nodes": 72,
        "matched_edges": 71,
        "is_spanning_tree": True,
        "dangling_stubs": 0,
        "diameter": 31,
        "radius": 16,
        "source_eccentricity": 30,
        "lit_nodes": 72,
        "dead_ends": 22,
        "straights": 18,
        "corners": 12,
        "junctions": 20,
        "crosses": 0,
    }


def test_stats_cover_every_survey_column():
    stats = calculate_board_stats(Board(4, 6))
    assert set(stats) == set(SURVEY_COLUMNS)


@pytest.mark.parametrize("width,height,shapes", [
    (3, 3, (3, 2, 3, 1, 0)),
    (2, 2, (2, 0, 2, 0, 0)),
    (4, 6, (6, 10, 4, 4, 0)),
])
def test_generated_tile_shapes(width, height, shapes):
    counts = count_tile_shapes(Board(width, height).stub_matrix())
    assert (counts["dead_ends"], counts["straights"], counts["corners"],
            counts["junctions"], counts["crosses"]) == shapes


def test_count_tile_shapes_by_hand():
    stubs = np.zeros((3, 2, 4), dtype=bool)
    stubs[0, 0, [R]] = True
    stubs[1, 0, [L, R]] = True
    stubs[2, 0, [L, D]] = True
    stubs[0, 1, [L, U, R]] = True
    stubs[1, 1, :] = True
    # (2, 1) stays empty
    assert count_tile_shapes(stubs) == {
        "dead_ends": 1,
        "straights": 1,
        "corners": 1,
        "junctions": 1,
        "crosses": 1,
    }


def test_stats_follow_rotations(board_3x3):
    board_3x3.rotate(1, 1)
    stats = calculate_board_stats(board_3x3)
    assert stats["lit_nodes"] == 2
    assert stats["matched_edges"] == 7
    assert stats["dangling_stubs"] == 2
    assert not stats["is_spanning_tree"]
    # Rotation never changes a tile's shape, or the radius.
    assert stats["corners"] == 3
    assert stats["radius"] == 4
