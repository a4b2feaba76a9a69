# constants.py

from enum import IntEnum


class Direction(IntEnum):
    """The four wire directions, in clockwise order.

    The integer value doubles as the index into a node's stub vector, so a
    stub vector always reads [Left, Up, Right, Down].
    """
    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3

    @property
    def opposite(self):
        return OPPOSITE[self]


NUM_DIRECTIONS = 4

OPPOSITE = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}

# (d_row, d_col) for each direction. The board is column-major: `row` runs
# along the width and `col` along the height.
DELTAS = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
}

# Board defaults
DEFAULT_WIDTH = 8
DEFAULT_HEIGHT = 9
