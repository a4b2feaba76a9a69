# board.py

import logging

import numpy as np

import graph_utils
from constants import Direction, DELTAS, NUM_DIRECTIONS
from generator import generate

logger = logging.getLogger(__name__)


class InvalidConfiguration(ValueError):
    """Raised when a board cannot be built with the requested dimensions."""


# =============================================================================
# NODE
# =============================================================================

class Node:
    """
    A single tile of the board.

    `stubs` is a boolean vector ordered [Left, Up, Right, Down]; `neighbors`
    maps each direction to the adjacent node and is filled once when the board
    links its grid.
    """

    def __init__(self, row, col):
        self.row = row
        self.col = col
        self.stubs = np.zeros(NUM_DIRECTIONS, dtype=bool)
        self.neighbors = {}
        self.is_source = False

    def __repr__(self):
        wires = "".join(d.name[0] for d in Direction if self.stubs[d]) or "-"
        marker = "*" if self.is_source else ""
        return f"Node({self.row}, {self.col}, {wires}{marker})"

    @property
    def left(self):
        return bool(self.stubs[Direction.LEFT])

    @property
    def up(self):
        return bool(self.stubs[Direction.UP])

    @property
    def right(self):
        return bool(self.stubs[Direction.RIGHT])

    @property
    def down(self):
        return bool(self.stubs[Direction.DOWN])

    def rotate(self):
        """Turns the tile 90 degrees clockwise: Left->Up->Right->Down->Left."""
        self.stubs = np.roll(self.stubs, 1)

    def has_neighbor(self, direction):
        return direction in self.neighbors

    def connected(self, direction):
        """Is there a matched edge between this node and its neighbor in `direction`?"""
        neighbor = self.neighbors.get(direction)
        if neighbor is None:
            return False
        return bool(self.stubs[direction] and neighbor.stubs[direction.opposite])


# =============================================================================
# BOARD
# =============================================================================

class Board:
    """
    The grid of tiles plus the source position.

    The grid is column-major, `grid[row][col]`, where `row` runs along the
    width and `col` along the height. The source starts at the middle of the
    top edge.
    """

    def __init__(self, width, height):
        if not (width >= 2 and height >= 1 or width >= 1 and height >= 2):
            raise InvalidConfiguration(
                f"The board must be at least 2 x 1 in size, got {width} x {height}"
            )
        self.width = width
        self.height = height

        self.grid = self.make_grid()
        self.nodes = [node for column in self.grid for node in column]
        self.link_neighbors()
        self.create_wires()

        self.source_row = self.width // 2
        self.source_col = 0
        self.source.is_source = True

        # Fixed for the life of the board, even as rotations change distances.
        self.radius = graph_utils.estimate_radius(self.nodes, self.source)
        logger.debug("Built %dx%d board, radius %d", width, height, self.radius)

    def make_grid(self):
        return [[Node(row, col) for col in range(self.height)] for row in range(self.width)]

    def link_neighbors(self):
        for node in self.nodes:
            for direction, (d_row, d_col) in DELTAS.items():
                neighbor = self.node_at(node.row + d_row, node.col + d_col)
                if neighbor is not None:
                    node.neighbors[direction] = neighbor

    def create_wires(self):
        wires = generate(self.width, self.height)
        for node in self.nodes:
            node.stubs = wires[node.row, node.col].copy()

    def node_at(self, row, col):
        """Safe accessor for grid nodes."""
        if 0 <= row < self.width and 0 <= col < self.height:
            return self.grid[row][col]
        return None

    @property
    def source(self):
        return self.grid[self.source_row][self.source_col]

    def stub_matrix(self):
        """Copy of the live stubs as a (width, height, 4) array."""
        return np.array([[node.stubs for node in column] for column in self.grid], dtype=bool)

    def rotate(self, row, col):
        node = self.node_at(row, col)
        if node is None:
            logger.debug("Ignored rotation outside the board at (%d, %d)", row, col)
            return
        node.rotate()
        logger.debug("Rotated %r", node)

    def move_source(self, direction):
        """
        Moves the source one tile along a matched edge.

        Returns False, leaving the board untouched, when there is no connected
        neighbor in that direction.
        """
        direction = Direction(direction)
        current = self.source
        if not current.connected(direction):
            logger.debug("Ignored source move %s from (%d, %d)", direction.name, current.row, current.col)
            return False

        current.is_source = False
        d_row, d_col = DELTAS[direction]
        self.source_row += d_row
        self.source_col += d_col
        self.source.is_source = True
        logger.info("Source moved %s to (%d, %d)", direction.name, self.source_row, self.source_col)
        return True

    def is_lit(self, row, col):
        node = self.node_at(row, col)
        if node is None:
            return False
        return graph_utils.connected_to_source(node, self.source)

    def distance_from_source(self, row, col):
        node = self.node_at(row, col)
        if node is None:
            return -1
        return graph_utils.distance_from_source(node, self.source)


# =============================================================================
# ENGINE INTERFACE
# =============================================================================

def new_board(width, height):
    return Board(width, height)


def rotate(board, row, col):
    board.rotate(row, col)


def move_source(board, direction):
    return board.move_source(direction)


def is_lit(board, row, col):
    return board.is_lit(row, col)


def distance_from_source(board, row, col):
    return board.distance_from_source(row, col)


def radius(board):
    return board.radius
