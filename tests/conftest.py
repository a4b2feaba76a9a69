import pytest

from board import Board, Node


@pytest.fixture
def board_3x3():
    return Board(3, 3)


@pytest.fixture
def make_node():
    """Builds a loose node with the given stubs, outside of any board."""
    def _make(row, col, *directions):
        node = Node(row, col)
        for direction in directions:
            node.stubs[direction] = True
        return node
    return _make
