# generator.py

import logging

import numpy as np

from constants import Direction, NUM_DIRECTIONS

LEFT, UP, RIGHT, DOWN = Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN

logger = logging.getLogger(__name__)


def generate(width, height):
    """
    Builds the stub layout of a perfect maze for a width x height board.

    Returns a boolean array of shape (width, height, 4) indexed as
    wires[row, col, direction]. The result depends only on the dimensions,
    so the same size always yields the same maze.
    """
    wires = np.zeros((width, height, NUM_DIRECTIONS), dtype=bool)

    if height == 1:
        # A single horizontal corridor
        wires[:-1, 0, RIGHT] = True
        wires[1:, 0, LEFT] = True
    elif width == 1:
        wires[0, :-1, DOWN] = True
        wires[0, 1:, UP] = True
    else:
        split_board(wires, 0, 0, width, height)

    logger.debug("Generated %dx%d maze with %d stubs", width, height, int(wires.sum()))
    return wires


def split_board(wires, left, top, wide, tall):
    """
    Carves the sub-rectangle anchored at (left, top), `wide` tiles across and
    `tall` tiles down, then recurses into its quadrants.

    The border is wired as a ring open at the top; the quadrants then splice
    their own trees into it.
    """
    if wide < 1 or tall < 1:
        return

    right = left + wide - 1
    bottom = top + tall - 1

    if wide != 1 and tall != 1:
        # Corners
        wires[left, top, DOWN] = True
        wires[right, top, DOWN] = True
        wires[left, bottom, RIGHT] = True
        wires[left, bottom, UP] = True
        wires[right, bottom, LEFT] = True
        wires[right, bottom, UP] = True

        # Left and right borders
        wires[left, top + 1:bottom, UP] = True
        wires[left, top + 1:bottom, DOWN] = True
        wires[right, top + 1:bottom, UP] = True
        wires[right, top + 1:bottom, DOWN] = True

        # Bottom border
        wires[left + 1:right, bottom, LEFT] = True
        wires[left + 1:right, bottom, RIGHT] = True

    if tall == 2:
        wires[left + 1:right, top, DOWN] = True
        wires[left + 1:right, top + 1, UP] = True
    elif tall == 3 and wide == 3:
        wires[left, top + 1, RIGHT] = True
        wires[left + 1, top + 1, LEFT] = True
        wires[left + 1, top + 1, UP] = True
        wires[left + 1, top, DOWN] = True
    elif tall > 3 or wide > 3:
        # ceil for the first half, floor for the second
        first_tall, second_tall = (tall + 1) // 2, tall // 2
        first_wide, second_wide = (wide + 1) // 2, wide // 2

        # top-left, bottom-left, bottom-right, top-right
        split_board(wires, left, top, first_wide, first_tall)
        split_board(wires, left, top + first_tall, first_wide, second_tall)
        split_board(wires, left + first_wide, top + first_tall, second_wide, second_tall)
        split_board(wires, left + first_wide, top, second_wide, first_tall)
