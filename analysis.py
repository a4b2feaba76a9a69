# analysis.py

import numpy as np

import graph_utils
from constants import Direction

LEFT, UP, RIGHT, DOWN = Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN

# =============================================================================
# SECTION 1: TILE SHAPES
# =============================================================================

def count_tile_shapes(stubs):
    """
    Counts tile shapes in a (width, height, 4) stub array.

    A two-stub tile is a straight when its stubs face each other, otherwise a
    corner. Empty tiles are not counted.
    """
    degrees = stubs.sum(axis=2)
    facing = (stubs[..., LEFT] & stubs[..., RIGHT]) | (stubs[..., UP] & stubs[..., DOWN])
    return {
        "dead_ends": int(np.count_nonzero(degrees == 1)),
        "straights": int(np.count_nonzero((degrees == 2) & facing)),
        "corners": int(np.count_nonzero((degrees == 2) & ~facing)),
        "junctions": int(np.count_nonzero(degrees == 3)),
        "crosses": int(np.count_nonzero(degrees == 4)),
    }


# =============================================================================
# SECTION 2: GRAPH STATISTICS
# =============================================================================

def calculate_board_stats(board):
    """Collects the survey statistics of a board in its current state."""
    nodes = board.nodes
    source = board.source
    stubs = board.stub_matrix()

    edges = graph_utils.count_matched_edges(nodes)
    stats = {
        "width": board.width,
        "height": board.height,
        "nodes": len(nodes),
        "matched_edges": edges,
        "is_spanning_tree": graph_utils.is_spanning_tree(nodes),
        # Every matched edge uses two stubs; anything left over points nowhere.
        "dangling_stubs": int(stubs.sum()) - 2 * edges,
        "diameter": graph_utils.estimate_diameter(nodes, source),
        "radius": board.radius,
        "source_eccentricity": graph_utils.furthest_distance(source, nodes),
        "lit_nodes": len(graph_utils.reachable_set(source)),
    }
    stats.update(count_tile_shapes(stubs))
    return stats
