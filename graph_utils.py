# graph_utils.py

from collections import deque

from constants import Direction

# =============================================================================
# SECTION 1: TRAVERSALS
# =============================================================================
# Every query walks the live stubs from scratch; nothing is cached between
# calls, so rotations are always reflected.

def reachable_set(source):
    """
    Breadth-first walk over matched edges starting at `source`.

    Returns a dict mapping every reachable node to the node it was discovered
    from. The source maps to itself.
    """
    graph = {source: source}
    worklist = deque([source])
    while worklist:
        current = worklist.popleft()
        for direction in Direction:
            if current.connected(direction):
                neighbor = current.neighbors[direction]
                if neighbor not in graph:
                    graph[neighbor] = current
                    worklist.append(neighbor)
    return graph


def distance_map(source):
    """Hop count from `source` to every reachable node. Unreached nodes are absent."""
    distances = {source: 0}
    worklist = deque([source])
    while worklist:
        current = worklist.popleft()
        for direction in Direction:
            if current.connected(direction):
                neighbor = current.neighbors[direction]
                if neighbor not in distances:
                    distances[neighbor] = distances[current] + 1
                    worklist.append(neighbor)
    return distances


def connected_to_source(node, source):
    if node.is_source:
        return True
    return node in reachable_set(source)


def distance_from_source(node, source):
    """Distance from the source to `node`, or -1 when it is not connected."""
    if not connected_to_source(node, source):
        return -1
    return distance_map(source).get(node, -1)


# =============================================================================
# SECTION 2: FARTHEST NODES AND DIAMETER
# =============================================================================

def furthest_node(origin, candidates):
    """
    The candidate connected to `origin` with the largest distance from it.

    Ties keep the first candidate seen. Returns `origin` when no candidate is
    farther than 0.
    """
    distances = distance_map(origin)
    best, best_distance = origin, 0
    for node in candidates:
        distance = distances.get(node)
        if distance is not None and distance > best_distance:
            best, best_distance = node, distance
    return best


def furthest_distance(origin, candidates):
    return distance_map(origin)[furthest_node(origin, candidates)]


def estimate_diameter(nodes, source):
    """Two-sweep diameter. Exact when the graph reachable from `source` is a tree."""
    first_end = furthest_node(source, nodes)
    second_end = furthest_node(first_end, nodes)
    return distance_map(first_end)[second_end]


def estimate_radius(nodes, source):
    return estimate_diameter(nodes, source) // 2 + 1


# =============================================================================
# SECTION 3: WHOLE-GRAPH CHECKS
# =============================================================================

class UnionFind:
    def __init__(self, items=()):
        self.parent = {item: item for item in items}

    def find(self, item):
        root = self.parent.setdefault(item, item)
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while item != root:
            next_item = self.parent[item]
            self.parent[item] = root
            item = next_item
        return root

    def union(self, a, b):
        """Merges the sets of `a` and `b`. Returns True if they were already joined (a cycle)."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return True
        self.parent[root_a] = root_b
        return False


def matched_edges(nodes):
    """Every matched edge once, as (node, direction) pairs pointing RIGHT or DOWN."""
    return [
        (node, direction)
        for node in nodes
        for direction in (Direction.RIGHT, Direction.DOWN)
        if node.connected(direction)
    ]


def count_matched_edges(nodes):
    return len(matched_edges(nodes))


def is_spanning_tree(nodes):
    """True when the matched edges connect all `nodes` without a cycle."""
    nodes = list(nodes)
    edges = matched_edges(nodes)
    if len(edges) != len(nodes) - 1:
        return False
    uf = UnionFind(nodes)
    for node, direction in edges:
        if uf.union(node, node.neighbors[direction]):
            return False
    return True
