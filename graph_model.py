import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

logger = logging.getLogger(__name__)

VertexId = int

MIN_NODES = 2
MAX_NODES = 15  # for clarity on the canvas
DEFAULT_NODES = 5

EXAMPLE_NODES = 5
EXAMPLE_EDGES: List[Tuple[VertexId, VertexId, int]] = [
    (0, 1, 2), (0, 3, 6),
    (1, 2, 3), (1, 3, 8), (1, 4, 5),
    (2, 4, 7),
    (3, 4, 9),
]


class InvalidConfigError(ValueError):
    pass


class InvalidEdgeError(ValueError):
    """Raised when an edge cannot be added; the message is meant for the user."""


@dataclass(frozen=True)
class Edge:
    source: VertexId
    destination: VertexId
    weight: int

    @property
    def key(self) -> FrozenSet[VertexId]:
        return frozenset((self.source, self.destination))

    def touches(self, node: VertexId) -> bool:
        return node in (self.source, self.destination)

    def __str__(self) -> str:
        return f"({self.source},{self.destination},{self.weight})"


def _to_int(value) -> int:
    # Accepts ints or numeric text from an entry widget; anything else is invalid.
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, str):
        return int(value.strip())
    if isinstance(value, int):
        return value
    raise ValueError(value)


class EdgeStore:
    """
    The user's graph: a node count plus an ordered list of weighted edges.

    Insertion order is kept because it breaks ties between equal weights
    when the edges are sorted for Kruskal's algorithm.
    """

    def __init__(self, num_nodes: int = DEFAULT_NODES) -> None:
        self._edges: List[Edge] = []
        self.num_nodes = MIN_NODES
        self.set_num_nodes(num_nodes)

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    def set_num_nodes(self, n) -> int:
        """
        Set the node count, clamping it to [MIN_NODES, MAX_NODES].

        Edges referencing a node that no longer exists are dropped.
        Returns the node count actually applied.
        """
        try:
            requested = _to_int(n)
        except ValueError:
            raise InvalidConfigError(f"Number of nodes must be an integer, got {n!r}")

        clamped = min(max(requested, MIN_NODES), MAX_NODES)
        if clamped != requested:
            logger.warning("Requested %d nodes, using %d (allowed range %d-%d)",
                           requested, clamped, MIN_NODES, MAX_NODES)
        self.num_nodes = clamped

        before = len(self._edges)
        self._edges = [e for e in self._edges
                       if e.source < clamped and e.destination < clamped]
        if len(self._edges) != before:
            logger.info("Dropped %d edge(s) outside 0..%d", before - len(self._edges), clamped - 1)
        return clamped

    def add_edge(self, source, destination, weight) -> Edge:
        try:
            s = _to_int(source)
            d = _to_int(destination)
            w = _to_int(weight)
        except ValueError:
            raise InvalidEdgeError("Please fill all fields with valid numbers.")

        if not (0 <= s < self.num_nodes and 0 <= d < self.num_nodes):
            raise InvalidEdgeError(f"Node IDs must be between 0 and {self.num_nodes - 1}")
        if s == d:
            raise InvalidEdgeError("Self-loops are not allowed in a minimum spanning tree")
        if w <= 0:
            raise InvalidEdgeError("Weight must be a positive number")
        if self.find_edge(s, d) is not None:
            raise InvalidEdgeError("This edge already exists. Edit or remove it first.")

        edge = Edge(s, d, w)
        self._edges.append(edge)
        logger.debug("Added edge %s", edge)
        return edge

    def find_edge(self, u: VertexId, v: VertexId):
        key = frozenset((u, v))
        for edge in self._edges:
            if edge.key == key:
                return edge
        return None

    def remove_edge(self, u: VertexId, v: VertexId) -> Edge:
        edge = self.find_edge(u, v)
        if edge is None:
            raise KeyError((u, v))
        self._edges.remove(edge)
        logger.debug("Removed edge %s", edge)
        return edge

    def clear(self) -> None:
        self._edges = []

    def load_example(self) -> None:
        self.num_nodes = EXAMPLE_NODES
        self._edges = [Edge(s, d, w) for s, d, w in EXAMPLE_EDGES]

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self):
        return iter(self._edges)
