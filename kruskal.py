import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from disjoint_set import DisjointSet
from graph_model import DEFAULT_NODES, Edge, EdgeStore, VertexId

logger = logging.getLogger(__name__)


class Decision(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RunState(Enum):
    IDLE = "idle"
    READY = "ready"
    STEPPING = "stepping"
    DONE = "done"


class StepError(RuntimeError):
    pass


@dataclass(frozen=True)
class EdgeDecision:
    edge: Edge
    decision: Decision

    @property
    def accepted(self) -> bool:
        return self.decision is Decision.ACCEPTED

    def narrate(self) -> str:
        e = self.edge
        prefix = f"Consider edge ({e.source},{e.destination}) with weight {e.weight}: "
        if self.accepted:
            return prefix + "Added to MST (no cycle formed)"
        return prefix + "Rejected (would form a cycle)"


def sort_edges(edges: Iterable[Edge]) -> List[Edge]:
    # sorted() is stable: equal weights keep their input order
    return sorted(edges, key=lambda e: e.weight)


def describe_order(sorted_edges: List[Edge]) -> str:
    return "Sorted edges by weight: " + ", ".join(str(e) for e in sorted_edges)


class KruskalEngine:
    """
    Kruskal's algorithm, run either in one shot or one edge decision at a time.

    Both modes go through `_decide`, so stepping a run to the end gives the
    same MST, total weight and decision log as `run_batch` on the same input.

    States: IDLE -> READY (after start) -> STEPPING -> DONE.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.state = RunState.IDLE
        self.sorted_edges: List[Edge] = []
        self.current_step = 0
        self.mst: List[Edge] = []
        self.total_weight = 0
        self.decisions: List[EdgeDecision] = []
        self._dsu: Optional[DisjointSet] = None

    @property
    def is_done(self) -> bool:
        return self.state is RunState.DONE

    @property
    def current_edge(self) -> Optional[Edge]:
        """The edge decided by the latest step, if any."""
        if self.current_step == 0:
            return None
        return self.sorted_edges[self.current_step - 1]

    def start(self, edges: Iterable[Edge], num_nodes: int) -> None:
        self.reset()
        self._dsu = DisjointSet(num_nodes)
        self.sorted_edges = sort_edges(edges)
        self.state = RunState.READY
        logger.debug("Starting Kruskal run on %d nodes. %s",
                     num_nodes, describe_order(self.sorted_edges))

    def step(self) -> Optional[EdgeDecision]:
        """
        Decide the next edge in weight order.

        Returns None once every edge has been decided. Raises StepError if no
        run has been started.
        """
        if self.state is RunState.IDLE:
            raise StepError("No run in progress; call start() first")
        if self.state is RunState.DONE:
            return None

        result = None
        if self.current_step < len(self.sorted_edges):
            result = self._decide(self.sorted_edges[self.current_step])
            self.current_step += 1
            self.state = RunState.STEPPING

        if self.current_step >= len(self.sorted_edges):
            self._finish()
        return result

    def run_to_end(self) -> List[EdgeDecision]:
        made = []
        while not self.is_done:
            result = self.step()
            if result is not None:
                made.append(result)
        return made

    def run_batch(self, edges: Iterable[Edge], num_nodes: int) -> List[EdgeDecision]:
        self.start(edges, num_nodes)
        for edge in self.sorted_edges:
            self._decide(edge)
        self.current_step = len(self.sorted_edges)
        self._finish()
        return list(self.decisions)

    def _decide(self, edge: Edge) -> EdgeDecision:
        # Check if the edge connects two different components
        source_root = self._dsu.find(edge.source)
        dest_root = self._dsu.find(edge.destination)

        if source_root != dest_root:
            self.mst.append(edge)
            self.total_weight += edge.weight
            self._dsu.union(source_root, dest_root)
            result = EdgeDecision(edge, Decision.ACCEPTED)
        else:
            result = EdgeDecision(edge, Decision.REJECTED)

        self.decisions.append(result)
        logger.debug(result.narrate())
        return result

    def _finish(self) -> None:
        self.state = RunState.DONE
        self.total_weight = sum(e.weight for e in self.mst)
        logger.info("Kruskal finished: %d edge(s) in MST, total weight %d",
                    len(self.mst), self.total_weight)


class MSTSession:
    """
    One editable graph and the Kruskal run over it.

    Any change to the graph throws away the current run, so the run state
    always describes the edges currently in the store.
    """

    def __init__(self, num_nodes: int = DEFAULT_NODES) -> None:
        self.store = EdgeStore(num_nodes)
        self.engine = KruskalEngine()

    # --- Mutators ---

    def set_num_nodes(self, n) -> int:
        applied = self.store.set_num_nodes(n)
        self.engine.reset()
        return applied

    def add_edge(self, source, destination, weight) -> Edge:
        edge = self.store.add_edge(source, destination, weight)
        self.engine.reset()
        return edge

    def remove_edge(self, u: VertexId, v: VertexId) -> Edge:
        edge = self.store.remove_edge(u, v)
        self.engine.reset()
        return edge

    def clear_edges(self) -> None:
        self.store.clear()
        self.engine.reset()

    def load_example(self) -> None:
        self.store.load_example()
        self.engine.reset()

    # --- Actions ---

    def run_batch(self) -> List[EdgeDecision]:
        return self.engine.run_batch(self.store.edges, self.store.num_nodes)

    def start(self) -> None:
        self.engine.start(self.store.edges, self.store.num_nodes)

    def step(self) -> Optional[EdgeDecision]:
        return self.engine.step()

    def reset(self) -> None:
        self.engine.reset()

    # --- Queries ---

    @property
    def edges(self) -> List[Edge]:
        return self.store.edges

    @property
    def num_nodes(self) -> int:
        return self.store.num_nodes

    @property
    def state(self) -> RunState:
        return self.engine.state

    @property
    def is_done(self) -> bool:
        return self.engine.is_done

    @property
    def mst(self) -> List[Edge]:
        return list(self.engine.mst)

    @property
    def total_weight(self) -> int:
        return self.engine.total_weight

    @property
    def sorted_edges(self) -> List[Edge]:
        return list(self.engine.sorted_edges)

    @property
    def current_step(self) -> int:
        return self.engine.current_step

    @property
    def decisions(self) -> List[EdgeDecision]:
        return list(self.engine.decisions)
