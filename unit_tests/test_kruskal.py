import random

import networkx as nx
import pytest
from graph_model import Edge, EdgeStore
from kruskal import (
    Decision,
    KruskalEngine,
    MSTSession,
    RunState,
    StepError,
    describe_order,
    sort_edges,
)

EXAMPLE_SORTED = [
    Edge(0, 1, 2), Edge(1, 2, 3), Edge(1, 4, 5), Edge(0, 3, 6),
    Edge(2, 4, 7), Edge(1, 3, 8), Edge(3, 4, 9),
]
EXAMPLE_DECISIONS = [Decision.ACCEPTED] * 4 + [Decision.REJECTED] * 3


def example_store():
    store = EdgeStore()
    store.load_example()
    return store


def random_store(seed):
    rng = random.Random(seed)
    n = rng.randint(2, 15)
    store = EdgeStore(n)
    pairs = [(u, v) for u in range(n) for v in range(u + 1, n)]
    rng.shuffle(pairs)
    for u, v in pairs[:rng.randint(0, len(pairs))]:
        # small weight range so ties are common
        store.add_edge(u, v, rng.randint(1, 5))
    return store


def test_example_batch():
    store = example_store()
    engine = KruskalEngine()
    decisions = engine.run_batch(store.edges, store.num_nodes)
    assert engine.sorted_edges == EXAMPLE_SORTED
    assert [d.edge for d in decisions] == EXAMPLE_SORTED
    assert [d.decision for d in decisions] == EXAMPLE_DECISIONS
    assert engine.mst == EXAMPLE_SORTED[:4]
    assert engine.total_weight == 16
    assert engine.state is RunState.DONE
    assert engine.current_step == 7


def test_example_step_by_step():
    store = example_store()
    engine = KruskalEngine()
    engine.start(store.edges, store.num_nodes)
    assert engine.state is RunState.READY
    assert engine.current_step == 0
    assert engine.mst == []
    assert engine.current_edge is None

    for i, expected in enumerate(EXAMPLE_DECISIONS):
        result = engine.step()
        assert result.edge == EXAMPLE_SORTED[i]
        assert result.decision is expected
        assert engine.current_step == i + 1
        assert engine.current_edge == EXAMPLE_SORTED[i]
        if i < 6:
            assert engine.state is RunState.STEPPING

    assert engine.state is RunState.DONE
    assert engine.total_weight == 16
    assert engine.step() is None
    assert engine.current_step == 7


def test_stable_sort_keeps_input_order_for_ties():
    edges = [Edge(2, 3, 4), Edge(0, 1, 1), Edge(1, 2, 4), Edge(0, 3, 4)]
    assert sort_edges(edges) == [Edge(0, 1, 1), Edge(2, 3, 4), Edge(1, 2, 4), Edge(0, 3, 4)]


def test_tie_break_decides_which_edge_is_kept():
    engine = KruskalEngine()
    engine.run_batch([Edge(0, 1, 1), Edge(1, 2, 1), Edge(0, 2, 1)], 3)
    assert engine.mst == [Edge(0, 1, 1), Edge(1, 2, 1)]
    engine.run_batch([Edge(0, 2, 1), Edge(1, 2, 1), Edge(0, 1, 1)], 3)
    assert engine.mst == [Edge(0, 2, 1), Edge(1, 2, 1)]


@pytest.mark.parametrize("seed", range(25))
def test_step_mode_matches_batch(seed):
    store = random_store(seed)
    batch = KruskalEngine()
    batch_decisions = batch.run_batch(store.edges, store.num_nodes)

    stepper = KruskalEngine()
    stepper.start(store.edges, store.num_nodes)
    step_decisions = stepper.run_to_end()

    assert step_decisions == batch_decisions
    assert stepper.decisions == batch.decisions
    assert stepper.mst == batch.mst
    assert stepper.total_weight == batch.total_weight


@pytest.mark.parametrize("seed", range(25))
def test_mst_is_a_minimum_forest(seed):
    store = random_store(seed)
    engine = KruskalEngine()
    engine.run_batch(store.edges, store.num_nodes)

    G = nx.Graph()
    G.add_nodes_from(range(store.num_nodes))
    G.add_weighted_edges_from((e.source, e.destination, e.weight) for e in store)
    expected = nx.minimum_spanning_tree(G)
    assert engine.total_weight == expected.size(weight="weight")
    assert len(engine.mst) == expected.number_of_edges()


@pytest.mark.parametrize("seed", range(10))
def test_every_prefix_of_accepted_edges_is_a_forest(seed):
    store = random_store(seed)
    engine = KruskalEngine()
    engine.start(store.edges, store.num_nodes)
    F = nx.Graph()
    F.add_nodes_from(range(store.num_nodes))
    while not engine.is_done:
        result = engine.step()
        if result is not None and result.accepted:
            F.add_edge(result.edge.source, result.edge.destination)
            assert nx.is_forest(F)


def test_disconnected_graph_gives_forest():
    engine = KruskalEngine()
    engine.run_batch([Edge(0, 1, 3), Edge(2, 3, 1), Edge(3, 4, 2), Edge(2, 4, 5)], 6)
    assert engine.mst == [Edge(2, 3, 1), Edge(3, 4, 2), Edge(0, 1, 3)]
    assert engine.total_weight == 6


def test_two_nodes_single_edge():
    engine = KruskalEngine()
    engine.run_batch([Edge(0, 1, 11)], 2)
    assert engine.mst == [Edge(0, 1, 11)]
    assert engine.total_weight == 11


def test_empty_edge_set():
    engine = KruskalEngine()
    assert engine.run_batch([], 4) == []
    assert engine.mst == []
    assert engine.total_weight == 0
    assert engine.is_done

    engine.start([], 4)
    assert engine.state is RunState.READY
    assert engine.step() is None
    assert engine.state is RunState.DONE
    assert engine.total_weight == 0


def test_step_before_start_is_an_error():
    engine = KruskalEngine()
    with pytest.raises(StepError):
        engine.step()


def test_reset_discards_run():
    store = example_store()
    engine = KruskalEngine()
    engine.start(store.edges, store.num_nodes)
    engine.step()
    engine.reset()
    assert engine.state is RunState.IDLE
    assert engine.sorted_edges == []
    assert engine.mst == []
    assert engine.decisions == []
    assert engine.current_step == 0
    assert engine.total_weight == 0
    with pytest.raises(StepError):
        engine.step()


def test_reset_then_rerun_reproduces_result():
    store = example_store()
    engine = KruskalEngine()
    engine.start(store.edges, store.num_nodes)
    first = engine.run_to_end()
    first_mst = list(engine.mst)

    engine.reset()
    engine.start(store.edges, store.num_nodes)
    second = engine.run_to_end()
    assert second == first
    assert engine.mst == first_mst
    assert engine.total_weight == 16


def test_new_start_replaces_previous_run():
    store = example_store()
    engine = KruskalEngine()
    engine.start(store.edges, store.num_nodes)
    engine.step()
    engine.step()
    engine.start([Edge(0, 1, 4)], 2)
    assert engine.current_step == 0
    assert engine.mst == []
    assert engine.decisions == []
    assert engine.step().accepted
    assert engine.is_done


def test_narration():
    engine = KruskalEngine()
    decisions = engine.run_batch(example_store().edges, 5)
    assert decisions[0].narrate() == "Consider edge (0,1) with weight 2: Added to MST (no cycle formed)"
    assert decisions[4].narrate() == "Consider edge (2,4) with weight 7: Rejected (would form a cycle)"
    assert describe_order(engine.sorted_edges) == (
        "Sorted edges by weight: (0,1,2), (1,2,3), (1,4,5), (0,3,6), (2,4,7), (1,3,8), (3,4,9)"
    )


# --- Session ---

def test_session_example_run():
    session = MSTSession()
    session.load_example()
    session.run_batch()
    assert session.is_done
    assert session.total_weight == 16
    assert session.mst == EXAMPLE_SORTED[:4]
    assert session.sorted_edges == EXAMPLE_SORTED
    assert session.current_step == 7
    assert [d.decision for d in session.decisions] == EXAMPLE_DECISIONS


@pytest.mark.parametrize(
    "mutate",
    [
        lambda s: s.add_edge(0, 2, 1),
        lambda s: s.remove_edge(0, 1),
        lambda s: s.clear_edges(),
        lambda s: s.set_num_nodes(4),
        lambda s: s.load_example(),
    ],
)
def test_session_mutation_resets_run(mutate):
    session = MSTSession()
    session.load_example()
    session.start()
    session.step()
    mutate(session)
    assert session.state is RunState.IDLE
    assert session.mst == []
    assert session.total_weight == 0
    assert session.current_step == 0
    with pytest.raises(StepError):
        session.step()


def test_session_rejected_edge_keeps_store():
    session = MSTSession()
    session.load_example()
    before = session.edges
    with pytest.raises(ValueError):
        session.add_edge(1, 0, 4)
    assert session.edges == before


def test_session_step_through():
    session = MSTSession(2)
    session.add_edge(0, 1, 3)
    session.start()
    assert session.state is RunState.READY
    result = session.step()
    assert result.edge == Edge(0, 1, 3)
    assert session.is_done
    assert session.step() is None
    session.reset()
    assert session.state is RunState.IDLE
