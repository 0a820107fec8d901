import networkx as nx
import matplotlib.pyplot as plt

from kruskal import KruskalEngine, describe_order
from graph_model import EdgeStore


def to_networkx(store: EdgeStore) -> nx.Graph:
    G = nx.Graph()
    G.add_nodes_from(range(store.num_nodes))
    for edge in store:
        G.add_edge(edge.source, edge.destination, weight=edge.weight)
    return G


# --- Frame generator ---

def kruskal_frames(store: EdgeStore, engine: KruskalEngine = None):
    """
    Yields the state of the graph at each step of Kruskal's algorithm.

    The run is driven through `engine.step()`, so each frame shows exactly the
    decision the engine made. Frames are dicts with keys 'step', 'mst_edges',
    'considered_edge' and 'status' ('', 'added', 'rejected' or 'done').
    """
    if engine is None:
        engine = KruskalEngine()
    engine.start(store.edges, store.num_nodes)

    yield {'step': describe_order(engine.sorted_edges), 'mst_edges': [], 'considered_edge': None, 'status': ''}

    while True:
        result = engine.step()
        if result is None:
            break
        e = result.edge
        yield {
            'step': result.narrate(),
            'mst_edges': [(m.source, m.destination) for m in engine.mst],
            'considered_edge': (e.source, e.destination),
            'status': 'added' if result.accepted else 'rejected',
        }

    yield {
        'step': f'Final MST Found! Total Weight: {engine.total_weight}',
        'mst_edges': [(m.source, m.destination) for m in engine.mst],
        'considered_edge': None,
        'status': 'done',
    }


# --- Visualization Function ---

def visualize_kruskal(store: EdgeStore, title: str = "Kruskal's Algorithm Visualization", delay: float = 1.5):
    G = to_networkx(store)
    pos = nx.circular_layout(G)  # node placement on a circle
    edge_labels = nx.get_edge_attributes(G, 'weight')

    fig, ax = plt.subplots(figsize=(10, 8))
    if fig.canvas.manager is not None:
        fig.canvas.manager.set_window_title(title)

    # Define colors
    node_color = '#2a5885'
    default_edge_color = '#999999'
    mst_edge_color = '#4CAF50'
    considering_edge_color = '#FFC107'
    rejected_edge_color = '#ef4444'

    for state in kruskal_frames(store):
        ax.clear()

        nx.draw_networkx_nodes(G, pos, ax=ax, node_color=node_color, node_size=700)

        # Draw all edges in default color first
        nx.draw_networkx_edges(G, pos, ax=ax, edge_color=default_edge_color, width=1.0)

        if state['mst_edges']:
            nx.draw_networkx_edges(G, pos, ax=ax, edgelist=state['mst_edges'], edge_color=mst_edge_color, width=3.0)

        # Highlight the considered/rejected edge
        if state['considered_edge']:
            color = considering_edge_color
            if state['status'] == 'rejected':
                color = rejected_edge_color
            nx.draw_networkx_edges(G, pos, ax=ax, edgelist=[state['considered_edge']], edge_color=color, width=3.5, style='dashed')

        nx.draw_networkx_labels(G, pos, ax=ax, font_size=12, font_color='white', font_weight='bold')
        nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, ax=ax, font_color='black')

        ax.set_title(state['step'], fontsize=12)
        plt.tight_layout()
        plt.pause(delay)

    plt.show()
