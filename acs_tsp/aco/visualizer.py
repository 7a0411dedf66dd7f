import networkx as nx
import matplotlib.pyplot as plt


def tour_graph(tour):
    """Cycle graph whose edges follow a closed tour (first == last)."""
    G = nx.Graph()
    G.add_nodes_from(int(c) for c in tour[:-1])
    G.add_edges_from((int(a), int(b)) for a, b in zip(tour[:-1], tour[1:]))
    return G


def draw_tour(coordinates, tour, title=None, save_path=None):
    """
    Plots the cities and the tour through them; the starting city is highlighted.
    """
    G = tour_graph(tour)
    pos = {n: (coordinates[n][0], coordinates[n][1]) for n in G.nodes()}

    fig, ax = plt.subplots(1, 1, figsize=(10, 8))
    nx.draw_networkx_edges(G, pos, ax=ax, edge_color='tab:blue', width=1.5, alpha=0.7)
    nx.draw_networkx_nodes(G, pos, ax=ax, node_size=30, node_color='tab:blue')
    start = int(tour[0])
    ax.scatter(*pos[start], c='red', s=120, marker='*', zorder=4, label='Start/End')

    ax.set_title(title or f"Tour through {len(pos)} cities")
    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.legend()
    ax.grid(True, alpha=0.3)
    ax.axis('equal')
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
    return fig, ax
