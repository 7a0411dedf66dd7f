import numpy as np
import matplotlib.pyplot as plt


def pheromone_composite(pheromone_matrices, cmap='coolwarm', save_path=None):
    """
    Single static heatmap: average pheromone intensity across all recorded iterations.
    """
    if not pheromone_matrices:
        raise ValueError("No pheromone matrices provided.")

    avg_matrix = np.mean(np.array(pheromone_matrices), axis=0)
    fig, ax = plt.subplots(figsize=(5, 4))
    im = ax.imshow(avg_matrix, cmap=cmap, interpolation='nearest')
    ax.set_title("Cumulative Pheromone Intensity")
    fig.colorbar(im, ax=ax, label="Average Pheromone Strength")
    ax.set_xticks([])
    ax.set_yticks([])
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
    return fig, ax


def best_length_curve(best_length_history, save_path=None):
    """Best tour length found so far, per iteration."""
    fig, ax = plt.subplots(figsize=(5, 3))
    ax.plot(range(1, len(best_length_history) + 1), best_length_history, color='red')
    ax.set_title("Best Tour Length Over Iterations")
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Best length")
    ax.grid(True, alpha=0.3)
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
    return fig, ax
