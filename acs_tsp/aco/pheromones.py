from typing import NamedTuple

import numpy as np

from acs_tsp.aco.distance import distance_matrix


class Edge(NamedTuple):
    cost: int
    pheromone: float


class PheromoneMatrix:
    """
    Dense symmetric store of edge costs and pheromone intensities.
    Costs are fixed once built; pheromone changes through local and global updates.
    """

    def __init__(self, cost, tau0):
        """Only the upper triangle of `cost` is read; it is mirrored below the diagonal."""
        self.num_nodes = len(cost)
        self.tau0 = tau0
        self.cost = np.zeros((self.num_nodes, self.num_nodes), dtype=np.int64)
        self.matrix = np.full((self.num_nodes, self.num_nodes), tau0, dtype=float)
        for i in range(self.num_nodes):
            for j in range(i + 1, self.num_nodes):
                self.set_values(i, j, Edge(int(cost[i][j]), tau0))

    @classmethod
    def from_coordinates(cls, coordinates, tau0):
        return cls(distance_matrix(coordinates), tau0)

    def entry(self, i, j):
        return Edge(int(self.cost[i, j]), float(self.matrix[i, j]))

    def set_values(self, i, j, data):
        self.cost[i, j] = self.cost[j, i] = data.cost
        self.matrix[i, j] = self.matrix[j, i] = data.pheromone

    def set_pheromone(self, i, j, value):
        self.matrix[i, j] = self.matrix[j, i] = value

    def attractiveness(self, i, candidates, beta):
        """pheromone / cost^beta from city i to each candidate; zero cost gives inf."""
        tau = self.matrix[i, candidates]
        cost = self.cost[i, candidates].astype(float)
        with np.errstate(divide="ignore"):
            return tau / cost ** beta

    def local_update(self, i, j, rho, tau0=None):
        tau0 = self.tau0 if tau0 is None else tau0
        self.set_pheromone(i, j, (1 - rho) * self.matrix[i, j] + rho * tau0)

    def global_update(self, tour, alpha, tour_length):
        # edge by edge: with two cities the same edge is reinforced twice
        delta = alpha / tour_length
        for a, b in zip(tour[:-1], tour[1:]):
            self.set_pheromone(a, b, (1 - alpha) * self.matrix[a, b] + delta)

    def snapshot(self):
        return self.matrix.copy()
