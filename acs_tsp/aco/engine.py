import time
from dataclasses import dataclass, field

import numpy as np

from acs_tsp.aco.ant import Ant
from acs_tsp.aco.config import load_config, validate_config
from acs_tsp.aco.distance import as_coordinates, distance_matrix, tour_cost
from acs_tsp.aco.errors import DegenerateInstanceError, SearchError
from acs_tsp.aco.local_search import two_opt
from acs_tsp.aco.nearest_neighbor import initial_pheromone, nearest_neighbor_length
from acs_tsp.aco.pheromones import PheromoneMatrix

cfg = load_config()


@dataclass
class RunResult:
    best_tour: list = field(default_factory=list)
    best_length: int = 0
    iterations: int = 0


class AntColonySystem:
    """
    Ant Colony System with 2-opt refinement, bounded by wall-clock time.

    Every hyper-parameter left as None falls back to the packaged config. `clock`
    is any zero-argument callable returning seconds; the deadline is only checked
    between iterations.
    """

    def __init__(self, cities, num_cities=None, *, seed=None, num_ants=None, alpha=None,
                 beta=None, rho=None, q0=None, time_limit=None, verbose=None,
                 clock=time.monotonic, record_pheromones=False):
        self.coordinates = as_coordinates(cities, num_cities)
        self.num_nodes = len(self.coordinates)

        params = {
            "num_ants": num_ants if num_ants is not None else cfg["num_ants"],
            "alpha": alpha if alpha is not None else cfg["alpha"],
            "beta": beta if beta is not None else cfg["beta"],
            "rho": rho if rho is not None else cfg["rho"],
            "q0": q0 if q0 is not None else cfg["q0"],
            "time_limit": time_limit if time_limit is not None else cfg["time_limit"],
        }
        validate_config(params)
        self.num_ants = int(params["num_ants"])
        self.alpha = float(params["alpha"])
        self.beta = float(params["beta"])
        self.rho = float(params["rho"])
        self.q0 = float(params["q0"])
        self.time_limit = float(params["time_limit"])
        self.verbose = verbose if verbose is not None else bool(cfg.get("verbose", False))
        self.seed = seed if seed is not None else cfg.get("seed")
        self.clock = clock
        self.record_pheromones = record_pheromones

        # one generator shared by the seeder and every ant keeps seeded runs reproducible
        self.rng = np.random.default_rng(self.seed)

        cost = distance_matrix(self.coordinates)
        self.nn_length = nearest_neighbor_length(cost, self.rng)
        self.tau0 = initial_pheromone(self.nn_length, self.num_nodes)
        self.pheromones = PheromoneMatrix(cost, self.tau0)

        self.ants = []
        self.total_iterations = 0
        self.best_tour = None
        self.best_length = float('inf')
        self.best_iter_tour = None
        self.best_iter_length = float('inf')
        self.best_length_history = []
        self.pheromone_history = []

    def position_ants(self):
        self.ants = [
            Ant(int(self.rng.integers(self.num_nodes)), self.num_nodes, self.rng)
            for _ in range(self.num_ants)
        ]
        return self.ants

    def construct_tours(self):
        """
        Build one closed tour per ant. Ants move round-robin, one step each in index
        order, and every move is followed at once by its local pheromone update, so
        later ants in the same step already see it.
        """
        for step in range(self.num_nodes):
            for ant in self.ants:
                if step < self.num_nodes - 1:
                    position = ant.state_transition_rule(self.pheromones, self.beta, self.q0)
                    ant.move_to(position, step)
                else:
                    ant.return_home(step)
                self.pheromones.local_update(ant.current_city, ant.next_city, self.rho)
                ant.advance()

    def iterate(self):
        self.total_iterations += 1
        self.position_ants()
        self.construct_tours()

        best_ant = None
        for ant in self.ants:
            two_opt(ant.tour, self.pheromones.cost)
            ant.tour_length = tour_cost(self.pheromones.cost, ant.tour)
            if best_ant is None or ant.tour_length <= best_ant.tour_length:
                best_ant = ant

        self.best_iter_tour = best_ant.tour.copy()
        self.best_iter_length = best_ant.tour_length
        if self.best_iter_length <= 0:
            # alpha / length is undefined; cities this close round to zero-cost edges
            raise DegenerateInstanceError(
                f"iteration {self.total_iterations} found a tour of length 0"
            )
        self.pheromones.global_update(self.best_iter_tour, self.alpha, self.best_iter_length)

        if self.best_iter_length <= self.best_length:
            self.best_length = self.best_iter_length
            self.best_tour = self.best_iter_tour.copy()

        self.best_length_history.append(self.best_length)
        if self.record_pheromones:
            self.pheromone_history.append(self.pheromones.snapshot())
        if self.verbose:
            print(f"Iteration {self.total_iterations}: Best length {self.best_length}")

    def run(self):
        start = self.clock()
        while self.clock() - start < self.time_limit:
            self.iterate()

        if self.best_tour is None:
            raise SearchError(f"time limit of {self.time_limit}s expired before the first iteration")
        return RunResult(
            best_tour=[int(c) for c in self.best_tour],
            best_length=int(self.best_length),
            iterations=self.total_iterations,
        )

    def solve(self):
        return self.run().best_length


def solve(cities, num_cities=None, **kwargs):
    """Run the time-bounded search and return the best tour cost found."""
    return AntColonySystem(cities, num_cities, **kwargs).solve()
