import numpy as np

from acs_tsp.aco.errors import DegenerateInstanceError


def nearest_neighbor_length(cost, rng):
    """
    Greedy nearest-neighbour tour from a random starting city.
    Returns the length of the closed tour; used only to calibrate tau0.
    """
    num_cities = len(cost)
    start = int(rng.integers(num_cities))
    not_visited = np.delete(np.arange(num_cities), start)
    nv_len = num_cities - 1

    current = start
    length = 0
    for _ in range(num_cities - 1):
        d = cost[current, not_visited[:nv_len]]
        # "<=" scan: the last candidate at minimum distance wins
        best = nv_len - 1 - int(np.argmin(d[::-1]))
        length += int(d[best])
        current = int(not_visited[best])

        not_visited[best] = not_visited[nv_len - 1]
        nv_len -= 1

    return length + int(cost[current, start])


def initial_pheromone(nn_length, num_cities):
    if nn_length <= 0:
        raise DegenerateInstanceError(
            "nearest-neighbour tour has zero length; all cities coincide"
        )
    return 1.0 / (nn_length * num_cities)
