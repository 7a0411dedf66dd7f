import numpy as np


class Ant:
    """
    One tour-constructing agent.

    `not_visited[:nv_len]` holds the remaining cities. Removal swaps the last live
    slot into the vacated one, so the scan order changes as the ant moves; the
    transition rules return positions in that array, not city ids.
    """

    def __init__(self, starting_city, num_nodes, rng):
        self.starting_city = starting_city
        self.current_city = starting_city
        self.next_city = -1
        self.num_nodes = num_nodes
        self.rng = rng

        self.tour = np.full(num_nodes + 1, -1, dtype=np.int64)
        self.tour[0] = starting_city
        self.not_visited = np.delete(np.arange(num_nodes, dtype=np.int64), starting_city)
        self.nv_len = num_nodes - 1
        self.tour_length = float('inf')

    @property
    def candidates(self):
        return self.not_visited[:self.nv_len]

    def exploit(self, pheromones, beta):
        scores = pheromones.attractiveness(self.current_city, self.candidates, beta)
        # ties go to the last maximal candidate in scan order
        return self.nv_len - 1 - int(np.argmax(scores[::-1]))

    def explore(self, pheromones, beta):
        scores = pheromones.attractiveness(self.current_city, self.candidates, beta)
        infinite = np.isinf(scores)
        if infinite.any():
            # coincident cities: spread the wheel over the zero-cost edges only
            scores = infinite.astype(float)

        probs = scores / scores.sum()
        r = self.rng.random()
        cum_probs = np.cumsum(probs)
        position = int(np.searchsorted(cum_probs, r, side='left'))
        # rounding can leave the cumulative mass just short of r
        return min(position, self.nv_len - 1)

    def state_transition_rule(self, pheromones, beta, q0):
        q = self.rng.random()
        if q <= q0:
            return self.exploit(pheromones, beta)
        return self.explore(pheromones, beta)

    def move_to(self, position, step):
        self.next_city = int(self.not_visited[position])
        self.tour[step + 1] = self.next_city

        self.not_visited[position] = self.not_visited[self.nv_len - 1]
        self.not_visited[self.nv_len - 1] = -1
        self.nv_len -= 1
        return self.next_city

    def return_home(self, step):
        self.next_city = self.starting_city
        self.tour[step + 1] = self.starting_city
        return self.next_city

    def advance(self):
        self.current_city = self.next_city

    def is_complete(self):
        return self.nv_len == 0 and self.tour[-1] == self.starting_city
