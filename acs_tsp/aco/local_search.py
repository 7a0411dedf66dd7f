import numpy as np


def reverse_segment(tour, i, j):
    """Reverse tour[i..j] in place (both ends inclusive)."""
    tour[i:j + 1] = tour[i:j + 1][::-1].copy()
    return tour


def two_opt(tour, cost):
    """
    First-improvement 2-opt on a closed tour of N+1 entries, modified in place.

    For each i the candidate j's are evaluated as one vector; the first improving j
    is applied and the scan resumes at j+1 with the updated tour, which is the same
    order a plain double loop visits them. Sweeps repeat until none improves.
    """
    n = len(tour) - 1
    improvement = True
    while improvement:
        improvement = False
        for i in range(n - 1):
            j = i + 1
            while j < n:
                a = tour[i]
                c = tour[i + 1]
                b = tour[j:n]
                d = tour[j + 1:n + 1]
                gain = cost[a, b] + cost[c, d] - cost[a, c] - cost[b, d]
                hits = np.flatnonzero(gain < 0)
                if hits.size == 0:
                    break
                j += int(hits[0])
                reverse_segment(tour, i + 1, j)
                improvement = True
                j += 1
    return tour
