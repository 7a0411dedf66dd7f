import math
from typing import NamedTuple

import numpy as np

from acs_tsp.aco.errors import InvalidInstanceError


class City(NamedTuple):
    x: float
    y: float


def distance(a, b):
    """Euclidean distance rounded to the closest integer, halves away from zero."""
    d = math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)
    whole = math.floor(d)
    return int(whole + 1 if d - whole >= 0.5 else whole)


def distance_matrix(coordinates):
    coords = np.asarray(coordinates, dtype=float)
    diff = coords[:, None, :] - coords[None, :, :]
    d = np.sqrt(np.sum(diff ** 2, axis=-1))
    # compare the fraction: d + 0.5 itself rounds up just below a half
    whole = np.floor(d)
    return np.where(d - whole >= 0.5, whole + 1, whole).astype(np.int64)


def as_coordinates(cities, num_cities=None):
    """
    Validate a city list and return it as a float array of shape (N, 2).
    """
    try:
        coords = np.asarray(cities, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInstanceError(f"cities must be (x, y) pairs: {e}") from e

    if coords.ndim != 2 or coords.shape[1] != 2:
        raise InvalidInstanceError(f"expected an (N, 2) array of coordinates, got shape {coords.shape}")
    n = coords.shape[0]
    if num_cities is not None and int(num_cities) != n:
        raise InvalidInstanceError(f"declared dimension {num_cities} does not match {n} cities")
    if n < 2:
        raise InvalidInstanceError(f"a tour needs at least 2 cities, got {n}")
    if not np.isfinite(coords).all():
        raise InvalidInstanceError("coordinates must be finite")
    return coords


def tour_cost(cost, tour):
    """Length of a closed tour (tour[0] == tour[-1]) under an integer cost matrix."""
    tour_np = np.asarray(tour, dtype=int)
    return int(np.sum(cost[tour_np[:-1], tour_np[1:]]))
