import gzip
import os
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import requests

from acs_tsp.aco.errors import InstanceFormatError

TSPLIB_URL = "http://comopt.ifi.uni-heidelberg.de/software/TSPLIB95/tsp/"

# Optimal tour lengths of EUC_2D TSPLIB instances, whose files carry no BEST_KNOWN line
TSPLIB_OPTIMAL = {
    'berlin52': 7542,
    'eil51': 426,
    'kroA100': 21282,
    'lin105': 14379,
    'pr107': 44303,
    'a280': 2579,
    'bier127': 118282,
}


@dataclass
class Instance:
    name: str
    dimension: int
    best_known: int | None
    coordinates: np.ndarray
    path: Path | None = None


def has_tsp_extension(name):
    name = os.fspath(name)
    return len(name) > 4 and name.endswith(".tsp")


def parse_tsp_file(content, path=None):
    """
    Parse the text of an instance file.

    Header lines are `KEY : value`; NAME, DIMENSION, BEST_KNOWN and EDGE_WEIGHT_TYPE
    (EUC_2D only, the default when absent) are used.
    NODE_COORD_SECTION is followed by DIMENSION lines of `index x y`.
    """
    lines = content.strip().splitlines()

    metadata = {}
    i = 0
    while i < len(lines) and not lines[i].strip().startswith('NODE_COORD_SECTION'):
        if ':' in lines[i]:
            key, value = lines[i].split(':', 1)
            metadata[key.strip()] = value.strip()
        i += 1
    if i == len(lines):
        raise InstanceFormatError("missing NODE_COORD_SECTION")

    edge_weight_type = metadata.get('EDGE_WEIGHT_TYPE', 'EUC_2D').upper()
    if edge_weight_type != 'EUC_2D':
        # distance_matrix only computes rounded Euclidean costs
        raise InstanceFormatError(f"unsupported EDGE_WEIGHT_TYPE: {edge_weight_type}")

    try:
        dimension = int(metadata['DIMENSION'])
    except KeyError:
        raise InstanceFormatError("missing DIMENSION header") from None
    except ValueError:
        raise InstanceFormatError(f"bad DIMENSION: {metadata['DIMENSION']!r}") from None

    i += 1
    coords = []
    while i < len(lines) and len(coords) < dimension:
        line = lines[i].strip()
        i += 1
        if not line or line.startswith('EOF'):
            break
        parts = line.split()
        if len(parts) < 3:
            raise InstanceFormatError(f"bad coordinate line: {line!r}")
        try:
            coords.append([float(parts[1]), float(parts[2])])
        except ValueError:
            raise InstanceFormatError(f"bad coordinate line: {line!r}") from None

    if len(coords) != dimension:
        raise InstanceFormatError(f"DIMENSION is {dimension} but {len(coords)} coordinates were read")

    name = metadata.get('NAME') or (Path(path).stem if path else "unnamed")
    best_known = metadata.get('BEST_KNOWN')
    if best_known is not None:
        try:
            best_known = int(float(best_known))
        except ValueError:
            raise InstanceFormatError(f"bad BEST_KNOWN: {best_known!r}") from None
    else:
        best_known = TSPLIB_OPTIMAL.get(name)

    return Instance(
        name=name,
        dimension=dimension,
        best_known=best_known,
        coordinates=np.array(coords, dtype=float).reshape(dimension, 2),
        path=Path(path) if path else None,
    )


def load_instance(path):
    with open(path, "r") as f:
        return parse_tsp_file(f.read(), path=path)


def scan_instances(directory):
    """Instance files (*.tsp) in a directory, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Cannot open directory {directory}")
    return sorted(p for p in directory.iterdir() if p.is_file() and has_tsp_extension(p.name))


def download_instance(name, output_dir='tsplib_graphs'):
    """Download a TSPLIB instance and store it as <output_dir>/<name>.tsp."""
    response = requests.get(f"{TSPLIB_URL}{name}.tsp.gz", timeout=30)
    if response.status_code == 200:
        content = gzip.decompress(response.content).decode('utf-8')
    else:
        response = requests.get(f"{TSPLIB_URL}{name}.tsp", timeout=30)
        response.raise_for_status()
        content = response.text

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    target = output_path / f"{name}.tsp"
    target.write_text(content)
    print(f"Saved {name} to {target}")
    return target
