import gzip

import numpy as np
import pytest

from acs_tsp.aco.errors import InstanceFormatError
from acs_tsp.datasets import tsplib
from acs_tsp.datasets.tsplib import (
    download_instance,
    has_tsp_extension,
    load_instance,
    parse_tsp_file,
    scan_instances,
)

SQUARE_TSP = """NAME : square4
COMMENT : unit square
TYPE : TSP
DIMENSION : 4
EDGE_WEIGHT_TYPE : EUC_2D
BEST_KNOWN : 4
NODE_COORD_SECTION
1 0.0 0.0
2 0.0 1.0
3 1.0 1.0
4 1.0 0.0
EOF
"""


def test_parse_header_and_coordinates():
    instance = parse_tsp_file(SQUARE_TSP)
    assert instance.name == "square4"
    assert instance.dimension == 4
    assert instance.best_known == 4
    assert instance.coordinates.shape == (4, 2)
    assert np.array_equal(instance.coordinates[2], [1.0, 1.0])
    assert instance.path is None


def test_best_known_falls_back_to_tsplib_optimum():
    content = SQUARE_TSP.replace("NAME : square4", "NAME : eil51").replace("BEST_KNOWN : 4\n", "")
    assert parse_tsp_file(content).best_known == 426


def test_unknown_best_is_none():
    content = SQUARE_TSP.replace("BEST_KNOWN : 4\n", "")
    assert parse_tsp_file(content).best_known is None


def test_parses_without_eof_marker():
    instance = parse_tsp_file(SQUARE_TSP.replace("EOF\n", ""))
    assert instance.dimension == 4


@pytest.mark.parametrize(
    "broken",
    [
        SQUARE_TSP.replace("DIMENSION : 4\n", ""),
        SQUARE_TSP.replace("DIMENSION : 4", "DIMENSION : four"),
        SQUARE_TSP.replace("DIMENSION : 4", "DIMENSION : 5"),
        SQUARE_TSP.replace("NODE_COORD_SECTION\n", ""),
        SQUARE_TSP.replace("3 1.0 1.0", "3 1.0"),
        SQUARE_TSP.replace("3 1.0 1.0", "3 x 1.0"),
        SQUARE_TSP.replace("BEST_KNOWN : 4", "BEST_KNOWN : ?"),
    ],
)
def test_malformed_files(broken):
    with pytest.raises(InstanceFormatError):
        parse_tsp_file(broken)


def test_has_tsp_extension():
    assert has_tsp_extension("ch130.tsp")
    assert not has_tsp_extension(".tsp")
    assert not has_tsp_extension("ch130.tsp.gz")
    assert not has_tsp_extension("notes.txt")


def test_load_and_scan(tmp_path):
    (tmp_path / "b.tsp").write_text(SQUARE_TSP)
    (tmp_path / "a.tsp").write_text(SQUARE_TSP.replace("square4", "other"))
    (tmp_path / "readme.md").write_text("not an instance")
    (tmp_path / "nested.tsp").mkdir()

    paths = scan_instances(tmp_path)
    assert [p.name for p in paths] == ["a.tsp", "b.tsp"]

    instance = load_instance(paths[0])
    assert instance.name == "other"
    assert instance.path == paths[0]


def test_name_defaults_to_file_stem(tmp_path):
    path = tmp_path / "nameless.tsp"
    path.write_text(SQUARE_TSP.replace("NAME : square4\n", ""))
    assert load_instance(path).name == "nameless"


def test_scan_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        scan_instances(tmp_path / "missing")


class FakeResponse:
    def __init__(self, status_code, content=b"", text=""):
        self.status_code = status_code
        self.content = content
        self.text = text

    def raise_for_status(self):
        if self.status_code != 200:
            raise RuntimeError(self.status_code)


def test_download_gzipped_instance(tmp_path, monkeypatch):
    urls = []

    def fake_get(url, timeout):
        urls.append(url)
        return FakeResponse(200, content=gzip.compress(SQUARE_TSP.encode()))

    monkeypatch.setattr(tsplib.requests, "get", fake_get)
    target = download_instance("square4", output_dir=tmp_path / "out")

    assert urls == [tsplib.TSPLIB_URL + "square4.tsp.gz"]
    assert load_instance(target).dimension == 4


def test_download_falls_back_to_plain_file(tmp_path, monkeypatch):
    responses = [FakeResponse(404), FakeResponse(200, text=SQUARE_TSP)]
    monkeypatch.setattr(tsplib.requests, "get", lambda url, timeout: responses.pop(0))

    target = download_instance("square4", output_dir=tmp_path)
    assert target.read_text() == SQUARE_TSP


@pytest.mark.parametrize("weight_type", ["GEO", "ATT", "CEIL_2D", "EXPLICIT"])
def test_rejects_non_euclidean_instances(weight_type):
    content = SQUARE_TSP.replace("EDGE_WEIGHT_TYPE : EUC_2D", f"EDGE_WEIGHT_TYPE : {weight_type}")
    with pytest.raises(InstanceFormatError, match=weight_type):
        parse_tsp_file(content)


def test_missing_weight_type_means_euclidean():
    content = SQUARE_TSP.replace("EDGE_WEIGHT_TYPE : EUC_2D\n", "")
    assert parse_tsp_file(content).dimension == 4


def test_fallback_optima_cover_euclidean_instances_only():
    content = SQUARE_TSP.replace("NAME : square4", "NAME : burma14").replace("BEST_KNOWN : 4\n", "")
    assert parse_tsp_file(content).best_known is None
    assert "att48" not in tsplib.TSPLIB_OPTIMAL
