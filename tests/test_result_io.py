"""
Tests for saving and loading registration results.
"""

from pathlib import Path

import pytest

from beacon_registration.alignment import combine_scanners
from beacon_registration.alignment.result_io import load_beacons, load_positions, save_registration
from beacon_registration.preprocessing.loader import ScannerLoader

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(scope="module")
def example_result():
    return combine_scanners(ScannerLoader().load(str(DATA_DIR / "example_scanners.txt")))


def test_save_and_load(example_result, tmp_path):
    paths = save_registration(example_result, str(tmp_path / "out"))

    assert Path(paths["beacons"]).exists()
    assert Path(paths["positions"]).exists()
    assert load_beacons(paths["beacons"]) == example_result.beacons
    assert load_positions(paths["positions"]) == example_result.positions


def test_saved_files_are_plain_integers(example_result, tmp_path):
    paths = save_registration(example_result, str(tmp_path))
    lines = [l for l in Path(paths["positions"]).read_text().splitlines() if not l.startswith("#")]

    assert lines[0] == "0 0 0"
    assert lines[1] == "68 -1246 -43"
    assert len(lines) == 5


def test_load_rejects_wrong_shape(tmp_path):
    bad = tmp_path / "bad.txt"
    bad.write_text("1 2\n3 4\n")
    with pytest.raises(ValueError):
        load_positions(str(bad))
