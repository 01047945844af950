# tests/io/test_stations.py
import pytest

from rail_motion.domain.entities.geography import Point
from rail_motion.io.stations import StationDirectory, normalize_station_name


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Oxford Circus Underground Station", "oxford circus"),
        ("Bank (Central)", "bank"),
        ("St. John's Wood", "st john's wood"),
        ("Highbury & Islington", "highbury and islington"),
        ("  Kings   Cross  ", "kings cross"),
        ("Shepherd’s Bush", "shepherd's bush"),
    ],
)
def test_normalize_station_name(raw, expected):
    assert normalize_station_name(raw) == expected


@pytest.fixture
def directory() -> StationDirectory:
    return StationDirectory(
        {
            "Oxford Circus Underground Station": (-0.1418, 51.5152),
            "Kings Cross St Pancras Underground Station": (-0.1238, 51.5308),
            "Earl's Court Underground Station": (-0.1946, 51.4920),
            "Bank": Point(-0.0886, 51.5133),
        }
    )


def test_exact_match_after_normalisation(directory):
    assert directory.lookup("Oxford Circus") == Point(-0.1418, 51.5152)
    assert directory.lookup("oxford circus station") == Point(-0.1418, 51.5152)


def test_alias_table(directory):
    assert directory.lookup("King's Cross St. Pancras") == Point(-0.1238, 51.5308)
    assert directory.lookup("Earls Court") == Point(-0.1946, 51.4920)


def test_substring_match_either_way(directory):
    assert directory.lookup("Bank Platform 3") == Point(-0.0886, 51.5133)
    assert directory.lookup("Pancras") == Point(-0.1238, 51.5308)


def test_unknown_and_empty_names(directory):
    assert directory.lookup("Nowhere Parkway") is None
    assert directory.lookup("") is None
    # a name that normalises to nothing must not match everything
    assert directory.lookup("Station") is None


def test_custom_aliases_and_late_additions():
    d = StationDirectory({"Bank": (1.0, 2.0)}, aliases={"Monument": "Bank"})
    assert d.lookup("Monument") == Point(1.0, 2.0)
    assert d.lookup("Angel") is None
    d.add("Angel", (3.0, 4.0))
    assert d.lookup("Angel") == Point(3.0, 4.0)


def test_from_geojson():
    fc = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Bank Underground Station"},
                "geometry": {"type": "Point", "coordinates": [-0.0886, 51.5133]},
            },
            {"type": "Feature", "properties": {}, "geometry": None},
        ],
    }
    d = StationDirectory.from_geojson(fc)
    assert d.lookup("Bank") == Point(-0.0886, 51.5133)
    with pytest.raises(ValueError):
        StationDirectory.from_geojson({"type": "Feature"})


def test_lookup_cache_is_bounded():
    d = StationDirectory({"Bank": (1.0, 2.0)}, cache_size=4)
    for i in range(50):
        assert d.lookup(f"Unheard Of Halt {i}") is None
    assert d.lookup("Bank") == Point(1.0, 2.0)
    info = d.cache_info()
    assert info.currsize == 4 and info.maxsize == 4


def test_repeated_lookups_hit_the_cache_until_a_station_is_added():
    d = StationDirectory({"Bank": (1.0, 2.0)})
    d.lookup("Bank")
    d.lookup("Bank")
    assert d.cache_info().hits == 1
    assert d.lookup("Angel") is None
    d.add("Angel", (3.0, 4.0))
    assert d.cache_info().currsize == 0
    assert d.lookup("Angel") == Point(3.0, 4.0)
