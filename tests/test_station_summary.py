import pytest

from jolbondhu.data_ingestion.station_csv import normalize_station
from jolbondhu.features.station_summary import filter_stations, summarize_stations


def _station(seq, district, current, danger="10"):
    fields = [""] * 19
    fields[9] = district
    fields[12] = danger
    fields[14] = current
    return normalize_station(fields, seq)


@pytest.fixture
def stations():
    return [
        _station(1, "Kamrup", "9.8"),
        _station(2, "Kamrup", "8.5"),
        _station(3, "Dibrugarh", "9.9"),
        _station(4, "Dibrugarh", "2"),
        _station(5, "Cachar", "", danger=""),
    ]


def test_summarize_stations_counts(stations):
    summary = summarize_stations(stations)
    assert summary["total"] == 5
    assert summary["by_risk"] == {"High": 2, "Medium": 1, "Low": 2}
    assert summary["by_district"]["Kamrup"] == {"High": 1, "Medium": 1, "Low": 0}
    assert summary["by_district"]["Cachar"] == {"High": 0, "Medium": 0, "Low": 1}


def test_summarize_stations_empty():
    assert summarize_stations([]) == {
        "total": 0,
        "by_risk": {"High": 0, "Medium": 0, "Low": 0},
        "by_district": {},
    }


def test_filter_stations(stations):
    assert [s.id for s in filter_stations(stations, "HIGH")] == ["wl_1", "wl_3"]
    assert len(filter_stations(stations, "all")) == 5
    with pytest.raises(ValueError):
        filter_stations(stations, "severe")
