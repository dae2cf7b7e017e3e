import pandas as pd
import pytest

from weatherevents.constants import SEVERITY_ORDER, STATION_COLUMNS, STATION_KEY
from weatherevents.data_loader import (
    clean_events, duplicate_station_keys, join_stations, read_events_csv,
    split_tables, station_key_is_unique,
)


def test_read_events_csv_keeps_zip_leading_zero(events_csv):
    raw = read_events_csv(events_csv)
    assert len(raw) == 240
    assert "02128" in set(raw["ZipCode"])


def test_read_events_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_events_csv(str(tmp_path / "nope.csv"))


def test_read_events_csv_missing_columns(tmp_path, raw_events):
    path = tmp_path / "partial.csv"
    raw_events.drop(columns=["AirportCode", "Severity"]).to_csv(path, index=False)
    with pytest.raises(ValueError, match="AirportCode"):
        read_events_csv(str(path))


def test_clean_events_renames_exactly_two_columns(raw_events):
    clean = clean_events(raw_events)
    assert "StartTime" in clean.columns and "EndTime" in clean.columns
    assert "StartTime(UTC)" not in clean.columns
    assert "EndTime(UTC)" not in clean.columns
    assert pd.api.types.is_datetime64_any_dtype(clean["StartTime"])
    # input left untouched
    assert "StartTime(UTC)" in raw_events.columns


def test_clean_events_categoricals(raw_events):
    clean = clean_events(raw_events)
    assert isinstance(clean["Type"].dtype, pd.CategoricalDtype)
    assert isinstance(clean["TimeZone"].dtype, pd.CategoricalDtype)
    sev = clean["Severity"]
    assert sev.cat.ordered
    assert sev.cat.categories.tolist() == SEVERITY_ORDER
    assert (sev.dropna().astype(str).isin(SEVERITY_ORDER)).all()


@pytest.mark.filterwarnings("error")
def test_clean_events_placeholder_severity_becomes_missing(raw_events):
    clean = clean_events(raw_events)
    placeholders = raw_events["Severity"].isin(["UNK", "Other"])
    assert clean.loc[placeholders, "Severity"].isna().all()
    assert clean.loc[~placeholders, "Severity"].notna().all()


def test_severity_order_supports_comparison(raw_events):
    clean = clean_events(raw_events)
    heavy_or_worse = clean["Severity"] >= "Heavy"
    assert set(clean.loc[heavy_or_worse, "Severity"].astype(str)) == {"Heavy", "Severe"}


def test_duration_and_season(raw_events):
    raw = raw_events.copy()
    raw.loc[0, "StartTime(UTC)"] = "2019-07-04 10:00:00"
    raw.loc[0, "EndTime(UTC)"] = "2019-07-04 12:30:00"
    raw.loc[1, "StartTime(UTC)"] = "2019-12-01 10:00:00"
    raw.loc[1, "EndTime(UTC)"] = "2019-12-01 09:00:00"
    clean = clean_events(raw)
    assert clean.loc[0, "DurationHours"] == pytest.approx(2.5)
    assert clean.loc[0, "Season"] == "Summer"
    assert clean.loc[0, "Month"] == 7
    assert pd.isna(clean.loc[1, "DurationHours"])
    assert clean.loc[1, "Season"] == "Winter"


def test_split_tables(raw_events):
    events, stations = split_tables(clean_events(raw_events))
    assert len(events) == len(raw_events)
    assert list(stations.columns) == STATION_COLUMNS
    assert len(stations) == 4
    assert stations[STATION_KEY].is_monotonic_increasing
    assert STATION_KEY in events.columns
    assert "City" not in events.columns


def test_station_key_unique(raw_events):
    _, stations = split_tables(clean_events(raw_events))
    assert station_key_is_unique(stations)
    assert duplicate_station_keys(stations) == []


def test_conflicting_station_attributes_detected(raw_events):
    raw = raw_events.copy()
    raw.loc[raw["AirportCode"] == "KBOS", "County"] = ["Suffolk", "Middlesex"] * 30
    events, stations = split_tables(clean_events(raw))
    assert not station_key_is_unique(stations)
    assert duplicate_station_keys(stations) == ["KBOS"]
    with pytest.raises(ValueError, match="KBOS"):
        join_stations(events, stations)


def test_join_stations_restores_one_row_per_event(raw_events):
    events, stations = split_tables(clean_events(raw_events))
    joined = join_stations(events, stations)
    assert len(joined) == len(events)
    assert joined.loc[joined[STATION_KEY] == "KSEA", "State"].eq("WA").all()


def test_load_data_runs_full_pipeline(events_csv):
    from weatherevents.data_loader import load_data
    events, stations = load_data(events_csv)
    assert len(events) == 240
    assert station_key_is_unique(stations)
    assert events["Severity"].cat.ordered


@pytest.mark.filterwarnings("error")
def test_unexpected_severity_label_becomes_missing(raw_events):
    raw = raw_events.copy()
    raw.loc[0, "Severity"] = "Moderat"
    clean = clean_events(raw)
    assert pd.isna(clean.loc[0, "Severity"])
    assert clean["Severity"].cat.categories.tolist() == SEVERITY_ORDER


def test_split_tables_drops_missing_station_key(raw_events):
    raw = raw_events.copy()
    raw.loc[0, "AirportCode"] = None
    events, stations = split_tables(clean_events(raw))
    assert stations[STATION_KEY].notna().all()
    assert station_key_is_unique(stations)
    joined = join_stations(events, stations)
    assert len(joined) == len(raw)
    assert pd.isna(joined.loc[0, "State"])
