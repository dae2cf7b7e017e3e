"""Loading, cleaning and table-splitting for the weather events file."""
import logging
import os

import pandas as pd
import streamlit as st

from weatherevents.constants import (
    EVENT_COLUMNS, PRECIP_COL, RAW_REQUIRED_COLS, RENAME_MAP, SEASON_ORDER,
    SEASONS, SEVERITY_ORDER, STATION_COLUMNS, STATION_KEY,
)

logger = logging.getLogger(__name__)

DATA_PATH = os.environ.get(
    "WEATHER_EVENTS_CSV",
    os.path.join(os.path.dirname(os.path.dirname(__file__)), "weather_events_sample.csv"),
)


def read_events_csv(path, nrows=None):
    """Read the raw events file and check that the expected columns are present."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Weather events file not found: {path}")
    raw = pd.read_csv(path, nrows=nrows, dtype={"ZipCode": str, "EventId": str})
    missing = [c for c in RAW_REQUIRED_COLS if c not in raw.columns]
    if missing:
        raise ValueError(f"Weather events file is missing columns: {', '.join(missing)}")
    return raw


def clean_events(raw):
    """Rename the timestamp columns, recode categoricals and add derived columns."""
    df = raw.rename(columns=RENAME_MAP).copy()
    df["StartTime"] = pd.to_datetime(df["StartTime"])
    df["EndTime"] = pd.to_datetime(df["EndTime"])

    df["Type"] = df["Type"].astype("category")
    df["TimeZone"] = df["TimeZone"].astype("category")
    # UNK, Other and any other label outside the scale become NaN
    severity = df["Severity"].where(df["Severity"].isin(SEVERITY_ORDER))
    df["Severity"] = pd.Categorical(severity, categories=SEVERITY_ORDER, ordered=True)
    df["ZipCode"] = df["ZipCode"].astype("string")

    duration = (df["EndTime"] - df["StartTime"]).dt.total_seconds() / 3600
    df["DurationHours"] = duration.where(duration >= 0)
    df["Month"] = df["StartTime"].dt.month
    df["Year"] = df["StartTime"].dt.year
    df["Season"] = pd.Categorical(
        df["Month"].map(SEASONS), categories=SEASON_ORDER, ordered=True
    )
    return df


def split_tables(clean):
    """Split cleaned records into an events table and a station lookup table."""
    event_cols = [c for c in EVENT_COLUMNS if c in clean.columns]
    events = clean[event_cols].reset_index(drop=True)
    stations = (
        clean[STATION_COLUMNS]
        .dropna(subset=[STATION_KEY])
        .drop_duplicates()
        .sort_values(STATION_KEY)
        .reset_index(drop=True)
    )
    logger.debug("Split %d records into %d events and %d stations",
                 len(clean), len(events), len(stations))
    return events, stations


def station_key_is_unique(stations):
    """True when every station identifier appears on exactly one row."""
    return stations[STATION_KEY].nunique() == len(stations)


def duplicate_station_keys(stations):
    """Station identifiers that map to more than one set of attributes."""
    counts = stations[STATION_KEY].value_counts()
    return sorted(counts[counts > 1].index.tolist())


def join_stations(events, stations):
    """Attach station geography to each event via the station key."""
    if not station_key_is_unique(stations):
        dupes = duplicate_station_keys(stations)
        raise ValueError(
            f"Station key {STATION_KEY} is not unique; conflicting rows for: {', '.join(dupes[:10])}"
        )
    return events.merge(stations, on=STATION_KEY, how="left", validate="many_to_one")


@st.cache_data
def load_raw_data(path=DATA_PATH):
    """Cached raw file, exactly as pandas reads it."""
    return read_events_csv(path)


@st.cache_data
def load_data(path=DATA_PATH):
    """Run the full load -> clean -> split pipeline; return (events, stations)."""
    raw = read_events_csv(path)
    return split_tables(clean_events(raw))


def sidebar_filters(events):
    """Render sidebar type, severity and date filters; return filtered events."""
    st.sidebar.header("Filters")
    types = events["Type"].cat.categories.tolist()
    selected_types = st.sidebar.multiselect("Event types", types, default=types, key="type_filter")

    severities = st.sidebar.multiselect(
        "Severity", SEVERITY_ORDER, default=SEVERITY_ORDER, key="severity_filter"
    )
    include_unknown = st.sidebar.checkbox("Include unknown severity", value=True, key="unk_filter")

    min_date = events["StartTime"].min().date()
    max_date = events["StartTime"].max().date()
    date_range = st.sidebar.date_input(
        "Start date range", value=(min_date, max_date),
        min_value=min_date, max_value=max_date,
        key="date_filter"
    )
    if len(date_range) == 2:
        start, end = date_range
    else:
        start, end = min_date, max_date

    severity_mask = events["Severity"].isin(severities)
    if include_unknown:
        severity_mask |= events["Severity"].isna()

    mask = (
        events["Type"].isin(selected_types) &
        severity_mask &
        (events["StartTime"].dt.date >= start) &
        (events["StartTime"].dt.date <= end)
    )
    return events[mask].copy()


def has_precipitation(df):
    """Whether the loaded file carried the optional precipitation column."""
    return PRECIP_COL in df.columns
