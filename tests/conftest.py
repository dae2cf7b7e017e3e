import numpy as np
import pandas as pd
import pytest

STATIONS = {
    "KBOS": (42.36, -71.01, "Boston", "Suffolk", "MA", "02128", "US/Eastern"),
    "KORD": (41.98, -87.90, "Chicago", "Cook", "IL", "60666", "US/Central"),
    "KDEN": (39.86, -104.67, "Denver", "Denver", "CO", "80249", "US/Mountain"),
    "KSEA": (47.45, -122.31, "Seattle", "King", "WA", "98158", "US/Pacific"),
}

TYPES = ["Snow", "Rain", "Fog", "Cold"]
SEVERITIES = ["Light", "Moderate", "Heavy", "Severe", "UNK", "Other"]


def make_raw_events(n=240, seed=0):
    rng = np.random.RandomState(seed)
    codes = list(STATIONS)
    rows = []
    for i in range(n):
        code = codes[i % len(codes)]
        lat, lng, city, county, state, zipcode, tz = STATIONS[code]
        start = pd.Timestamp("2019-01-01") + pd.Timedelta(hours=int(rng.randint(0, 24 * 365)))
        end = start + pd.Timedelta(minutes=int(rng.randint(20, 600)))
        rows.append({
            "EventId": f"W-{i}",
            "Type": TYPES[i % len(TYPES)],
            "Severity": SEVERITIES[(i // len(codes)) % len(SEVERITIES)],
            "StartTime(UTC)": start.strftime("%Y-%m-%d %H:%M:%S"),
            "EndTime(UTC)": end.strftime("%Y-%m-%d %H:%M:%S"),
            "Precipitation(in)": round(float(rng.uniform(0, 0.5)), 2),
            "TimeZone": tz,
            "AirportCode": code,
            "LocationLat": lat,
            "LocationLng": lng,
            "City": city,
            "County": county,
            "State": state,
            "ZipCode": zipcode,
        })
    return pd.DataFrame(rows)


@pytest.fixture
def raw_events():
    return make_raw_events()


@pytest.fixture
def events_csv(tmp_path, raw_events):
    path = tmp_path / "weather_events_sample.csv"
    raw_events.to_csv(path, index=False)
    return str(path)
