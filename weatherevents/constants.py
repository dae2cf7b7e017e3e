"""Shared constants: column names, category orders, colors, labels."""

STATION_KEY = "AirportCode"

RENAME_MAP = {
    "StartTime(UTC)": "StartTime",
    "EndTime(UTC)": "EndTime",
}

RAW_REQUIRED_COLS = [
    "EventId", "Type", "Severity", "StartTime(UTC)", "EndTime(UTC)",
    "TimeZone", "AirportCode", "LocationLat", "LocationLng",
    "City", "County", "State", "ZipCode",
]

PRECIP_COL = "Precipitation(in)"

EVENT_COLUMNS = [
    "EventId", "Type", "Severity", "StartTime", "EndTime",
    PRECIP_COL, "TimeZone", STATION_KEY,
    "DurationHours", "Month", "Year", "Season",
]

STATION_COLUMNS = [
    STATION_KEY, "LocationLat", "LocationLng", "City", "County", "State", "ZipCode",
]

EVENT_TYPES = ["Snow", "Fog", "Cold", "Storm", "Rain", "Precipitation", "Hail"]

SEVERITY_ORDER = ["Light", "Moderate", "Heavy", "Severe"]

TIME_ZONES = ["US/Eastern", "US/Central", "US/Mountain", "US/Pacific"]

SEASONS = {
    12: "Winter", 1: "Winter", 2: "Winter",
    3: "Spring", 4: "Spring", 5: "Spring",
    6: "Summer", 7: "Summer", 8: "Summer",
    9: "Fall", 10: "Fall", 11: "Fall",
}

SEASON_ORDER = ["Winter", "Spring", "Summer", "Fall"]

MODEL_FEATURES = ["Type", "TimeZone", "State", "Season"]
MODEL_TARGET = "Severity"

TYPE_COLORS = {
    "Snow": "#5DADE2",
    "Fog": "#95A5A6",
    "Cold": "#1F618D",
    "Storm": "#7D3C98",
    "Rain": "#2A9D8F",
    "Precipitation": "#F4A261",
    "Hail": "#E63946",
}

SEVERITY_COLORS = {
    "Light": "#A9DFBF",
    "Moderate": "#F9E79F",
    "Heavy": "#F0B27A",
    "Severe": "#C0392B",
}

COLUMN_LABELS = {
    "DurationHours": "Duration (hours)",
    PRECIP_COL: "Precipitation (in)",
    "Type": "Event Type",
    "TimeZone": "Time Zone",
    STATION_KEY: "Station",
    "count": "Events",
}

STEP_TITLES = {
    1: "Loading the Data",
    2: "Cleaning and Normalizing",
    3: "Exploring Events",
    4: "Hypothesis Testing",
    5: "Predicting Severity",
}
