"""Step 2: Cleaning and Normalizing -- categoricals, renaming, splitting into two tables."""
import streamlit as st
import pandas as pd

from weatherevents.data_loader import (
    load_raw_data, clean_events, split_tables, station_key_is_unique,
    duplicate_station_keys, join_stations,
)
from weatherevents.constants import RENAME_MAP, SEVERITY_ORDER, STATION_KEY
from weatherevents.ui_components import (
    step_header, concept_box, formula_box, insight_box, warning_box,
    code_example, check_question, takeaways, navigation,
)

step_header(2, "Give every column the type it deserves, then pull the stations out into their own table.")

try:
    raw = load_raw_data()
except (FileNotFoundError, ValueError) as exc:
    st.error(str(exc))
    st.stop()

clean = clean_events(raw)

# ---------------------------------------------------------------------------
# 2.1 Recoding categoricals
# ---------------------------------------------------------------------------
st.header("2.1  Strings to Categories")
concept_box(
    "Why Categorical Types?",
    "A column like <code>Type</code> only ever takes seven values. Stored as strings, pandas "
    "keeps a separate Python string for every row. Stored as a <b>categorical</b>, it keeps "
    "seven labels and a small integer code per row. That is smaller and faster, but the real "
    "win is semantic: a categorical knows its full set of allowed values, and an "
    "<b>ordered</b> categorical knows that Light &lt; Moderate &lt; Heavy &lt; Severe."
)

col1, col2 = st.columns(2)
with col1:
    st.subheader("Before")
    st.dataframe(raw.dtypes.astype(str).rename("dtype"), use_container_width=True)
    st.metric("Memory", f"{raw.memory_usage(deep=True).sum() / 1e6:.1f} MB")
with col2:
    st.subheader("After")
    st.dataframe(clean.dtypes.astype(str).rename("dtype"), use_container_width=True)
    st.metric("Memory", f"{clean.memory_usage(deep=True).sum() / 1e6:.1f} MB")

code_example(
    """df = raw.rename(columns={"StartTime(UTC)": "StartTime", "EndTime(UTC)": "EndTime"})
df["StartTime"] = pd.to_datetime(df["StartTime"])
df["EndTime"] = pd.to_datetime(df["EndTime"])

df["Type"] = df["Type"].astype("category")
df["TimeZone"] = df["TimeZone"].astype("category")
df["Severity"] = pd.Categorical(
    df["Severity"], categories=["Light", "Moderate", "Heavy", "Severe"], ordered=True
)
"""
)

# ---------------------------------------------------------------------------
# 2.2 Ordered severity
# ---------------------------------------------------------------------------
st.header("2.2  An Ordered Severity Scale")
sev = pd.DataFrame({
    "raw label": raw["Severity"].value_counts(dropna=False),
})
sev["after cleaning"] = [
    label if label in SEVERITY_ORDER else "<NA>" for label in sev.index
]
st.dataframe(sev, use_container_width=True)

n_unknown = int(clean["Severity"].isna().sum())
st.write(
    f"**{n_unknown:,}** events ({n_unknown / len(clean):.1%}) carried `UNK` or `Other` and are now missing."
)

warning_box(
    "Passing an explicit <code>categories=</code> list means anything outside it silently "
    "becomes NaN. That is exactly what we want for UNK and Other, but it is also how a typo "
    "like 'Moderat' would vanish without a word. Check the counts before and after."
)

# ---------------------------------------------------------------------------
# 2.3 Renaming and derived columns
# ---------------------------------------------------------------------------
st.header("2.3  Renaming and Deriving")
st.markdown(
    "Column names with parentheses work, but every access becomes `df[\"StartTime(UTC)\"]`. "
    "We rename exactly two columns:"
)
st.table(pd.DataFrame({"before": list(RENAME_MAP.keys()), "after": list(RENAME_MAP.values())}))

formula_box(
    "Event duration",
    r"\text{DurationHours} = \frac{\text{EndTime} - \text{StartTime}}{3600\ \text{s}}",
    "Subtracting two datetime columns gives a timedelta column; .dt.total_seconds() turns it into a number. "
    "Rows whose end precedes their start get a missing duration rather than a negative one.",
)

n_bad = int(clean["DurationHours"].isna().sum())
st.dataframe(
    clean[["EventId", "StartTime", "EndTime", "DurationHours", "Month", "Season"]].head(10),
    use_container_width=True, hide_index=True,
)
if n_bad:
    st.caption(f"{n_bad:,} events have an end time before their start time.")

# ---------------------------------------------------------------------------
# 2.4 Two tables
# ---------------------------------------------------------------------------
st.header("2.4  One File, Two Tables")
concept_box(
    "Normalizing Out the Stations",
    "Latitude, longitude, city, county, state and ZIP describe the <b>station</b>, not the event. "
    "Repeating them on every event row wastes space and, worse, invites inconsistency: nothing stops "
    "two rows from disagreeing about which county KBOS is in. The fix is the oldest trick in "
    "database design. Move the station attributes into their own table, keyed by "
    "<code>AirportCode</code>, and keep only the key on the events."
)

events, stations = split_tables(clean)

col1, col2 = st.columns(2)
with col1:
    st.subheader(f"events ({len(events):,} rows)")
    st.dataframe(events.head(8), use_container_width=True, hide_index=True)
with col2:
    st.subheader(f"stations ({len(stations):,} rows)")
    st.dataframe(stations.head(8), use_container_width=True, hide_index=True)

code_example(
    """events = clean[EVENT_COLUMNS]
stations = (
    clean[["AirportCode", "LocationLat", "LocationLng", "City", "County", "State", "ZipCode"]]
    .drop_duplicates()
    .sort_values("AirportCode")
)
"""
)

# ---------------------------------------------------------------------------
# 2.5 Checking the key
# ---------------------------------------------------------------------------
st.header("2.5  Is the Key Actually a Key?")
n_keys = stations[STATION_KEY].nunique()
m1, m2 = st.columns(2)
m1.metric("Rows in stations", f"{len(stations):,}")
m2.metric(f"Distinct {STATION_KEY}", f"{n_keys:,}")

if station_key_is_unique(stations):
    st.success(
        "The two numbers match: every station appears exactly once, so the airport code "
        "really does identify a station and the join below is safe."
    )
    joined = join_stations(events, stations)
    st.subheader("Joined back together")
    st.dataframe(joined.head(10), use_container_width=True, hide_index=True)
    insight_box(
        f"The join gives back {len(joined):,} rows, one per event, the same as before the split. "
        "A many-to-one join can never add rows; if it did, the key was not unique."
    )
else:
    dupes = duplicate_station_keys(stations)
    st.error(
        f"{len(dupes):,} airport codes appear with more than one set of attributes, "
        "so joining on them would duplicate events."
    )
    st.dataframe(stations[stations[STATION_KEY].isin(dupes)], use_container_width=True, hide_index=True)

check_question(
    "After splitting, how do you verify that AirportCode uniquely identifies a station?",
    [
        "Check that stations has no missing values",
        "Compare stations[\"AirportCode\"].nunique() with len(stations)",
        "Sort the table by AirportCode",
        "Count the events per station",
    ],
    correct_idx=1,
    explanation="If the number of distinct keys equals the number of rows, no key repeats.",
    key="step2_check",
)

st.divider()
takeaways([
    "Use `astype(\"category\")` for low-cardinality labels and `pd.Categorical(..., ordered=True)` when the labels have a natural order.",
    "Placeholders like `UNK` become NaN when they are left out of the category list.",
    "Rename awkward columns once, up front, so the rest of the code reads cleanly.",
    "Attributes of the station belong in a station table; the events keep only the key.",
    "A key is unique when `nunique()` equals the row count. Check it before you join.",
])

st.divider()
navigation(prev_page="01_Loading_the_Data.py", next_page="03_Exploring_Events.py")
