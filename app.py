"""US Weather Events Walkthrough -- Main Entry Point."""
import streamlit as st

from weatherevents.constants import STEP_TITLES
from weatherevents.data_loader import DATA_PATH, load_data

st.set_page_config(
    page_title="US Weather Events Walkthrough",
    page_icon="🌧️",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("US Weather Events Walkthrough")
st.subheader("One file, five steps, from raw CSV to a severity classifier")

st.markdown("""
Most weather datasets are measurements: a thermometer reading every hour, forever. This one is
different. Each row is an **event** -- a snowfall, a fog bank, a thunderstorm, a hailstorm --
reported by an airport weather station, with a start time, an end time, and a severity label.
That makes it a surprisingly good dataset for learning the unglamorous parts of analysis,
because almost every column needs a little work before it tells you anything.

### What We Will Do

We are going to make exactly one pass over one file. No database, no pipeline, no scheduler.
Each step takes what the previous one produced:

1. **Load** the flat CSV and look at what pandas thinks it contains
2. **Clean** it: recode categories, rename the awkward timestamp columns, and split the file
   into an events table and a stations table joined by the airport code
3. **Explore** it with bar charts and histograms
4. **Test** one hypothesis about event durations with a normal approximation
5. **Predict** severity from four categorical features with a random forest, and read the
   confusion matrix properly

### The Steps
""")

for number, title in STEP_TITLES.items():
    st.markdown(f"**Step {number}** -- {title}")

st.divider()

st.subheader("Dataset Preview")
try:
    events, stations = load_data()
except FileNotFoundError:
    st.error(
        f"No data file at `{DATA_PATH}`. Create one with "
        "`python sample_events.py <full_csv>` or point `WEATHER_EVENTS_CSV` at an existing sample."
    )
    st.stop()
except ValueError as exc:
    st.error(f"`{DATA_PATH}` is not a weather events file. {exc}")
    st.stop()

st.dataframe(events.head(20), use_container_width=True)

col1, col2, col3, col4 = st.columns(4)
col1.metric("Events", f"{len(events):,}")
col2.metric("Stations", f"{len(stations):,}")
col3.metric("Event Types", events["Type"].nunique())
col4.metric(
    "Date Range",
    f"{events['StartTime'].min().strftime('%Y-%m-%d')} to {events['StartTime'].max().strftime('%Y-%m-%d')}",
)
