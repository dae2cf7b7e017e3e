"""Step 3: Exploring Events -- bar charts of categories, histograms of durations."""
import streamlit as st
import numpy as np

from weatherevents.data_loader import load_data, sidebar_filters, join_stations, has_precipitation
from weatherevents.plotting import bar_chart, count_bar, histogram_chart
from weatherevents.constants import EVENT_TYPES, PRECIP_COL, SEVERITY_ORDER, TIME_ZONES
from weatherevents.stats_helpers import descriptive_stats
from weatherevents.ui_components import (
    step_header, concept_box, insight_box, warning_box,
    code_example, takeaways, navigation,
)

step_header(3, "Counts first, distributions second.")

try:
    events, stations = load_data()
except (FileNotFoundError, ValueError) as exc:
    st.error(str(exc))
    st.stop()

fev = sidebar_filters(events)
if fev.empty:
    st.warning("No events match the current filters. Widen them in the sidebar.")
    st.stop()

# ── 3.1 What kinds of events? ────────────────────────────────────────────────
st.header("3.1  What Kinds of Events?")
concept_box(
    "Bar Charts Are for Categories",
    "When a column is categorical, the only honest first question is <b>how many of each</b>. "
    "A bar chart answers it. Resist the temptation to use a pie chart; people are bad at "
    "comparing angles and good at comparing lengths."
)

col1, col2 = st.columns(2)
with col1:
    st.plotly_chart(count_bar(fev, "Type", order=EVENT_TYPES, title="Events by Type"),
                    use_container_width=True)
with col2:
    st.plotly_chart(count_bar(fev, "Severity", order=SEVERITY_ORDER, title="Events by Severity"),
                    use_container_width=True)

code_example(
    """import plotly.express as px

counts = events["Type"].value_counts().rename_axis("Type").reset_index(name="count")
px.bar(counts, x="Type", y="count")
"""
)

# ── 3.2 Type and severity together ───────────────────────────────────────────
st.header("3.2  Severity Within Each Type")
normalize = st.toggle("Show shares instead of counts", value=True, key="sev_share")
fig = bar_chart(fev, x="Type", color="Severity", normalize=normalize,
                title="Severity Mix by Event Type")
st.plotly_chart(fig, use_container_width=True)

insight_box(
    "Severity means different things for different event types. 'Severe' fog is fog thick "
    "enough to close runways; 'Severe' cold is a hard freeze. Comparing shares within each "
    "type is fairer than comparing raw counts, because rain simply happens more than hail."
)

# ── 3.3 Where? ───────────────────────────────────────────────────────────────
st.header("3.3  Where Are Events Reported?")
joined = join_stations(fev, stations)
top_n = st.slider("Number of states to show", 5, 50, 15, key="top_states")
st.plotly_chart(
    count_bar(joined, "State", title=f"Top {top_n} States by Event Count",
              horizontal=True, top_n=top_n, height=max(400, 22 * top_n)),
    use_container_width=True,
)

st.plotly_chart(count_bar(fev, "TimeZone", order=TIME_ZONES, title="Events by Time Zone", height=380),
                use_container_width=True)

warning_box(
    "These are counts of <i>reported</i> events, and some states simply have more airport "
    "stations than others. A state with twice the stations will look twice as stormy. "
    "Divide by the number of stations before drawing conclusions about the weather."
)

per_station = (
    joined.groupby("State").size() / stations.groupby("State")["AirportCode"].nunique()
).dropna().sort_values(ascending=False).head(10)
st.dataframe(per_station.rename("events per station").round(1), use_container_width=True)

# ── 3.4 How long? ────────────────────────────────────────────────────────────
st.header("3.4  How Long Do Events Last?")
dur = fev["DurationHours"].dropna()
max_hours = st.slider("Clip durations at (hours)", 1, 72, 24, key="dur_clip")
log_y = st.checkbox("Log-scale y-axis", value=False, key="dur_log")
clipped = fev[fev["DurationHours"] <= max_hours]
st.plotly_chart(
    histogram_chart(clipped, "DurationHours", color="Type", nbins=60, log_y=log_y,
                    title="Event Duration Distribution"),
    use_container_width=True,
)

ds = descriptive_stats(dur)
m1, m2, m3, m4 = st.columns(4)
m1.metric("Median", f"{ds['median']:.2f} h")
m2.metric("Mean", f"{ds['mean']:.2f} h")
m3.metric("Std Dev", f"{ds['std']:.2f} h")
m4.metric("Skewness", f"{ds['skewness']:.2f}")

st.caption(f"{(dur > max_hours).sum():,} events longer than {max_hours} h are not shown.")

insight_box(
    "The mean sits well to the right of the median, which is what a long right tail does. "
    "Most events are short; a few last for days. Keep this shape in mind for Step 4, "
    "where we lean on a normal approximation that this histogram clearly is not."
)

# ── 3.5 Precipitation ────────────────────────────────────────────────────────
if has_precipitation(fev):
    st.header("3.5  Precipitation")
    wet = fev[fev[PRECIP_COL] > 0]
    if wet.empty:
        st.info("No events with recorded precipitation under the current filters.")
    else:
        q99 = float(np.nanquantile(wet[PRECIP_COL], 0.99))
        fig = histogram_chart(wet[wet[PRECIP_COL] <= q99], PRECIP_COL, color="Type", nbins=50,
                              title="Precipitation per Event (up to 99th percentile)", height=420)
        st.plotly_chart(fig, use_container_width=True)

st.divider()
takeaways([
    "Bar charts of `value_counts()` are the first look at any categorical column.",
    "Compare shares within groups when group sizes differ wildly.",
    "Counts of reports reflect where the stations are as much as where the weather is.",
    "Durations are heavily right-skewed: the mean and the median tell different stories.",
])

st.divider()
navigation(prev_page="02_Cleaning_and_Normalizing.py", next_page="04_Hypothesis_Testing.py")
