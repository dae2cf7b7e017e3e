"""Step 1: Loading the Data -- read_csv, shape, dtypes, missing values."""
import os

import streamlit as st
import pandas as pd

from weatherevents.data_loader import DATA_PATH, load_raw_data
from weatherevents.constants import RAW_REQUIRED_COLS, PRECIP_COL
from weatherevents.ui_components import (
    step_header, concept_box, insight_box, warning_box,
    code_example, check_question, takeaways, navigation,
)

# ── Header ───────────────────────────────────────────────────────────────────
step_header(1, "Before changing anything, find out what pandas thinks the file contains.")
st.markdown(
    "The first step of any analysis is the least exciting and the most skipped: "
    "read the file and **look at it**. Not summarize it, not plot it. Look at it. "
    "Half the bugs in data work come from assuming a column holds what its name "
    "says it holds."
)

# ── Load data ────────────────────────────────────────────────────────────────
try:
    raw = load_raw_data()
except FileNotFoundError as exc:
    st.error(str(exc))
    st.stop()
except ValueError as exc:
    st.error(f"The file loaded, but it is not the weather events file we expected. {exc}")
    st.stop()

# ── 1.1 Reading the file ─────────────────────────────────────────────────────
st.header("1.1  Reading a Flat File -- `pd.read_csv`")
concept_box(
    "One Row, One Event",
    "Each row in this file is a single weather event reported by an airport station: "
    "its identifier, the event <b>type</b> (Snow, Rain, Fog...), a <b>severity</b> label, "
    "a start and end time in UTC, the station's time zone, and the station's location. "
    "Notice that station information repeats on every row that station reported. "
    "We will deal with that in Step 2."
)

code_example(
    f"""import pandas as pd

raw = pd.read_csv("{os.path.basename(DATA_PATH)}", dtype={{"ZipCode": str, "EventId": str}})
raw.head(10)
"""
)

n_rows = st.slider("Rows to preview", 5, 50, 10, key="raw_head")
st.dataframe(raw.head(n_rows), use_container_width=True)

warning_box(
    "We pass <code>dtype={\"ZipCode\": str}</code> on purpose. Left alone, pandas reads "
    "ZIP codes as integers and quietly drops the leading zero from every New England "
    "ZIP. 02134 becomes 2134, and there is no way to tell afterwards."
)

# ── 1.2 Shape & dtypes ───────────────────────────────────────────────────────
st.header("1.2  Shape & Data Types")

col1, col2 = st.columns(2)
with col1:
    st.subheader("Shape")
    st.write(f"Rows: **{raw.shape[0]:,}**  |  Columns: **{raw.shape[1]}**")
    st.write(f"Distinct stations: **{raw['AirportCode'].nunique():,}**")
    st.write(f"Distinct event IDs: **{raw['EventId'].nunique():,}**")

with col2:
    st.subheader("Data Types")
    dtype_df = pd.DataFrame({
        "Column": raw.dtypes.index,
        "Dtype": raw.dtypes.astype(str).values,
    })
    st.dataframe(dtype_df, use_container_width=True, hide_index=True)

insight_box(
    "Everything that isn't a number came in as `object` -- including the timestamps. "
    "As far as pandas is concerned, `StartTime(UTC)` is a column of strings that happen "
    "to look like dates. You cannot subtract strings, so until we fix this we cannot even "
    "ask how long an event lasted."
)

# ── 1.3 Categories hiding as strings ─────────────────────────────────────────
st.header("1.3  Categories Hiding as Strings")
cat_col = st.selectbox("Column", ["Type", "Severity", "TimeZone", "State"], key="raw_cat")
counts = raw[cat_col].value_counts(dropna=False).rename_axis(cat_col).reset_index(name="count")
st.dataframe(counts, use_container_width=True, hide_index=True)

if cat_col == "Severity":
    st.markdown(
        "Two of these values are not severities at all: `UNK` and `Other` are placeholders "
        "for *we don't know*. If we leave them in, every chart and every model will treat "
        "'unknown' as a fifth level of intensity, which is nonsense."
    )

# ── 1.4 Missing values ───────────────────────────────────────────────────────
st.header("1.4  Missing Values")
missing = raw.isnull().sum().reset_index()
missing.columns = ["Column", "Missing"]
missing["Percent"] = (missing["Missing"] / len(raw) * 100).round(2)
st.dataframe(missing, use_container_width=True, hide_index=True)

if missing["Missing"].sum() == 0:
    st.success("No missing cells in the raw file. Do not get used to this.")

optional = "present" if PRECIP_COL in raw.columns else "absent"
st.caption(f"All {len(RAW_REQUIRED_COLS)} required columns found; "
           f"optional `{PRECIP_COL}` column is {optional}.")

check_question(
    "Why does pandas read `StartTime(UTC)` as `object`?",
    [
        "Because the file is corrupted",
        "Because read_csv does not parse dates unless asked",
        "Because UTC timestamps cannot be stored in pandas",
        "Because the column has missing values",
    ],
    correct_idx=1,
    explanation="read_csv only converts columns to datetimes when you ask with parse_dates "
                "or convert them afterwards with pd.to_datetime, which is what Step 2 does.",
    key="step1_check",
)

# ── Summary ──────────────────────────────────────────────────────────────────
st.divider()
takeaways([
    "`pd.read_csv` gets you a DataFrame, not a clean one. Always check `dtypes`.",
    "Identifiers that look like numbers (ZIP codes, IDs) should be read as strings.",
    "Placeholder labels like `UNK` are missing values in disguise.",
    "Station attributes repeat on every event row, which hints that this file is really two tables.",
])

st.divider()
navigation(next_page="02_Cleaning_and_Normalizing.py")
