"""Step 5: Predicting Severity -- random forest on categorical features, confusion-matrix rates."""
import streamlit as st
import numpy as np
import plotly.express as px

from weatherevents.data_loader import load_data, join_stations, station_key_is_unique
from weatherevents.ml_helpers import (
    prepare_classification_data, train_model, classification_metrics,
    rate_table, feature_importance, plot_confusion_matrix,
)
from weatherevents.plotting import apply_common_layout
from weatherevents.constants import MODEL_FEATURES, MODEL_TARGET
from weatherevents.ui_components import (
    step_header, concept_box, formula_box, insight_box, warning_box,
    code_example, check_question, takeaways, navigation,
)

step_header(5, "Four categorical features, one forest, and a careful look at its mistakes.")

try:
    events, stations = load_data()
except (FileNotFoundError, ValueError) as exc:
    st.error(str(exc))
    st.stop()

if not station_key_is_unique(stations):
    st.error("The station table has repeated airport codes; fix that in Step 2 before modelling.")
    st.stop()

data = join_stations(events, stations)

# ── 5.1 Setup ────────────────────────────────────────────────────────────────
st.header("5.1  The Question")
concept_box(
    "Can We Guess Severity Without Measuring Anything?",
    "Our features are all categorical: the event <b>Type</b>, the station's <b>TimeZone</b> and "
    "<b>State</b>, and the <b>Season</b> the event started in. None of them measures intensity. "
    "If a model can still predict severity from them, it is picking up on where and when certain "
    "kinds of severe weather tend to happen. Rows with unknown severity are left out; we cannot "
    "grade predictions against an answer we do not have."
)

st.write("Features: " + ", ".join(f"`{f}`" for f in MODEL_FEATURES) + f"  |  Target: `{MODEL_TARGET}`")

test_size = st.slider("Test set fraction", 0.1, 0.5, 0.25, 0.05, key="rf_test")
n_estimators = st.slider("Number of trees", 10, 300, 100, 10, key="rf_trees")

labelled = data.dropna(subset=MODEL_FEATURES + [MODEL_TARGET])
if labelled[MODEL_TARGET].nunique() < 2:
    st.warning("Fewer than two severity levels in the data; there is nothing to classify.")
    st.stop()

try:
    X_train, X_test, y_train, y_test, le = prepare_classification_data(
        labelled, MODEL_FEATURES, MODEL_TARGET, test_size=test_size, seed=42
    )
except ValueError as exc:
    # stratified split fails when a class has a single member
    st.error(f"Could not split the data: {exc}")
    st.stop()

labels = le.classes_.tolist()
st.caption(
    f"{len(labelled):,} labelled events, one-hot encoded into {X_train.shape[1]} indicator columns; "
    f"{len(X_train):,} for training, {len(X_test):,} for testing."
)

code_example(
    """X = pd.get_dummies(df[["Type", "TimeZone", "State", "Season"]].astype(str))
y = df["Severity"]
X_train, X_test, y_train, y_test = train_test_split(X, y, test_size=0.25, stratify=y, random_state=42)

model = RandomForestClassifier(n_estimators=100, random_state=42)
model.fit(X_train, y_train)
"""
)

model = train_model(X_train, y_train, n_estimators=n_estimators, random_state=42, n_jobs=-1)
y_pred = model.predict(X_test)
metrics = classification_metrics(y_test, y_pred, labels=labels)

# ── 5.2 Accuracy and the baseline ────────────────────────────────────────────
st.header("5.2  Accuracy, and Why It Is Not Enough")
baseline = (y_test == np.bincount(y_train).argmax()).mean()
a1, a2 = st.columns(2)
a1.metric("Test accuracy", f"{metrics['accuracy']:.1%}")
a2.metric("Always predict the most common class", f"{baseline:.1%}",
          delta=f"{metrics['accuracy'] - baseline:+.1%} for the forest", delta_color="off")

warning_box(
    "Severity is imbalanced: most events are Light or Moderate. A model that always says "
    "'Light' can look respectable on accuracy alone while never catching a single Severe "
    "event. The confusion matrix is where that gets exposed."
)

# ── 5.3 Confusion matrix ─────────────────────────────────────────────────────
st.header("5.3  The Confusion Matrix")
st.plotly_chart(plot_confusion_matrix(metrics["confusion_matrix"], labels), use_container_width=True)

# ── 5.4 Rate table ───────────────────────────────────────────────────────────
st.header("5.4  Rates per Severity Level")
formula_box(
    "One-vs-rest rates",
    r"\text{TPR} = \frac{TP}{TP + FN}, \quad \text{FPR} = \frac{FP}{FP + TN}, \quad "
    r"\text{Precision} = \frac{TP}{TP + FP}",
    "Treat each severity level as the positive class in turn and everything else as negative. "
    "TPR is also called recall or sensitivity.",
)

rates = rate_table(metrics["confusion_matrix"], labels)
st.dataframe(
    rates.style.format({c: "{:.1%}" for c in ["TPR", "FPR", "FNR", "TNR", "precision"]}, na_rep="--"),
    use_container_width=True,
)

if rates["TPR"].notna().any():
    worst = rates["TPR"].idxmin()
    insight_box(
        f"The forest recovers **{rates.loc[worst, 'TPR']:.1%}** of actual **{worst}** events, its weakest "
        "level. Rare classes get few leaves of their own, so the majority vote drifts toward the "
        "common ones. Read down the TPR column before quoting the accuracy."
    )

# ── 5.5 Which features matter? ───────────────────────────────────────────────
st.header("5.5  Which Features Carry the Signal?")
imp = feature_importance(model, X_train.columns)
fig = px.bar(imp.rename_axis("feature").reset_index(name="importance"),
             x="importance", y="feature", orientation="h")
fig.update_yaxes(autorange="reversed")
apply_common_layout(fig, title="Importance Summed over One-Hot Columns", height=350)
st.plotly_chart(fig, use_container_width=True)

st.caption(
    "Impurity-based importance favours features with many levels, and State has about fifty. "
    "Treat this as a rough ranking."
)

check_question(
    "A class has TPR = 20% and precision = 80%. What does that mean?",
    [
        "The model predicts this class often and is usually wrong",
        "The model rarely predicts this class, but is usually right when it does",
        "The model is 80% accurate overall",
        "The class is 20% of the data",
    ],
    correct_idx=1,
    explanation="Low recall means most real members are missed; high precision means the few "
                "predictions made for the class are trustworthy.",
    key="step5_check",
)

st.divider()
takeaways([
    "Categorical predictors need encoding; `pd.get_dummies` gives one indicator column per level.",
    "An out-of-the-box `RandomForestClassifier` is a reasonable first model with no tuning.",
    "Always compare accuracy with the majority-class baseline.",
    "Per-class TPR, FPR and precision from the confusion matrix show what accuracy hides.",
])

st.divider()
navigation(prev_page="04_Hypothesis_Testing.py")
