"""Step 4: Hypothesis Testing -- sample mean/std, z-scores, normal tail probabilities."""
import streamlit as st
import pandas as pd

from weatherevents.data_loader import load_data, sidebar_filters
from weatherevents.plotting import normal_curve_overlay
from weatherevents.stats_helpers import (
    sample_mean_std, z_score, normal_tail_probability, empirical_tail_fraction,
    z_test_mean, critical_value,
)
from weatherevents.ui_components import (
    step_header, concept_box, formula_box, insight_box, warning_box,
    code_example, check_question, takeaways, navigation,
)

step_header(4, "How surprised should we be by a long event?")

try:
    events, _ = load_data()
except (FileNotFoundError, ValueError) as exc:
    st.error(str(exc))
    st.stop()

fev = sidebar_filters(events)

# ---------------------------------------------------------------------------
# 4.1 Sample moments
# ---------------------------------------------------------------------------
st.header("4.1  Mean and Standard Deviation")
types = [t for t in fev["Type"].cat.categories if (fev["Type"] == t).any()]
if not types:
    st.warning("No events match the current filters. Widen them in the sidebar.")
    st.stop()

event_type = st.selectbox("Event type", types, index=types.index("Snow") if "Snow" in types else 0,
                          key="ht_type")
sample = fev.loc[fev["Type"] == event_type, "DurationHours"].dropna()

if len(sample) < 2:
    st.warning(f"Only {len(sample)} {event_type} event(s) with a valid duration. Pick another type.")
    st.stop()

mean, std, n = sample_mean_std(sample)
if not std > 0:
    st.warning(f"Every {event_type} event has the same duration, so there is nothing to standardize.")
    st.stop()

m1, m2, m3 = st.columns(3)
m1.metric("n", f"{n:,}")
m2.metric("Sample mean", f"{mean:.2f} h")
m3.metric("Sample std", f"{std:.2f} h")

formula_box(
    "Sample standard deviation",
    r"s = \sqrt{\frac{1}{n-1}\sum_{i=1}^{n}(x_i - \bar{x})^2}",
    "pandas' .std() divides by n - 1 by default; numpy's np.std divides by n. "
    "With thousands of events the difference is invisible, with ten it is not.",
)

# ---------------------------------------------------------------------------
# 4.2 Tail probability
# ---------------------------------------------------------------------------
st.header("4.2  A z-Based Tail Probability")
concept_box(
    "The Normal Approximation",
    "Suppose durations were normally distributed with the mean and standard deviation we just "
    "computed. Then the chance that an event lasts longer than some threshold is the area under "
    "the bell curve to the right of it. Standardize the threshold into a <b>z-score</b>, look up "
    "the upper tail of the standard normal, done."
)

formula_box(
    "Upper tail probability",
    r"z = \frac{x - \bar{x}}{s}, \qquad P(X > x) \approx 1 - \Phi(z)",
)

default_threshold = float(round(mean + 2 * std, 1))
threshold = st.number_input("Threshold (hours)", min_value=0.0, value=default_threshold,
                            step=0.5, key="ht_threshold")

z = z_score(threshold, mean, std)
p_normal = normal_tail_probability(threshold, mean, std, tail="upper")
p_observed = empirical_tail_fraction(sample, threshold, tail="upper")

c1, c2, c3 = st.columns(3)
c1.metric("z-score", f"{z:.2f}")
c2.metric("Normal approximation", f"{p_normal:.2%}")
c3.metric("Observed fraction", f"{p_observed:.2%}")

fig = normal_curve_overlay(sample[sample <= sample.quantile(0.99)], mean, std, threshold=threshold,
                           title=f"{event_type} Durations vs the Normal Approximation")
st.plotly_chart(fig, use_container_width=True)

warning_box(
    "Compare the two probabilities. Durations are skewed to the right, so the normal curve "
    "puts probability on <i>negative</i> durations and gets the upper tail wrong. The "
    "arithmetic is easy; deciding whether the approximation is any good is the actual job."
)

code_example(
    """from scipy import stats

mean, std = snow["DurationHours"].mean(), snow["DurationHours"].std()
z = (threshold - mean) / std
p = stats.norm.sf(z)          # 1 - CDF, the upper tail
observed = (snow["DurationHours"] > threshold).mean()
"""
)

# ---------------------------------------------------------------------------
# 4.3 Testing the mean
# ---------------------------------------------------------------------------
st.header("4.3  Is the Mean Duration Longer Than a Benchmark?")
st.markdown(
    "The tail probability is about single events. A hypothesis test is about the **mean**. "
    "The question: do events of this type last longer, on average, than a benchmark? "
    "By default the benchmark is the mean duration of all the other event types."
)

others = fev.loc[fev["Type"] != event_type, "DurationHours"].dropna()
benchmark_default = float(round(others.mean(), 2)) if len(others) else float(round(mean, 2))
mu0 = st.number_input("Benchmark mean under H0 (hours)", min_value=0.0, value=benchmark_default,
                      step=0.1, key="ht_mu0")
alternative = st.radio("Alternative hypothesis", ["greater", "less", "two-sided"],
                       horizontal=True, key="ht_alt")
alpha = st.select_slider("Significance level (alpha)", options=[0.01, 0.05, 0.10], value=0.05,
                         key="ht_alpha")

formula_box(
    "One-sample z statistic",
    r"z = \frac{\bar{x} - \mu_0}{s / \sqrt{n}}",
    "The standard error s/sqrt(n) shrinks as n grows, which is why large samples make small "
    "differences significant.",
)

try:
    result = z_test_mean(sample, mu0, alternative=alternative)
except ValueError as exc:
    st.error(str(exc))
    st.stop()

r1, r2, r3, r4 = st.columns(4)
r1.metric("Standard error", f"{result['se']:.3f} h")
r2.metric("z", f"{result['z']:.2f}")
r3.metric("p-value", f"{result['p_value']:.2e}")
r4.metric("Critical z", f"{critical_value(alpha, alternative):.2f}")

if result["p_value"] < alpha:
    st.success(
        f"Reject H0 at alpha = {alpha}. The mean {event_type} duration ({result['mean']:.2f} h) "
        f"is inconsistent with a true mean of {mu0:.2f} h."
    )
else:
    st.info(
        f"Fail to reject H0 at alpha = {alpha}. A mean of {result['mean']:.2f} h is plausible "
        f"if the true mean were {mu0:.2f} h."
    )

insight_box(
    "The skewed durations that broke the tail approximation matter much less here. The "
    "central limit theorem is about the distribution of the <i>mean</i>, and with hundreds "
    "of events the sample mean is close to normal even when single durations are not."
)

summary = pd.DataFrame({
    "quantity": ["mean", "std", "n", "z (tail)", "P(X > threshold), normal", "P(X > threshold), observed",
                 "z (mean test)", "p-value"],
    "value": [mean, std, n, z, p_normal, p_observed, result["z"], result["p_value"]],
})
with st.expander("All numbers on this page"):
    st.dataframe(summary, use_container_width=True, hide_index=True)

check_question(
    "The z-based tail probability and the observed fraction disagree. What is the most likely cause?",
    [
        "The sample standard deviation used n instead of n - 1",
        "Event durations are not normally distributed",
        "The threshold is too small",
        "There are too many events",
    ],
    correct_idx=1,
    explanation="The approximation is only as good as the assumption that durations follow a bell curve. "
                "A long right tail breaks it.",
    key="step4_check",
)

st.divider()
takeaways([
    "`.mean()` and `.std()` give the sample moments; `.std()` uses n - 1.",
    "A z-score standardizes a value; `scipy.stats.norm.sf(z)` gives the upper tail.",
    "Always compare a normal-approximation probability with the observed fraction.",
    "A one-sample z-test asks about the mean, and benefits from the central limit theorem.",
])

st.divider()
navigation(prev_page="03_Exploring_Events.py", next_page="05_Predicting_Severity.py")
