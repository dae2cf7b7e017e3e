"""Shared Plotly plotting helpers."""
import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from scipy import stats

from weatherevents.constants import COLUMN_LABELS, SEVERITY_COLORS, TYPE_COLORS


def apply_common_layout(fig, title=None, height=500):
    """Apply common layout settings to a Plotly figure."""
    fig.update_layout(
        template="plotly_white",
        height=height,
        title=title,
        title_x=0.5,
        margin=dict(t=60, b=40, l=60, r=40),
    )
    return fig


def color_map(column="Type"):
    """Return the discrete color map for a categorical column."""
    return SEVERITY_COLORS if column == "Severity" else TYPE_COLORS


def _labels(labels):
    lab = {**(labels or {})}
    for k, v in COLUMN_LABELS.items():
        lab.setdefault(k, v)
    return lab


def count_bar(df, column, order=None, title=None, height=450, horizontal=False, top_n=None):
    """Bar chart of value counts for one categorical column."""
    counts = df[column].value_counts(dropna=False)
    counts.index = counts.index.astype(object).where(counts.index.notna(), "Unknown")
    if order is not None:
        counts = counts.reindex([o for o in order if o in counts.index] +
                                [i for i in counts.index if i not in order])
    if top_n is not None:
        counts = counts.sort_values(ascending=False).head(top_n)
    data = counts.rename_axis(column).reset_index(name="count")
    if horizontal:
        fig = px.bar(data, x="count", y=column, orientation="h", color=column,
                     color_discrete_map=color_map(column), labels=_labels(None))
        fig.update_yaxes(autorange="reversed")
    else:
        fig = px.bar(data, x=column, y="count", color=column,
                     color_discrete_map=color_map(column), labels=_labels(None))
    fig.update_layout(showlegend=False)
    return apply_common_layout(fig, title, height)


def bar_chart(df, x, color, title=None, barmode="stack", normalize=False, height=500):
    """Grouped or stacked bar chart of event counts for x broken down by color."""
    counts = (
        df.groupby([x, color], observed=True)
        .size()
        .reset_index(name="count")
    )
    y = "count"
    if normalize:
        counts["share"] = counts["count"] / counts.groupby(x, observed=True)["count"].transform("sum")
        y = "share"
    fig = px.bar(counts, x=x, y=y, color=color, barmode=barmode,
                 color_discrete_map=color_map(color), labels=_labels({"share": "Share of events"}))
    return apply_common_layout(fig, title, height)


def histogram_chart(df, x, color=None, title=None, nbins=50, labels=None, height=500, log_y=False):
    """Histogram of a numeric column, optionally split by a category."""
    fig = px.histogram(df, x=x, color=color, color_discrete_map=color_map(color or "Type"),
                       nbins=nbins, labels=_labels(labels), title=title, barmode="overlay",
                       opacity=0.7, log_y=log_y)
    return apply_common_layout(fig, title, height)


def normal_curve_overlay(values, mean, std, threshold=None, title=None, nbins=60, height=450):
    """Density histogram with the fitted normal curve and the upper tail shaded."""
    values = pd.Series(values).dropna()
    fig = go.Figure()
    fig.add_trace(go.Histogram(
        x=values, histnorm="probability density", nbinsx=nbins,
        name="Observed", marker_color="#5DADE2", opacity=0.6,
    ))
    lo = min(values.min(), mean - 4 * std)
    hi = max(values.max(), mean + 4 * std)
    xs = np.linspace(lo, hi, 400)
    fig.add_trace(go.Scatter(
        x=xs, y=stats.norm.pdf(xs, mean, std), mode="lines",
        name="Normal approximation", line=dict(color="#1B4F72", width=2),
    ))
    if threshold is not None:
        tail_x = xs[xs >= threshold]
        fig.add_trace(go.Scatter(
            x=tail_x, y=stats.norm.pdf(tail_x, mean, std), mode="lines",
            fill="tozeroy", name=f"Tail beyond {threshold:g}",
            line=dict(color="#C0392B", width=0), fillcolor="rgba(192, 57, 43, 0.35)",
        ))
        fig.add_vline(x=threshold, line_dash="dash", line_color="#C0392B")
    fig.update_layout(barmode="overlay")
    return apply_common_layout(fig, title, height)
