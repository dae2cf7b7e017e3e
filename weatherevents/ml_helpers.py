"""Classification wrappers: categorical encoding, random forest, confusion-matrix rates."""
import numpy as np
import pandas as pd
import streamlit as st
from sklearn.ensemble import RandomForestClassifier
from sklearn.metrics import accuracy_score, classification_report, confusion_matrix
from sklearn.model_selection import train_test_split
from sklearn.preprocessing import LabelEncoder


def prepare_classification_data(df, features, target, test_size=0.2, seed=42):
    """One-hot encode categorical features, label-encode the target, stratified split."""
    clean = df[features + [target]].dropna()
    X = pd.get_dummies(clean[features].astype(str), prefix_sep="=", dtype=int)

    le = LabelEncoder()
    y_labels = clean[target]
    if isinstance(y_labels.dtype, pd.CategoricalDtype) and y_labels.cat.ordered:
        # keep the natural order of the classes instead of alphabetical
        present = [c for c in y_labels.cat.categories if c in set(y_labels)]
        le.classes_ = np.array(present, dtype=object)
        y = le.transform(y_labels.astype(object))
    else:
        y = le.fit_transform(y_labels)

    X_train, X_test, y_train, y_test = train_test_split(
        X, y, test_size=test_size, random_state=seed, stratify=y
    )
    return X_train, X_test, y_train, y_test, le


def train_random_forest(X_train, y_train, **kwargs):
    """Fit an out-of-the-box random forest."""
    kwargs.setdefault("random_state", 42)
    model = RandomForestClassifier(**kwargs)
    model.fit(X_train, y_train)
    return model


@st.cache_resource
def train_model(X_train, y_train, **kwargs):
    """Train and cache the random forest across reruns of a page."""
    return train_random_forest(X_train, y_train, **kwargs)


def classification_metrics(y_true, y_pred, labels=None):
    """Compute classification metrics."""
    n_classes = len(labels) if labels is not None else None
    label_ids = list(range(n_classes)) if n_classes else None
    acc = accuracy_score(y_true, y_pred)
    report = classification_report(y_true, y_pred, labels=label_ids, target_names=labels,
                                   output_dict=True, zero_division=0)
    cm = confusion_matrix(y_true, y_pred, labels=label_ids)
    return {"accuracy": acc, "report": report, "confusion_matrix": cm}


def _ratio(num, den):
    return num / den if den else np.nan


def rate_table(cm, labels):
    """Per-class one-vs-rest counts and rates derived from a confusion matrix.

    Rows of ``cm`` are actual classes, columns are predicted classes.
    """
    cm = np.asarray(cm)
    total = cm.sum()
    rows = []
    for i, label in enumerate(labels):
        tp = cm[i, i]
        fn = cm[i, :].sum() - tp
        fp = cm[:, i].sum() - tp
        tn = total - tp - fn - fp
        rows.append({
            "class": label,
            "TP": int(tp), "FP": int(fp), "FN": int(fn), "TN": int(tn),
            "TPR": _ratio(tp, tp + fn),
            "FPR": _ratio(fp, fp + tn),
            "FNR": _ratio(fn, tp + fn),
            "TNR": _ratio(tn, tn + fp),
            "precision": _ratio(tp, tp + fp),
        })
    return pd.DataFrame(rows).set_index("class")


def feature_importance(model, columns, prefix_sep="="):
    """Sum one-hot importances back onto the originating categorical feature."""
    imp = pd.Series(model.feature_importances_, index=list(columns))
    groups = imp.index.str.split(prefix_sep, n=1).str[0]
    return imp.groupby(groups).sum().sort_values(ascending=False)


def plot_confusion_matrix(cm, labels):
    """Return a Plotly heatmap of a confusion matrix."""
    import plotly.graph_objects as go
    fig = go.Figure(data=go.Heatmap(
        z=cm, x=labels, y=labels,
        colorscale="Blues", text=cm, texttemplate="%{text}",
    ))
    fig.update_layout(
        xaxis_title="Predicted", yaxis_title="Actual",
        title="Confusion Matrix", height=500,
        template="plotly_white",
    )
    fig.update_yaxes(autorange="reversed")
    return fig
