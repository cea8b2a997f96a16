"""
app/streamlit_app.py

Purpose
-------
A Streamlit dashboard that walks through the passenger dataset:
  - overview and exploration (statistics, missing values, survival breakdowns)
  - feature engineering (derived attributes and their distributions)
  - model results (both fixed predictors scored against the dataset)
  - a "what if" form that predicts survival for a made-up passenger

All computation lives in the voyage_guide package; this file only renders.
"""

import logging
import math

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from voyage_guide.data_dictionary import CLASS_NAMES, DATA_DICTIONARY, PORT_NAMES
from voyage_guide.encoding import encode_frame
from voyage_guide.evaluate import evaluate_models, metrics_table
from voyage_guide.features import (
    age_bin_counts,
    engineer_features,
    family_size_counts,
    fare_bin_counts,
    title_counts,
)
from voyage_guide.inference import (
    LINEAR_MODEL,
    MODELS,
    TREE_MODEL,
    build_hypothetical_passenger,
    predict_passenger,
)
from voyage_guide.make_synthetic_data import load_dataset
from voyage_guide.records import passengers_to_frame
from voyage_guide.statistics import (
    basic_stats,
    missing_values,
    survival_by_category,
    survival_table,
)


logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------
# Streamlit page configuration
# ---------------------------------------------------------------------
st.set_page_config(
    page_title="Titanic Voyage Guide",
    layout="wide",
)
st.title("🚢 Titanic Voyage Guide")


# ---------------------------------------------------------------------
# Caching helpers
# ---------------------------------------------------------------------
# The snapshot is created once per process and shared by every rerun;
# everything derived from it is cheap enough to recompute on each render.

@st.cache_resource(show_spinner="Loading passenger data …")
def get_snapshot():
    return load_dataset()


def fmt_pct(value: float) -> str:
    """Ratio (0-1) as a percentage; NaN ratios are shown as n/a."""
    return "n/a" if value is None or math.isnan(value) else f"{value * 100:.1f}%"


def bar_chart(series: pd.Series, title: str, xlabel: str, ylabel: str = "count"):
    fig = plt.figure()
    plt.bar([str(i) for i in series.index], series.values)
    plt.title(title)
    plt.xlabel(xlabel)
    plt.ylabel(ylabel)
    plt.xticks(rotation=30)
    st.pyplot(fig)
    plt.close(fig)


# ---------------------------------------------------------------------
# Load dataset (fail fast with a useful message)
# ---------------------------------------------------------------------
try:
    snapshot = get_snapshot()
except Exception as e:
    st.warning("Failed to load Titanic dataset.")
    st.code(str(e))
    st.stop()

passengers = snapshot.passengers


# ---------------------------------------------------------------------
# Sidebar navigation
# ---------------------------------------------------------------------
st.sidebar.header("Navigation")
page = st.sidebar.radio(
    "Go to",
    ("Overview", "Explore Data", "Feature Engineering", "Model Results", "Prediction"),
)


# ---------------------------------------------------------------------
# Overview
# ---------------------------------------------------------------------
if page == "Overview":
    stats = basic_stats(passengers)
    if stats is None:
        st.info("No passengers available.")
        st.stop()

    c1, c2, c3 = st.columns(3)
    c1.metric("Passengers", stats.total_passengers)
    c2.metric("Survival rate", f"{stats.survival_rate:.1f}%")
    avg_age = stats.age.average
    c3.metric("Average age", "n/a" if avg_age is None else f"{avg_age:.1f}")

    st.subheader("Data dictionary")
    st.table(pd.Series(DATA_DICTIONARY, name="description"))


# ---------------------------------------------------------------------
# Explore Data
# ---------------------------------------------------------------------
elif page == "Explore Data":
    stats = basic_stats(passengers)
    missing = missing_values(passengers)
    breakdown = survival_by_category(passengers)
    if stats is None:
        st.info("No passengers available.")
        st.stop()

    st.subheader("Dataset summary")
    col1, col2 = st.columns(2)
    with col1:
        st.write(f"**Total passengers:** {stats.total_passengers}")
        st.write(f"**Survived:** {stats.survived_count} ({stats.survival_rate:.1f}%)")
        if stats.age.average is not None:
            st.write(
                f"**Age:** average {stats.age.average:.1f} years, "
                f"range {stats.age.minimum:.0f}–{stats.age.maximum:.0f}, "
                f"{stats.age.missing} unknown"
            )
        else:
            st.write(f"**Age:** unknown for all {stats.age.missing} passengers")
    with col2:
        st.write("**Missing values**")
        st.table(pd.Series(missing, name="missing"))

    st.subheader("First passengers")
    st.dataframe(passengers_to_frame(snapshot.head(5)), use_container_width=True)

    col1, col2, col3 = st.columns(3)
    with col1:
        counts = pd.Series({CLASS_NAMES.get(k, k): v for k, v in stats.class_counts.items()})
        bar_chart(counts, "Passenger class", "class")
    with col2:
        bar_chart(pd.Series(stats.sex_counts), "Sex", "sex")
    with col3:
        counts = pd.Series({PORT_NAMES.get(k, k): v for k, v in stats.embarked_counts.items()})
        bar_chart(counts, "Port of embarkation", "port")

    st.subheader("Survival by category")
    col1, col2, col3 = st.columns(3)
    col1.write("By class")
    col1.dataframe(survival_table(breakdown.by_class))
    col2.write("By sex")
    col2.dataframe(survival_table(breakdown.by_sex))
    col3.write("By port")
    col3.dataframe(survival_table(breakdown.by_embarked))


# ---------------------------------------------------------------------
# Feature Engineering
# ---------------------------------------------------------------------
elif page == "Feature Engineering":
    engineered = engineer_features(passengers)

    st.subheader("Engineered passengers")
    st.dataframe(passengers_to_frame(engineered[:5]), use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        bar_chart(title_counts(engineered).head(8), "Titles", "title")
        bar_chart(age_bin_counts(engineered), "Age groups", "age bin")
    with col2:
        bar_chart(family_size_counts(engineered), "Family size", "family size")
        bar_chart(fare_bin_counts(engineered), "Fare groups", "fare bin")

    st.subheader("Model features (first 5 passengers)")
    st.dataframe(encode_frame(engineered[:5]), use_container_width=True)


# ---------------------------------------------------------------------
# Model Results
# ---------------------------------------------------------------------
elif page == "Model Results":
    results = evaluate_models(engineer_features(passengers))
    table = metrics_table(results)

    st.subheader("Model comparison")
    st.dataframe(table.apply(lambda col: col.map(fmt_pct)), use_container_width=True)

    fig = plt.figure()
    table.plot.bar(ax=plt.gca())
    plt.title("Metrics by model")
    plt.ylim(0, 1)
    st.pyplot(fig)
    plt.close(fig)

    col1, col2 = st.columns(2)
    with col1:
        st.subheader(f"{LINEAR_MODEL.name} coefficients")
        st.dataframe(LINEAR_MODEL.coefficient_table(), use_container_width=True)
    with col2:
        st.subheader(f"{TREE_MODEL.name} feature importance")
        importances = pd.Series(TREE_MODEL.feature_importances).sort_values(ascending=False)
        bar_chart(importances, "Feature importance", "feature", ylabel="importance")


# ---------------------------------------------------------------------
# Prediction
# ---------------------------------------------------------------------
elif page == "Prediction":
    st.subheader("Would you have survived?")

    col1, col2, col3 = st.columns(3)
    with col1:
        pclass = st.selectbox("Passenger class", [1, 2, 3], index=2)
        sex = st.selectbox("Sex", ["male", "female"])
        age = st.slider("Age", 0, 80, 30)
    with col2:
        sib_sp = st.number_input("Siblings / spouses aboard", min_value=0, max_value=10, value=0)
        parch = st.number_input("Parents / children aboard", min_value=0, max_value=10, value=0)
        fare = st.number_input("Fare", min_value=0.0, max_value=600.0, value=15.0)
    with col3:
        embarked = st.selectbox("Port of embarkation", ["S", "C", "Q"])
        title = st.selectbox(
            "Title", ["Mr.", "Mrs.", "Miss.", "Master.", "Dr.", "Rev.", "Col.", "Countess."]
        )
        cabin = st.text_input("Cabin (leave blank if none)", value="")

    if st.button("Predict 🔮", use_container_width=True):
        try:
            passenger = build_hypothetical_passenger(
                pclass=pclass,
                sex=sex,
                age=age,
                sib_sp=int(sib_sp),
                parch=int(parch),
                fare=float(fare),
                cabin=cabin.strip() or None,
                embarked=embarked,
                title=title,
            )
            summary = predict_passenger(passenger)
        except Exception:
            logger.exception("Prediction failed")
            st.error("There was a problem generating your prediction.")
        else:
            st.markdown("---")
            cols = st.columns(len(MODELS) + 1)
            for col, (key, model) in zip(cols, MODELS.items()):
                outcome = "Survived" if summary.predictions[key] == 1 else "Did not survive"
                col.metric(model.name, outcome)
            cols[-1].metric("Survival chance", summary.survival_chance)
