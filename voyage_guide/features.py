"""
features.py – Derived per-passenger attributes.

Title, family size, travelling-alone and cabin flags, plus age and fare bins.
All functions are pure: the same Passenger always yields the same
EngineeredPassenger.
"""
from __future__ import annotations

import math
import re
from dataclasses import asdict
from typing import Iterable, List, Optional

import pandas as pd

from voyage_guide.records import EngineeredPassenger, Passenger


UNKNOWN_TITLE = "Unknown"
UNKNOWN_AGE_BIN = "Unknown"

# (upper bound, label); first bound the value is strictly below wins.
AGE_BINS = [(12, "Child"), (18, "Teenager"), (35, "Young Adult"), (60, "Adult")]
AGE_BIN_OTHERWISE = "Elderly"
FARE_BINS = [(10, "Low"), (30, "Medium"), (100, "High")]
FARE_BIN_OTHERWISE = "Very High"

AGE_BIN_ORDER = [label for _, label in AGE_BINS] + [AGE_BIN_OTHERWISE, UNKNOWN_AGE_BIN]
FARE_BIN_ORDER = [label for _, label in FARE_BINS] + [FARE_BIN_OTHERWISE]

# "Braund, Mr. Owen Harris" -> "Mr."
_TITLE_PATTERN = re.compile(r",\s(.*?\.)")


def extract_title(name: Optional[str]) -> str:
    """Honorific between the first comma and the next period, period included."""
    match = _TITLE_PATTERN.search(name or "")
    return match.group(1) if match else UNKNOWN_TITLE


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def age_bin(age: Optional[float]) -> str:
    if _is_missing(age):
        return UNKNOWN_AGE_BIN
    for upper, label in AGE_BINS:
        if age < upper:
            return label
    return AGE_BIN_OTHERWISE


def fare_bin(fare: float) -> str:
    for upper, label in FARE_BINS:
        if fare < upper:
            return label
    return FARE_BIN_OTHERWISE


def engineer_passenger(passenger: Passenger) -> EngineeredPassenger:
    """Attach the derived attributes to one raw record."""
    raw = {name: value for name, value in asdict(passenger).items() if name in Passenger.__dataclass_fields__}
    family_size = passenger.sib_sp + passenger.parch + 1

    return EngineeredPassenger(
        **raw,
        title=extract_title(passenger.name),
        family_size=family_size,
        is_alone=family_size == 1,
        has_cabin=passenger.cabin is not None,
        age_bin=age_bin(passenger.age),
        fare_bin=fare_bin(passenger.fare),
    )


def engineer_features(passengers: Iterable[Passenger]) -> List[EngineeredPassenger]:
    return [engineer_passenger(p) for p in passengers]


# ── Distributions for the feature-engineering views ──────────

def title_counts(engineered: Iterable[EngineeredPassenger]) -> pd.Series:
    """Passengers per extracted title, most common first."""
    titles = pd.Series([p.title for p in engineered], dtype="object")
    return titles.value_counts().rename("count")


def family_size_counts(engineered: Iterable[EngineeredPassenger]) -> pd.Series:
    sizes = pd.Series([p.family_size for p in engineered], dtype="int64")
    return sizes.value_counts().sort_index().rename("count")


def age_bin_counts(engineered: Iterable[EngineeredPassenger]) -> pd.Series:
    bins = pd.Series([p.age_bin for p in engineered], dtype="object")
    return bins.value_counts().reindex(AGE_BIN_ORDER, fill_value=0).rename("count")


def fare_bin_counts(engineered: Iterable[EngineeredPassenger]) -> pd.Series:
    bins = pd.Series([p.fare_bin for p in engineered], dtype="object")
    return bins.value_counts().reindex(FARE_BIN_ORDER, fill_value=0).rename("count")
