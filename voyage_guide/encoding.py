"""
voyage_guide/encoding.py

Turns an EngineeredPassenger into the fixed-shape numeric vector the two
predictors consume.

Missing values never raise. They are replaced by the defaults below:
  - age       -> DEFAULT_AGE (dataset median)
  - embarked  -> DEFAULT_EMBARKED (most frequent port in the seed records)
  - title     -> grouped as "Rare"
"""

from __future__ import annotations

import math
from dataclasses import astuple, dataclass
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from voyage_guide.records import EngineeredPassenger


DEFAULT_AGE = 29.7
DEFAULT_EMBARKED = "S"
EMBARKED_PORTS = ("C", "Q", "S")

RARE_TITLE_GROUP = "Rare"
TITLE_GROUPS: Dict[str, frozenset] = {
    "Mr": frozenset({"Mr.", "Don.", "Rev.", "Major.", "Col.", "Capt."}),
    "Mrs": frozenset({"Mrs.", "Mme.", "Countess."}),
    "Miss": frozenset({"Miss.", "Mlle.", "Ms."}),
    "Master": frozenset({"Master."}),
}
TITLE_GROUP_NAMES = ("Master", "Miss", "Mr", "Mrs", RARE_TITLE_GROUP)

FEATURE_COLUMNS = [
    "Pclass",
    "Sex",
    "Age",
    "Fare",
    "Embarked_C",
    "Embarked_Q",
    "Embarked_S",
    "Title_Master",
    "Title_Miss",
    "Title_Mr",
    "Title_Mrs",
    "Title_Rare",
    "FamilySize",
    "IsAlone",
    "HasCabin",
]


@dataclass(frozen=True)
class ModelFeatureVector:
    """Numeric model input. Field order matches FEATURE_COLUMNS."""
    pclass: int
    sex: int
    age: float
    fare: float
    embarked_c: int
    embarked_q: int
    embarked_s: int
    title_master: int
    title_miss: int
    title_mr: int
    title_mrs: int
    title_rare: int
    family_size: int
    is_alone: int
    has_cabin: int

    def as_dict(self) -> Dict[str, float]:
        return dict(zip(FEATURE_COLUMNS, astuple(self)))

    def to_array(self) -> np.ndarray:
        return np.array(astuple(self), dtype=float)


def group_title(title: Optional[str]) -> str:
    """Collapse an extracted title into one of the five model title groups."""
    for group, members in TITLE_GROUPS.items():
        if title in members:
            return group
    return RARE_TITLE_GROUP


def _impute_age(age: Optional[float]) -> float:
    if age is None or (isinstance(age, float) and math.isnan(age)):
        return DEFAULT_AGE
    return age


def encode_features(passenger: EngineeredPassenger) -> ModelFeatureVector:
    """
    Encode one passenger.

    Binary encoding for sex ("male" -> 0, anything else -> 1) and the two
    flags, one-hot encoding for port and title group.
    """
    port = passenger.embarked or DEFAULT_EMBARKED
    title_group = group_title(passenger.title)

    return ModelFeatureVector(
        pclass=passenger.pclass,
        sex=0 if passenger.sex == "male" else 1,
        age=_impute_age(passenger.age),
        fare=passenger.fare,
        embarked_c=int(port == "C"),
        embarked_q=int(port == "Q"),
        embarked_s=int(port == "S"),
        title_master=int(title_group == "Master"),
        title_miss=int(title_group == "Miss"),
        title_mr=int(title_group == "Mr"),
        title_mrs=int(title_group == "Mrs"),
        title_rare=int(title_group == RARE_TITLE_GROUP),
        family_size=passenger.family_size or 1,
        is_alone=int(bool(passenger.is_alone)),
        has_cabin=int(bool(passenger.has_cabin)),
    )


def encode_frame(engineered: Iterable[EngineeredPassenger]) -> pd.DataFrame:
    """Encoded vectors as a DataFrame (one row per passenger, indexed by PassengerId)."""
    engineered = list(engineered)
    rows = [encode_features(p).as_dict() for p in engineered]
    index = pd.Index([p.passenger_id for p in engineered], name="PassengerId")
    return pd.DataFrame(rows, index=index, columns=FEATURE_COLUMNS)
