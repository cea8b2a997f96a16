"""
statistics.py – Descriptive statistics for the data explorer.

Every function takes the passenger collection explicitly, recomputes from
scratch and returns None for an empty collection instead of dividing by zero.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, Optional, Sequence

import pandas as pd

from voyage_guide.records import Passenger, passengers_to_frame


CLASSES = (1, 2, 3)
SEXES = ("male", "female")
PORTS = ("C", "S", "Q")
UNKNOWN_PORT = "Unknown"


@dataclass(frozen=True)
class AgeStats:
    average: Optional[float]
    minimum: Optional[float]
    maximum: Optional[float]
    missing: int


@dataclass(frozen=True)
class BasicStats:
    total_passengers: int
    survived_count: int
    survival_rate: float  # percentage, 0-100
    age: AgeStats
    class_counts: Dict[int, int]
    sex_counts: Dict[str, int]
    embarked_counts: Dict[str, int]


@dataclass(frozen=True)
class GroupSurvival:
    total: int
    survived: int

    @property
    def rate(self) -> float:
        """Share of the group that survived (NaN for an empty group)."""
        return self.survived / self.total if self.total else float("nan")


@dataclass(frozen=True)
class SurvivalBreakdown:
    by_class: Dict[int, GroupSurvival]
    by_sex: Dict[str, GroupSurvival]
    by_embarked: Dict[str, GroupSurvival]


def _category_counts(series: pd.Series, known: Iterable[Hashable]) -> Dict[Any, int]:
    """Counts for the known categories (zeros kept), then any unexpected values."""
    vc = series.value_counts(dropna=False)
    counts = {k: int(vc.get(k, 0)) for k in known}
    for key, n in vc.items():
        if key not in counts:
            counts[key] = int(n)
    return counts


def _age_stats(ages: pd.Series) -> AgeStats:
    known = ages.dropna()
    if known.empty:
        return AgeStats(average=None, minimum=None, maximum=None, missing=int(len(ages)))
    return AgeStats(
        average=float(known.mean()),
        minimum=float(known.min()),
        maximum=float(known.max()),
        missing=int(ages.isna().sum()),
    )


def basic_stats(passengers: Sequence[Passenger]) -> Optional[BasicStats]:
    """Headline numbers and the class / sex / port distributions."""
    if len(passengers) == 0:
        return None

    df = passengers_to_frame(passengers)
    total = len(df)
    survived = int((df["Survived"] == 1).sum())

    return BasicStats(
        total_passengers=total,
        survived_count=survived,
        survival_rate=survived / total * 100,
        age=_age_stats(df["Age"]),
        class_counts=_category_counts(df["Pclass"], CLASSES),
        sex_counts=_category_counts(df["Sex"], SEXES),
        embarked_counts=_category_counts(
            df["Embarked"].fillna(UNKNOWN_PORT), PORTS + (UNKNOWN_PORT,)
        ),
    )


def missing_values(passengers: Sequence[Passenger]) -> Optional[Dict[str, int]]:
    """Number of records with no Age, Cabin or Embarked value."""
    if len(passengers) == 0:
        return None

    df = passengers_to_frame(passengers)
    return {col: int(df[col].isna().sum()) for col in ("Age", "Cabin", "Embarked")}


def _survival_by(df: pd.DataFrame, col: str, known: Iterable[Hashable]) -> Dict[Any, GroupSurvival]:
    grouped = df.groupby(col)["Survived"].agg(["count", "sum"])
    return {
        key: GroupSurvival(
            total=int(grouped["count"].get(key, 0)),
            survived=int(grouped["sum"].get(key, 0)),
        )
        for key in known
    }


def survival_by_category(passengers: Sequence[Passenger]) -> Optional[SurvivalBreakdown]:
    """
    Survivors per class, sex and embarkation port.

    Every known category is present even when nobody belongs to it, so charts
    keep a stable set of bars.
    """
    if len(passengers) == 0:
        return None

    df = passengers_to_frame(passengers)
    return SurvivalBreakdown(
        by_class=_survival_by(df, "Pclass", CLASSES),
        by_sex=_survival_by(df, "Sex", SEXES),
        by_embarked=_survival_by(df, "Embarked", PORTS),
    )


def survival_table(groups: Dict[Any, GroupSurvival]) -> pd.DataFrame:
    """Tabular view of one breakdown: total, survived and survival rate (%)."""
    table = pd.DataFrame(
        [{"group": key, "total": g.total, "survived": g.survived} for key, g in groups.items()]
    ).set_index("group")
    table["rate_%"] = (table["survived"] / table["total"].where(table["total"] > 0) * 100).round(1)
    return table
