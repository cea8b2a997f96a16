"""
voyage_guide/records.py

Immutable record types shared by every stage of the pipeline, plus the helper
that turns a collection of records into a pandas DataFrame for aggregation and
display.

Column names in the DataFrame follow the familiar Kaggle Titanic headers
(PassengerId, Survived, Pclass, ...), which is also what the dashboard shows.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Iterable, Optional, Tuple

import pandas as pd


# Dataclass field -> display/DataFrame column.
COLUMN_NAMES = {
    "passenger_id": "PassengerId",
    "survived": "Survived",
    "pclass": "Pclass",
    "name": "Name",
    "sex": "Sex",
    "age": "Age",
    "sib_sp": "SibSp",
    "parch": "Parch",
    "ticket": "Ticket",
    "fare": "Fare",
    "cabin": "Cabin",
    "embarked": "Embarked",
    "title": "Title",
    "family_size": "FamilySize",
    "is_alone": "IsAlone",
    "has_cabin": "HasCabin",
    "age_bin": "AgeBin",
    "fare_bin": "FareBin",
}


@dataclass(frozen=True)
class Passenger:
    """One voyage record as it was collected (no derived attributes)."""
    passenger_id: int
    survived: int
    pclass: int
    name: str
    sex: str
    sib_sp: int
    parch: int
    ticket: str
    fare: float
    age: Optional[float] = None
    cabin: Optional[str] = None
    embarked: Optional[str] = None


@dataclass(frozen=True)
class EngineeredPassenger(Passenger):
    """
    A Passenger plus read-only derived attributes.

    Instances are produced by voyage_guide.features.engineer_passenger; the
    defaults below are the values a passenger with no relatives, no cabin and
    an unparseable name would get.
    """
    title: str = "Unknown"
    family_size: int = 1
    is_alone: bool = True
    has_cabin: bool = False
    age_bin: str = "Unknown"
    fare_bin: str = "Low"


@dataclass(frozen=True)
class DatasetSnapshot:
    """
    The session's dataset: created once, never mutated, passed explicitly
    into the pipeline functions that need it.
    """
    passengers: Tuple[Passenger, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.passengers)

    def __iter__(self):
        return iter(self.passengers)

    def head(self, n: int = 5) -> Tuple[Passenger, ...]:
        """First n records in identifier order."""
        return self.passengers[:n]

    def to_frame(self) -> pd.DataFrame:
        return passengers_to_frame(self.passengers)


def passengers_to_frame(passengers: Iterable[Passenger]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per record.

    Works for raw and engineered passengers alike; engineered records simply
    contribute the extra derived columns. Unknown ages become NaN so that
    pandas aggregations skip them.
    """
    rows = [asdict(p) for p in passengers]
    if not rows:
        return pd.DataFrame(columns=[COLUMN_NAMES[f] for f in Passenger.__dataclass_fields__])

    df = pd.DataFrame(rows).rename(columns=COLUMN_NAMES)
    df["Age"] = pd.to_numeric(df["Age"], errors="coerce")
    return df
