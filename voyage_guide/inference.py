"""
voyage_guide/inference.py

Purpose
-------
The two fixed survival predictors and everything needed to score with them:
  - LinearThresholdModel : weighted sum of the features compared to 0.5
  - RuleBasedTree        : hand-written "women and children first" rules
  - score()              : run one predictor over a whole engineered dataset
  - build_hypothetical_passenger() / predict_passenger() : the "what if"
    form, which scores a made-up passenger with both predictors

Neither model is trained. Their parameters are constants below.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Protocol

import pandas as pd

from voyage_guide.encoding import FEATURE_COLUMNS, ModelFeatureVector, encode_features
from voyage_guide.features import engineer_passenger
from voyage_guide.records import EngineeredPassenger, Passenger

logger = logging.getLogger(__name__)

LINEAR_INTERCEPT = 0.042
LINEAR_THRESHOLD = 0.5
LINEAR_COEFFICIENTS: Dict[str, float] = {
    "Pclass": -0.15,
    "Sex": 0.53,
    "Age": -0.007,
    "Fare": 0.0023,
    "Embarked_C": 0.13,
    "Embarked_Q": 0.05,
    "Embarked_S": -0.15,
    "Title_Master": 0.36,
    "Title_Miss": 0.32,
    "Title_Mr": -0.28,
    "Title_Mrs": 0.31,
    "Title_Rare": 0.12,
    "FamilySize": -0.02,
    "IsAlone": -0.08,
    "HasCabin": 0.14,
}

# Shown next to the tree diagram; not used when predicting.
TREE_FEATURE_IMPORTANCES: Dict[str, float] = {
    "Sex": 0.42,
    "Pclass": 0.25,
    "Age": 0.18,
    "Title": 0.08,
    "Fare": 0.04,
    "FamilySize": 0.02,
    "HasCabin": 0.01,
}

# Values the prediction form starts from.
HYPOTHETICAL_DEFAULTS = {
    "pclass": 3,
    "sex": "male",
    "sib_sp": 0,
    "parch": 0,
    "fare": 15.0,
    "title": "Mr.",
}


class SurvivalPredictor(Protocol):
    name: str

    def predict(self, features: ModelFeatureVector) -> int:
        ...


@dataclass(frozen=True)
class LinearThresholdModel:
    """Fixed-coefficient linear score; predicts survival when the score exceeds the threshold."""
    name: str = "Linear Regression"
    intercept: float = LINEAR_INTERCEPT
    coefficients: Mapping[str, float] = field(default_factory=lambda: dict(LINEAR_COEFFICIENTS))
    threshold: float = LINEAR_THRESHOLD

    def decision_score(self, features: ModelFeatureVector) -> float:
        values = features.as_dict()
        return self.intercept + sum(self.coefficients[col] * values[col] for col in FEATURE_COLUMNS)

    def predict(self, features: ModelFeatureVector) -> int:
        return 1 if self.decision_score(features) > self.threshold else 0

    def coefficient_table(self) -> pd.DataFrame:
        """Intercept and coefficients, largest first."""
        rows = [{"feature": "Intercept", "coefficient": self.intercept}]
        rows += [{"feature": col, "coefficient": w} for col, w in self.coefficients.items()]
        return (
            pd.DataFrame(rows)
            .sort_values("coefficient", ascending=False)
            .reset_index(drop=True)
        )


@dataclass(frozen=True)
class RuleBasedTree:
    """
    Hand-authored decision rules, evaluated in this order:

      female: 1st/2nd class -> survived; 3rd class -> survived if age < 30
      male:   age < 10 -> survived; 1st class with fare > 50 -> survived;
              otherwise did not survive
    """
    name: str = "Decision Tree"
    feature_importances: Mapping[str, float] = field(
        default_factory=lambda: dict(TREE_FEATURE_IMPORTANCES)
    )

    def predict(self, features: ModelFeatureVector) -> int:
        if features.sex == 1:
            if features.pclass in (1, 2):
                return 1
            return 1 if features.age < 30 else 0

        if features.age < 10:
            return 1
        if features.pclass == 1 and features.fare > 50:
            return 1
        return 0


LINEAR_MODEL = LinearThresholdModel()
TREE_MODEL = RuleBasedTree()
MODELS: Dict[str, SurvivalPredictor] = {
    "linear_regression": LINEAR_MODEL,
    "decision_tree": TREE_MODEL,
}


@dataclass(frozen=True)
class PredictionSummary:
    predictions: Dict[str, int]
    survival_chance: str


def score(engineered: Iterable[EngineeredPassenger], model: SurvivalPredictor) -> pd.Series:
    """
    Predict every passenger with one model.

    Returns
    -------
    pd.Series
        0/1 predictions indexed by PassengerId, named after the model.
    """
    engineered = list(engineered)
    preds = [model.predict(encode_features(p)) for p in engineered]
    index = pd.Index([p.passenger_id for p in engineered], name="PassengerId")
    return pd.Series(preds, index=index, name=model.name, dtype="int64")


def survival_chance(linear: Optional[int], tree: Optional[int]) -> str:
    """Qualitative label from the two predictions."""
    if linear is None or tree is None:
        return "Unknown"
    if linear == 1 and tree == 1:
        return "Very High"
    if linear == 0 and tree == 0:
        return "Very Low"
    return "Moderate"


def build_hypothetical_passenger(
    pclass: Optional[int] = None,
    sex: Optional[str] = None,
    age: Optional[float] = None,
    sib_sp: Optional[int] = None,
    parch: Optional[int] = None,
    fare: Optional[float] = None,
    cabin: Optional[str] = None,
    embarked: Optional[str] = None,
    title: Optional[str] = HYPOTHETICAL_DEFAULTS["title"],
) -> EngineeredPassenger:
    """
    Assemble an engineered passenger from (possibly partial) form input.

    Class, sex, relatives and fare fall back to HYPOTHETICAL_DEFAULTS. Age,
    cabin and port are left absent when not given, so encode_features applies
    its usual imputation. A missing title gives an unparseable name, which
    ends up in the "Rare" title group.
    """
    name = f"Hypothetical, {title} Passenger" if title else "Hypothetical Passenger"
    passenger = Passenger(
        passenger_id=0,
        survived=0,
        pclass=pclass or HYPOTHETICAL_DEFAULTS["pclass"],
        name=name,
        sex=sex or HYPOTHETICAL_DEFAULTS["sex"],
        sib_sp=sib_sp or HYPOTHETICAL_DEFAULTS["sib_sp"],
        parch=parch or HYPOTHETICAL_DEFAULTS["parch"],
        ticket="HYPO",
        fare=HYPOTHETICAL_DEFAULTS["fare"] if fare is None else fare,
        age=age,
        cabin=cabin or None,
        embarked=embarked or None,
    )
    return engineer_passenger(passenger)


def predict_passenger(
    passenger: EngineeredPassenger,
    models: Mapping[str, SurvivalPredictor] = MODELS,
) -> PredictionSummary:
    """Score one passenger with every model and derive the survival-chance label."""
    features = encode_features(passenger)
    predictions = {key: model.predict(features) for key, model in models.items()}
    logger.debug("Predictions for passenger %s: %s", passenger.passenger_id, predictions)

    return PredictionSummary(
        predictions=predictions,
        survival_chance=survival_chance(
            predictions.get("linear_regression"), predictions.get("decision_tree")
        ),
    )
