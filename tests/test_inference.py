"""Tests for voyage_guide.inference"""
import pandas as pd
import pytest

from voyage_guide.encoding import DEFAULT_AGE, ModelFeatureVector, encode_features
from voyage_guide.features import engineer_passenger
from voyage_guide.inference import (
    LINEAR_COEFFICIENTS,
    LINEAR_INTERCEPT,
    LINEAR_MODEL,
    MODELS,
    TREE_MODEL,
    LinearThresholdModel,
    build_hypothetical_passenger,
    predict_passenger,
    score,
    survival_chance,
)


def vector(**overrides):
    fields = dict(
        pclass=3, sex=0, age=30.0, fare=10.0,
        embarked_c=0, embarked_q=0, embarked_s=1,
        title_master=0, title_miss=0, title_mr=1, title_mrs=0, title_rare=0,
        family_size=1, is_alone=1, has_cabin=0,
    )
    fields.update(overrides)
    return ModelFeatureVector(**fields)


class TestLinearThresholdModel:
    def test_third_class_young_man_does_not_survive(self):
        features = vector(pclass=3, sex=0, age=22, fare=7.25, family_size=2, is_alone=0)
        assert LINEAR_MODEL.decision_score(features) < 0.5
        assert LINEAR_MODEL.predict(features) == 0

    def test_score_is_intercept_plus_weighted_sum(self):
        features = vector(pclass=1, sex=1, age=38, fare=71.2833, embarked_c=1, embarked_s=0,
                          title_mr=0, title_mrs=1, family_size=2, is_alone=0, has_cabin=1)
        expected = LINEAR_INTERCEPT + sum(
            LINEAR_COEFFICIENTS[col] * value for col, value in features.as_dict().items()
        )
        assert LINEAR_MODEL.decision_score(features) == pytest.approx(expected)
        assert LINEAR_MODEL.predict(features) == 1

    def test_threshold_is_strict(self):
        zero_weights = {col: 0.0 for col in LINEAR_COEFFICIENTS}
        at_threshold = LinearThresholdModel(intercept=0.5, coefficients=zero_weights)
        assert at_threshold.predict(vector()) == 0

    def test_coefficient_table_sorted(self):
        table = LINEAR_MODEL.coefficient_table()
        assert table.iloc[0]["feature"] == "Sex"
        assert len(table) == len(LINEAR_COEFFICIENTS) + 1
        assert table["coefficient"].is_monotonic_decreasing


class TestRuleBasedTree:
    @pytest.mark.parametrize("pclass", [1, 2])
    def test_upper_class_female_survives(self, pclass):
        assert TREE_MODEL.predict(vector(sex=1, pclass=pclass, age=70, fare=0)) == 1

    @pytest.mark.parametrize("age, expected", [(29.9, 1), (30, 0), (45, 0)])
    def test_third_class_female_depends_on_age(self, age, expected):
        assert TREE_MODEL.predict(vector(sex=1, pclass=3, age=age)) == expected

    def test_young_boy_survives(self):
        assert TREE_MODEL.predict(vector(sex=0, pclass=3, age=5)) == 1

    def test_wealthy_first_class_man_survives(self):
        assert TREE_MODEL.predict(vector(sex=0, pclass=1, age=40, fare=50.01)) == 1
        assert TREE_MODEL.predict(vector(sex=0, pclass=1, age=40, fare=50)) == 0

    def test_adult_third_class_man_does_not_survive(self):
        assert TREE_MODEL.predict(vector(sex=0, pclass=3, age=40, fare=80)) == 0


class TestScore:
    def test_series_indexed_by_passenger(self, engineered):
        preds = score(engineered, TREE_MODEL)
        assert isinstance(preds, pd.Series)
        assert preds.name == TREE_MODEL.name
        assert list(preds.index) == [p.passenger_id for p in engineered]
        assert set(preds.unique()) <= {0, 1}

    def test_matches_single_predictions(self, engineered):
        preds = score(engineered, LINEAR_MODEL)
        for p in engineered[:10]:
            assert preds.loc[p.passenger_id] == LINEAR_MODEL.predict(encode_features(p))


class TestSurvivalChance:
    @pytest.mark.parametrize("linear, tree, label", [
        (1, 1, "Very High"),
        (0, 0, "Very Low"),
        (1, 0, "Moderate"),
        (0, 1, "Moderate"),
        (None, 1, "Unknown"),
    ])
    def test_labels(self, linear, tree, label):
        assert survival_chance(linear, tree) == label


class TestHypotheticalPassenger:
    def test_form_defaults(self):
        p = build_hypothetical_passenger()
        assert (p.pclass, p.sex, p.sib_sp, p.parch, p.fare) == (3, "male", 0, 0, 15.0)
        assert p.title == "Mr."
        assert p.age is None and p.embarked is None and p.cabin is None

    def test_partial_input_gets_encoder_defaults(self):
        vec = encode_features(build_hypothetical_passenger())
        assert vec.age == DEFAULT_AGE
        assert vec.embarked_s == 1
        assert vec.title_mr == 1
        assert vec.family_size == 1 and vec.is_alone == 1

    def test_missing_title_is_rare(self):
        vec = encode_features(build_hypothetical_passenger(title=None))
        assert vec.title_rare == 1

    def test_explicit_values_kept(self):
        p = build_hypothetical_passenger(
            pclass=1, sex="female", age=0, sib_sp=1, parch=2, fare=0.0,
            cabin="B45", embarked="C", title="Countess.",
        )
        assert p.age == 0 and p.fare == 0.0
        assert p.family_size == 4 and not p.is_alone
        assert p.has_cabin
        assert p.title == "Countess."

    def test_predict_passenger_summary(self):
        passenger = build_hypothetical_passenger(
            pclass=1, sex="female", age=25, fare=80.0, cabin="B45", embarked="C", title="Mrs."
        )
        summary = predict_passenger(passenger)
        assert summary.predictions == {"linear_regression": 1, "decision_tree": 1}
        assert summary.survival_chance == "Very High"

    def test_predict_passenger_uses_all_models(self, seed_passengers):
        summary = predict_passenger(engineer_passenger(seed_passengers[0]))
        assert set(summary.predictions) == set(MODELS)
        assert summary.survival_chance == "Very Low"
