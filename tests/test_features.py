"""Tests for voyage_guide.features"""
import pytest

from voyage_guide.features import (
    AGE_BIN_ORDER,
    FARE_BIN_ORDER,
    age_bin,
    age_bin_counts,
    engineer_features,
    engineer_passenger,
    extract_title,
    family_size_counts,
    fare_bin,
    fare_bin_counts,
    title_counts,
)
from voyage_guide.records import EngineeredPassenger


class TestExtractTitle:
    @pytest.mark.parametrize("name, expected", [
        ("Braund, Mr. Owen Harris", "Mr."),
        ("Cumings, Mrs. John Bradley (Florence Briggs Thayer)", "Mrs."),
        ("Palsson, Master. Gosta Leonard", "Master."),
        ("LastName42, Capt. FirstName42", "Capt."),
    ])
    def test_known_pattern(self, name, expected):
        assert extract_title(name) == expected

    @pytest.mark.parametrize("name", ["Plain Name", "Smith, Dr Who", "", None])
    def test_malformed_name_falls_back(self, name):
        assert extract_title(name) == "Unknown"


class TestBins:
    @pytest.mark.parametrize("age, expected", [
        (0, "Child"),
        (11.99, "Child"),
        (12, "Teenager"),
        (17.99, "Teenager"),
        (18, "Young Adult"),
        (34.99, "Young Adult"),
        (35, "Adult"),
        (59.99, "Adult"),
        (60, "Elderly"),
        (None, "Unknown"),
        (float("nan"), "Unknown"),
    ])
    def test_age_bin_boundaries(self, age, expected):
        assert age_bin(age) == expected

    @pytest.mark.parametrize("fare, expected", [
        (0, "Low"),
        (9.99, "Low"),
        (10, "Medium"),
        (29.99, "Medium"),
        (30, "High"),
        (99.99, "High"),
        (100, "Very High"),
        (512.33, "Very High"),
    ])
    def test_fare_bin_boundaries(self, fare, expected):
        assert fare_bin(fare) == expected


class TestEngineerPassenger:
    def test_derived_attributes(self, seed_passengers):
        palsson = engineer_passenger(seed_passengers[7])
        assert isinstance(palsson, EngineeredPassenger)
        assert palsson.title == "Master."
        assert palsson.family_size == 5
        assert palsson.is_alone is False
        assert palsson.has_cabin is False
        assert palsson.age_bin == "Child"
        assert palsson.fare_bin == "Medium"

    def test_raw_fields_unchanged(self, seed_passengers):
        raw = seed_passengers[1]
        eng = engineer_passenger(raw)
        assert (eng.passenger_id, eng.name, eng.age, eng.cabin, eng.embarked) == (
            raw.passenger_id, raw.name, raw.age, raw.cabin, raw.embarked
        )
        assert eng.has_cabin is True

    def test_idempotent(self, seed_passengers):
        once = engineer_passenger(seed_passengers[0])
        assert engineer_passenger(once) == once
        assert engineer_passenger(seed_passengers[0]) == once

    def test_family_size_rules(self, engineered):
        for p in engineered:
            assert p.family_size == p.sib_sp + p.parch + 1
            assert p.family_size >= 1
            assert p.is_alone == (p.family_size == 1)
            assert p.has_cabin == (p.cabin is not None)


class TestDistributions:
    def test_age_bin_counts_ordered(self, seed_passengers):
        counts = age_bin_counts(engineer_features(seed_passengers))
        assert list(counts.index) == AGE_BIN_ORDER
        assert counts.to_dict() == {
            "Child": 1, "Teenager": 1, "Young Adult": 3, "Adult": 4, "Elderly": 0, "Unknown": 1
        }

    def test_fare_bin_counts_ordered(self, seed_passengers):
        counts = fare_bin_counts(engineer_features(seed_passengers))
        assert list(counts.index) == FARE_BIN_ORDER
        assert counts.to_dict() == {"Low": 4, "Medium": 2, "High": 4, "Very High": 0}

    def test_title_counts(self, seed_passengers):
        counts = title_counts(engineer_features(seed_passengers))
        assert counts.to_dict() == {"Mr.": 4, "Mrs.": 4, "Miss.": 1, "Master.": 1}
        assert list(counts.values) == sorted(counts.values, reverse=True)

    def test_family_size_counts_sorted_by_size(self, seed_passengers):
        counts = family_size_counts(engineer_features(seed_passengers))
        assert list(counts.index) == [1, 2, 3, 5]
        assert counts.to_dict() == {1: 4, 2: 4, 3: 1, 5: 1}

    def test_counts_cover_dataset(self, engineered):
        assert age_bin_counts(engineered).sum() == len(engineered)
        assert fare_bin_counts(engineered).sum() == len(engineered)
