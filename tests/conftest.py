"""Shared fixtures: the curated seed records and a seeded synthetic dataset."""
import pytest

from voyage_guide.features import engineer_features
from voyage_guide.make_synthetic_data import SEED_PASSENGERS, load_dataset


@pytest.fixture
def seed_passengers():
    return list(SEED_PASSENGERS)


@pytest.fixture
def snapshot():
    return load_dataset(n_passengers=100, random_state=42, delay_seconds=0)


@pytest.fixture
def engineered(snapshot):
    return engineer_features(snapshot)
