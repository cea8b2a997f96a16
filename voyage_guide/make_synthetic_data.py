"""
voyage_guide/make_synthetic_data.py

Builds the passenger dataset used by the dashboard: ten curated, historically
styled records followed by synthetic passengers up to a target count.

The sampling probabilities below shape every statistic the dashboard shows.

Run
---
python -m voyage_guide.make_synthetic_data --n-passengers 100 --random-state 42
"""

from __future__ import annotations

import argparse
import logging
import time
from typing import List, Optional, Union

import numpy as np

from voyage_guide.records import DatasetSnapshot, Passenger


logger = logging.getLogger(__name__)

DEFAULT_N_PASSENGERS = 100
LOADING_DELAY_SECONDS = 1.0

# Probability that a synthetic passenger survived (skewed toward "did not survive").
SURVIVAL_PROBABILITY = 0.4
MALE_PROBABILITY = 0.4
MISSING_AGE_PROBABILITY = 0.1
MAX_AGE = 80
MAX_RELATIVES = 5
MAX_FARE = 100.0

# Titles are drawn independently of sex, so e.g. a female "Mr." can occur.
SYNTHETIC_TITLES = ["Mr.", "Mrs.", "Miss.", "Master.", "Dr.", "Rev.", "Major.", "Col.", "Capt."]
SYNTHETIC_CABINS = [None, "A12", "B45", "C85", "D23", "E46", None, None, None, None]
SYNTHETIC_PORTS = ["C", "S", "Q", None]

RandomState = Union[None, int, np.random.Generator]


SEED_PASSENGERS: List[Passenger] = [
    Passenger(1, 0, 3, "Braund, Mr. Owen Harris", "male", 1, 0, "A/5 21171", 7.25,
              age=22, cabin=None, embarked="S"),
    Passenger(2, 1, 1, "Cumings, Mrs. John Bradley (Florence Briggs Thayer)", "female", 1, 0,
              "PC 17599", 71.2833, age=38, cabin="C85", embarked="C"),
    Passenger(3, 1, 3, "Heikkinen, Miss. Laina", "female", 0, 0, "STON/O2. 3101282", 7.925,
              age=26, cabin=None, embarked="S"),
    Passenger(4, 1, 1, "Futrelle, Mrs. Jacques Heath (Lily May Peel)", "female", 1, 0,
              "113803", 53.1, age=35, cabin="C123", embarked="S"),
    Passenger(5, 0, 3, "Allen, Mr. William Henry", "male", 0, 0, "373450", 8.05,
              age=35, cabin=None, embarked="S"),
    Passenger(6, 0, 3, "Moran, Mr. James", "male", 0, 0, "330877", 8.4583,
              age=None, cabin=None, embarked="Q"),
    Passenger(7, 0, 1, "McCarthy, Mr. Timothy J", "male", 0, 0, "17463", 51.8625,
              age=54, cabin="E46", embarked="S"),
    Passenger(8, 0, 3, "Palsson, Master. Gosta Leonard", "male", 3, 1, "349909", 21.075,
              age=2, cabin=None, embarked="S"),
    Passenger(9, 1, 3, "Johnson, Mrs. Oscar W (Elisabeth Vilhelmina Berg)", "female", 0, 2,
              "347742", 11.1333, age=27, cabin=None, embarked="S"),
    Passenger(10, 1, 2, "Nasser, Mrs. Nicholas (Adele Achem)", "female", 1, 0, "237736", 30.0708,
              age=14, cabin=None, embarked="C"),
]


def _synthetic_passenger(passenger_id: int, rng: np.random.Generator) -> Passenger:
    survived = int(rng.random() < SURVIVAL_PROBABILITY)
    pclass = int(rng.integers(1, 4))
    sex = "male" if rng.random() < MALE_PROBABILITY else "female"
    age = None if rng.random() < MISSING_AGE_PROBABILITY else float(rng.integers(0, MAX_AGE))
    title = SYNTHETIC_TITLES[rng.integers(len(SYNTHETIC_TITLES))]
    sib_sp = int(rng.integers(0, MAX_RELATIVES))
    parch = int(rng.integers(0, MAX_RELATIVES))
    fare = float(rng.uniform(0.0, MAX_FARE))
    cabin = SYNTHETIC_CABINS[rng.integers(len(SYNTHETIC_CABINS))]
    embarked = SYNTHETIC_PORTS[rng.integers(len(SYNTHETIC_PORTS))]

    return Passenger(
        passenger_id=passenger_id,
        survived=survived,
        pclass=pclass,
        name=f"LastName{passenger_id}, {title} FirstName{passenger_id}",
        sex=sex,
        sib_sp=sib_sp,
        parch=parch,
        ticket=f"TICKET{passenger_id}",
        fare=fare,
        age=age,
        cabin=cabin,
        embarked=embarked,
    )


def generate_passenger_dataset(
    n_passengers: int = DEFAULT_N_PASSENGERS,
    random_state: RandomState = None,
) -> List[Passenger]:
    """
    Return the seed passengers followed by synthetic ones, n_passengers in total.

    Parameters
    ----------
    n_passengers : int
        Target size. When it does not exceed the number of seed records the
        seed records are returned unchanged.
    random_state : None, int or numpy.random.Generator
        Source of randomness. Pass a seed (or a Generator) for a reproducible
        dataset; None draws fresh entropy.
    """
    rng = np.random.default_rng(random_state)

    passengers = list(SEED_PASSENGERS)
    next_id = max(p.passenger_id for p in passengers) + 1
    while len(passengers) < n_passengers:
        passengers.append(_synthetic_passenger(next_id, rng))
        next_id += 1

    logger.debug("Generated %d passengers (%d seed)", len(passengers), len(SEED_PASSENGERS))
    return passengers


def load_dataset(
    n_passengers: int = DEFAULT_N_PASSENGERS,
    random_state: RandomState = None,
    delay_seconds: float = LOADING_DELAY_SECONDS,
) -> DatasetSnapshot:
    """
    Simulate fetching the dataset: wait once, then hand back an immutable snapshot.

    The dashboard calls this a single time per process (through
    st.cache_resource) and shares the result across reruns.
    """
    if delay_seconds > 0:
        time.sleep(delay_seconds)

    snapshot = DatasetSnapshot(tuple(generate_passenger_dataset(n_passengers, random_state)))
    logger.info("Loaded dataset snapshot with %d passengers", len(snapshot))
    return snapshot


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate the synthetic passenger dataset.")
    parser.add_argument(
        "--n-passengers",
        type=int,
        default=DEFAULT_N_PASSENGERS,
        help="Total number of passengers (seed records included).",
    )
    parser.add_argument(
        "--random-state",
        type=int,
        default=42,
        help="Random seed for reproducibility.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    args = parser.parse_args(argv)
    if args.n_passengers < 1:
        parser.error("--n-passengers must be at least 1")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    snapshot = load_dataset(args.n_passengers, args.random_state, delay_seconds=0)
    df = snapshot.to_frame()

    # Print quick quality checks
    print(f"Generated {len(df)} passengers")
    print("Survival rate:", round(df["Survived"].mean(), 3))
    print("Missing ages:", int(df["Age"].isna().sum()))
    print(df.head().to_string(index=False))


if __name__ == "__main__":
    main()
