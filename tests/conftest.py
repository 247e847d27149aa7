import os
import sys
from pathlib import Path

# Kivy parses sys.argv on import unless told otherwise, which trips over
# pytest's own options.
os.environ.setdefault("KIVY_NO_ARGS", "1")
os.environ.setdefault("KIVY_NO_CONSOLELOG", "1")
os.environ.setdefault("KIVY_NO_FILELOG", "1")

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest

from backend import settings
from backend.prescription import Prescription, SetGroup, SetGroupType, SetSpec
from tests.utils import FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def three_set_prescription() -> Prescription:
    """One normal group: two sets with 45s rest, the last without rest."""
    return Prescription(
        exercise_id="bench",
        name="Bench Press",
        groups=[
            SetGroup(
                type=SetGroupType.NORMAL,
                sets=[
                    SetSpec(reps=10, weight=60, rest_time_seconds=45),
                    SetSpec(reps=10, weight=60, rest_time_seconds=45),
                    SetSpec(reps=10, weight=60),
                ],
            )
        ],
    )


@pytest.fixture
def ragged_prescription() -> Prescription:
    """Three groups of different sizes with an empty group in the middle."""
    return Prescription(
        exercise_id="squat",
        name="Squat",
        groups=[
            SetGroup(
                type=SetGroupType.PYRAMID_UP,
                sets=[
                    SetSpec(reps=10, weight=60, rest_time_seconds=5),
                    SetSpec(reps=8, weight=80, rest_time_seconds=3),
                ],
            ),
            SetGroup(type=SetGroupType.SUPER_SET, sets=[]),
            SetGroup(
                type=SetGroupType.DROP_SET,
                sets=[
                    SetSpec(reps=8, weight=70, rest_time_seconds=2),
                    SetSpec(reps=8, weight=50),
                    SetSpec(reps=10, weight=30, rpe=9),
                ],
            ),
        ],
    )


@pytest.fixture
def settings_file(tmp_path, monkeypatch) -> Path:
    """Point the settings module at a temporary file."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr(settings, "SETTINGS_PATH", path)
    settings.reset_cache()
    yield path
    settings.reset_cache()


@pytest.fixture
def catalog_path() -> Path:
    return Path(__file__).resolve().parents[1] / "data" / "training_plans.json"
