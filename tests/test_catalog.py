import json

import pytest

from backend.catalog import CatalogError, get_active_plan, load_training_plans
from backend.prescription import SetGroupType


def _write(tmp_path, document):
    path = tmp_path / "plans.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def _plan(exercises):
    return {
        "plans": [
            {
                "id": "p",
                "name": "Plan",
                "days": [{"id": "d", "name": "Day", "day_of_week": 1, "exercises": exercises}],
            }
        ]
    }


def test_bundled_catalog_loads(catalog_path):
    plans = load_training_plans(catalog_path)
    assert [p.id for p in plans] == ["plan-001", "plan-002"]
    plan = get_active_plan(plans)
    assert plan.name == "Muscle Building"
    monday = plan.day_for(1)
    bench = monday.exercise("ex-001")
    assert bench.total_sets == 6
    first_group = bench.prescription.groups[0]
    assert first_group.type is SetGroupType.PYRAMID_UP
    assert first_group.sets[2].rpe == 8
    assert bench.prescription.groups[1].sets[2].rest_time_seconds is None
    assert plan.day_for(0).is_rest_day


def test_every_set_type_in_bundled_catalog(catalog_path):
    plan = load_training_plans(catalog_path)[0]
    types = {
        group.type
        for day in plan.days
        for exercise in day.exercises
        for group in exercise.prescription.groups
    }
    assert types == set(SetGroupType)


def test_empty_groups_are_allowed(tmp_path):
    path = _write(
        tmp_path,
        _plan([{"id": "e", "name": "E", "set_groups": [{"type": "normal", "sets": []}]}]),
    )
    exercise = load_training_plans(path)[0].days[0].exercises[0]
    assert exercise.total_sets == 0
    assert len(exercise.prescription.groups) == 1


def test_unknown_set_type_is_rejected(tmp_path):
    path = _write(
        tmp_path,
        _plan([{"id": "e", "name": "E", "set_groups": [{"type": "custom", "sets": []}]}]),
    )
    with pytest.raises(CatalogError, match="unknown set type"):
        load_training_plans(path)


@pytest.mark.parametrize(
    "bad_set",
    [{"weight": 10}, {"reps": -1}, {"reps": 5, "rest_time": -3}, {"reps": "many"}],
)
def test_bad_sets_are_rejected(tmp_path, bad_set):
    path = _write(
        tmp_path,
        _plan([{"id": "e", "name": "E", "set_groups": [{"sets": [bad_set]}]}]),
    )
    with pytest.raises(CatalogError):
        load_training_plans(path)


def test_missing_plans_key(tmp_path):
    with pytest.raises(CatalogError, match="missing 'plans'"):
        load_training_plans(_write(tmp_path, {}))


def test_invalid_json(tmp_path):
    path = tmp_path / "plans.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_training_plans(path)


def test_non_utf8_file(tmp_path):
    path = tmp_path / "plans.json"
    path.write_bytes(b'{"plans": [{"id": "\xff", "name": "P", "days": []}]}')
    with pytest.raises(CatalogError):
        load_training_plans(path)


def test_bad_day_of_week(tmp_path):
    document = {"plans": [{"id": "p", "name": "P", "days": [{"id": "d", "name": "D", "day_of_week": 9}]}]}
    with pytest.raises(CatalogError):
        load_training_plans(_write(tmp_path, document))


def test_active_plan_falls_back_to_first(tmp_path):
    document = {"plans": [{"id": "a", "name": "A"}, {"id": "b", "name": "B"}]}
    plans = load_training_plans(_write(tmp_path, document))
    assert get_active_plan(plans).id == "a"
    assert get_active_plan([]) is None
