import json
from datetime import datetime, timedelta, timezone

import pytest

from helmopkit.conditions import Condition, Conditions, ConditionStatus

INIT_TIME = datetime(2015, 7, 11, 0, 1, 0, tzinfo=timezone.utc)
INTERVAL = timedelta(hours=1)


class IntervalClock:
    def __init__(self, start, step):
        self.time = start
        self.step = step

    def __call__(self):
        self.time = self.time + self.step
        return self.time


def init_conditions(*initial):
    conditions = Conditions(clock=lambda: INIT_TIME)
    for c in initial:
        conditions.set_condition(c)
    conditions.clock = IntervalClock(INIT_TIME, INTERVAL)
    return conditions


def generate_condition(ctype, status):
    return Condition(
        type=ctype,
        status=status,
        reason=f"My{ctype}{status.value}",
        message=f"Condition {ctype} is {status.value}",
    )


def with_time(condition, when):
    c = condition.copy()
    c.last_transition_time = when
    return c


def test_condition_copy_is_independent():
    a = generate_condition("A", ConditionStatus.TRUE)
    b = a.copy()
    assert b == a
    assert b is not a
    b.reason = "Other"
    assert a.reason == "MyATrue"


def test_set_empty():
    conditions = init_conditions()
    cond = generate_condition("A", ConditionStatus.TRUE)
    assert conditions.set_condition(cond) is True
    assert len(conditions) == 1
    assert conditions.get_condition("A") == with_time(cond, INIT_TIME + INTERVAL)


def test_set_not_exists():
    conditions = init_conditions(generate_condition("B", ConditionStatus.TRUE))
    cond = generate_condition("A", ConditionStatus.TRUE)
    assert conditions.set_condition(cond) is True
    assert len(conditions) == 2
    assert conditions.get_condition("A") == with_time(cond, INIT_TIME + INTERVAL)


def test_set_exists_identical():
    existing = generate_condition("A", ConditionStatus.TRUE)
    conditions = init_conditions(existing)
    assert conditions.set_condition(existing) is False
    assert len(conditions) == 1
    assert conditions.get_condition("A") == with_time(existing, INIT_TIME)


def test_set_exists_different_reason():
    existing = generate_condition("A", ConditionStatus.TRUE)
    conditions = init_conditions(existing)
    cond = existing.copy()
    cond.reason = "ChangedReason"
    assert conditions.set_condition(cond) is True
    assert len(conditions) == 1
    assert conditions.get_condition("A") == with_time(cond, INIT_TIME)


def test_set_exists_different_status():
    existing = generate_condition("A", ConditionStatus.TRUE)
    conditions = init_conditions(existing)
    cond = existing.copy()
    cond.status = ConditionStatus.FALSE
    cond.reason = "ChangedReason"
    assert conditions.set_condition(cond) is True
    assert len(conditions) == 1
    assert conditions.get_condition("A") == with_time(cond, INIT_TIME + INTERVAL)


def test_get_not_exists():
    conditions = init_conditions(generate_condition("A", ConditionStatus.TRUE))
    assert conditions.get_condition("B") is None


def test_remove_from_empty():
    assert Conditions().remove_condition("C") is False


def test_remove_not_exists():
    conditions = init_conditions(
        generate_condition("A", ConditionStatus.TRUE),
        generate_condition("B", ConditionStatus.TRUE),
    )
    assert conditions.remove_condition("C") is False
    assert conditions.get_condition("A").type == "A"
    assert conditions.get_condition("B").type == "B"
    assert len(conditions) == 2


def test_remove_exists():
    conditions = init_conditions(
        generate_condition("A", ConditionStatus.TRUE),
        generate_condition("B", ConditionStatus.TRUE),
    )
    assert conditions.remove_condition("A") is True
    assert conditions.get_condition("A") is None
    assert conditions.get_condition("B").type == "B"
    assert len(conditions) == 1


@pytest.fixture
def mixed():
    return Conditions(
        generate_condition("False", ConditionStatus.FALSE),
        generate_condition("True", ConditionStatus.TRUE),
        generate_condition("Unknown", ConditionStatus.UNKNOWN),
    )


def test_is_true_for(mixed):
    assert mixed.is_true_for("True") is True
    assert mixed.is_true_for("False") is False
    assert mixed.is_true_for("Unknown") is False
    assert mixed.is_true_for("DoesNotExist") is False


def test_is_false_for(mixed):
    assert mixed.is_false_for("True") is False
    assert mixed.is_false_for("False") is True
    assert mixed.is_false_for("Unknown") is False
    assert mixed.is_false_for("DoesNotExist") is False


def test_is_unknown_for(mixed):
    assert mixed.is_unknown_for("True") is False
    assert mixed.is_unknown_for("False") is False
    assert mixed.is_unknown_for("Unknown") is True
    assert mixed.is_unknown_for("DoesNotExist") is True


def test_condition_predicates():
    c = generate_condition("X", ConditionStatus.UNKNOWN)
    assert (c.is_true(), c.is_false(), c.is_unknown()) == (False, False, True)


def test_json_sorted_and_lossless():
    a, b, c, d = (generate_condition(t, ConditionStatus.TRUE) for t in "ABCD")
    conditions = init_conditions(b, d, c, a)
    data = conditions.to_json()

    parsed = json.loads(data)
    assert [item["type"] for item in parsed] == ["A", "B", "C", "D"]
    assert parsed[0]["lastTransitionTime"] == "2015-07-11T00:01:00Z"

    assert Conditions.from_json(data) == conditions


def test_iteration_keeps_insertion_order():
    conditions = init_conditions(
        generate_condition("B", ConditionStatus.TRUE),
        generate_condition("A", ConditionStatus.TRUE),
    )
    assert [c.type for c in conditions] == ["B", "A"]


def test_to_dict_omits_empty_fields():
    c = Condition(type="A", status=ConditionStatus.TRUE)
    assert c.to_dict() == {"type": "A", "status": "True", "lastTransitionTime": None}


def test_from_dict_missing_field():
    with pytest.raises(ValueError):
        Condition.from_dict({"status": "True"})


def test_from_json_rejects_non_array():
    with pytest.raises(ValueError):
        Conditions.from_json('{"type": "A"}')