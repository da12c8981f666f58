"""Tests for the engine data contract."""

from datetime import date

import pytest
from pydantic import ValidationError

from app.engine.models import (
    PILLAR_ORDER,
    ActionCategory,
    CandidateTask,
    DailyTaskSlate,
    FinanceSnapshot,
    MentalSnapshot,
    NutritionSnapshot,
    PhysicalSnapshot,
    Pillar,
    PillarRead,
    default_snapshot,
)

from tests.conftest import AFTERNOON


def _task(pillar: Pillar = Pillar.finance, priority: int = 5, **overrides) -> CandidateTask:
    fields = dict(
        pillar=pillar,
        rule=f"{pillar.value}.test",
        title="Test task",
        category=ActionCategory.tool,
        priority=priority,
    )
    fields.update(overrides)
    return CandidateTask(**fields)


def _slate(tasks) -> DailyTaskSlate:
    return DailyTaskSlate(
        user_id="u1",
        slate_date=date(2026, 2, 17),
        generated_at=AFTERNOON,
        tasks=tasks,
    )


class TestSnapshotDefaults:
    def test_common_defaults(self):
        for pillar in PILLAR_ORDER:
            snap = default_snapshot(pillar, "u1")
            assert snap.user_id == "u1"
            assert snap.stage == 1
            assert snap.completed_lessons == frozenset()
            assert snap.days_since_last_lesson is None
            assert snap.pillar == pillar

    def test_finance_defaults(self):
        snap = FinanceSnapshot()
        assert snap.emergency_fund_current == 0
        assert snap.emergency_fund_goal == 1000
        assert snap.debts == []

    def test_physical_unknowns(self):
        snap = PhysicalSnapshot()
        assert snap.sleep_hours_last_night is None
        assert snap.current_weight_kg is None

    def test_nutrition_goals(self):
        snap = NutritionSnapshot()
        assert snap.water_goal_ml == 2000
        assert snap.calorie_goal == 2000

    def test_snapshots_frozen(self):
        snap = MentalSnapshot()
        with pytest.raises(ValidationError):
            snap.stage = 2


class TestPillarRead:
    def test_discriminated_by_pillar(self):
        read = PillarRead.model_validate(
            {"pillar": "physical", "snapshot": {"pillar": "physical", "workouts_this_week": 2}}
        )
        assert isinstance(read.snapshot, PhysicalSnapshot)
        assert read.snapshot.workouts_this_week == 2
        assert read.ok is True
        assert read.error is None


class TestCandidateTask:
    def test_priority_bounds(self):
        _task(priority=1)
        _task(priority=10)
        with pytest.raises(ValidationError):
            _task(priority=0)
        with pytest.raises(ValidationError):
            _task(priority=11)

    def test_defaults(self):
        task = _task()
        assert task.streak_eligible is True
        assert task.suggested_amount is None
        assert task.action_params is None


class TestDailyTaskSlate:
    def test_empty_slate_is_valid(self):
        slate = _slate([])
        assert slate.tasks == []
        assert slate.degraded_pillars == []

    def test_max_size_enforced(self):
        tasks = [_task(pillar=p, rule=f"{p.value}.{i}") for p in PILLAR_ORDER for i in range(2)]
        assert len(_slate(tasks).tasks) == 8
        with pytest.raises(ValidationError):
            _slate(tasks + [_task(pillar=Pillar.finance, rule="finance.extra")])

    def test_per_pillar_cap_enforced(self):
        tasks = [_task(pillar=Pillar.mental, rule=f"mental.{i}") for i in range(3)]
        with pytest.raises(ValidationError, match="mental"):
            _slate(tasks)

    def test_tasks_for(self):
        slate = _slate([_task(Pillar.finance), _task(Pillar.nutrition), _task(Pillar.finance, rule="finance.b")])
        assert [t.rule for t in slate.tasks_for(Pillar.finance)] == ["finance.test", "finance.b"]
        assert slate.tasks_for(Pillar.physical) == []

    def test_json_roundtrip_keeps_insight_keys(self):
        slate = _slate([_task()])
        restored = DailyTaskSlate.model_validate_json(slate.model_dump_json())
        assert restored == slate

    def test_insights_kept_in_pillar_order(self):
        slate = DailyTaskSlate.model_validate(
            {
                "user_id": "u1",
                "slate_date": "2026-02-17",
                "generated_at": "2026-02-17T14:00:00Z",
                "insights": {"nutrition": {}, "finance": {}, "physical": {}, "mental": {}},
            }
        )
        assert list(slate.insights) == list(PILLAR_ORDER)
