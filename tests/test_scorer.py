"""Tests for the cross-pillar priority scorer."""

from app.engine.models import (
    ActionCategory,
    CandidateTask,
    FinanceSnapshot,
    MentalSnapshot,
    NutritionSnapshot,
    PhysicalSnapshot,
    Pillar,
)
from app.engine.scorer import clamp_priority, score, stale_pillars


def _task(pillar: Pillar, priority: int) -> CandidateTask:
    return CandidateTask(
        pillar=pillar,
        rule=f"{pillar.value}.t{priority}",
        title="t",
        category=ActionCategory.tool,
        priority=priority,
    )


def _snapshots(finance=None, mental=None, physical=None, nutrition=None):
    return {
        Pillar.finance: FinanceSnapshot(days_since_last_lesson=finance),
        Pillar.mental: MentalSnapshot(days_since_last_lesson=mental),
        Pillar.physical: PhysicalSnapshot(days_since_last_lesson=physical),
        Pillar.nutrition: NutritionSnapshot(days_since_last_lesson=nutrition),
    }


class TestClamp:
    def test_bounds(self):
        assert clamp_priority(0) == 1
        assert clamp_priority(11) == 10
        assert clamp_priority(7) == 7


class TestStalePillars:
    def test_new_user_has_none(self):
        assert stale_pillars(_snapshots()) == set()

    def test_inactive_pillar_next_to_active_one(self):
        stale = stale_pillars(_snapshots(finance=0, mental=1, physical=None, nutrition=0))
        assert stale == {Pillar.physical}

    def test_degraded_pillar_never_stale(self):
        stale = stale_pillars(_snapshots(finance=0), degraded={Pillar.mental, Pillar.physical})
        assert stale == {Pillar.nutrition}

    def test_days_threshold(self):
        stale = stale_pillars(_snapshots(finance=3, mental=2, physical=0, nutrition=10), stale_days=3)
        assert stale == {Pillar.finance, Pillar.nutrition}


class TestScore:
    def test_no_adjustment_keeps_tasks(self):
        tasks = [_task(Pillar.finance, 5), _task(Pillar.mental, 7)]
        assert score(tasks, _snapshots()) == tasks

    def test_stale_pillar_boosted(self):
        tasks = [_task(Pillar.finance, 5), _task(Pillar.physical, 7)]
        scored = score(tasks, _snapshots(finance=0, mental=0, physical=None, nutrition=0))
        assert [t.priority for t in scored] == [5, 8]

    def test_boost_clamped(self):
        tasks = [_task(Pillar.physical, 10)]
        scored = score(tasks, _snapshots(finance=0, physical=5))
        assert scored[0].priority == 10

    def test_order_preserved(self):
        tasks = [_task(Pillar.nutrition, 3), _task(Pillar.finance, 9), _task(Pillar.nutrition, 4)]
        scored = score(tasks, _snapshots(finance=0, nutrition=7))
        assert [t.pillar for t in scored] == [Pillar.nutrition, Pillar.finance, Pillar.nutrition]
        assert [t.priority for t in scored] == [4, 9, 5]

    def test_inputs_not_mutated(self):
        tasks = [_task(Pillar.mental, 6)]
        score(tasks, _snapshots(finance=0))
        assert tasks[0].priority == 6

    def test_degraded_pillar_not_boosted(self):
        tasks = [_task(Pillar.finance, 5), _task(Pillar.physical, 7)]
        scored = score(tasks, _snapshots(finance=0), degraded=[Pillar.physical])
        assert [t.priority for t in scored] == [5, 7]
