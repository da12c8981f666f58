"""Tests for the learning-path catalog and rule thresholds."""

from app.engine import catalog
from app.engine.models import PILLAR_ORDER, Pillar
from app.engine.thresholds import THRESHOLDS, list_thresholds


class TestCatalog:
    def test_every_pillar_has_stages(self):
        for pillar in PILLAR_ORDER:
            stages = catalog.CATALOG[pillar]
            assert stages
            assert [s.number for s in stages] == list(range(1, len(stages) + 1))

    def test_lesson_ids_unique_within_pillar(self):
        for pillar in PILLAR_ORDER:
            ids = [lesson.id for stage in catalog.CATALOG[pillar] for lesson in stage.lessons]
            assert len(ids) == len(set(ids))

    def test_get_stage(self):
        stage = catalog.get_stage(Pillar.finance, 1)
        assert stage.id == "step1"
        assert catalog.get_stage(Pillar.finance, 99) is None

    def test_next_lesson_first(self):
        stage, lesson = catalog.next_lesson(Pillar.mental, 1, frozenset())
        assert stage.id == "foundation1"
        assert lesson.title == "The Dopamine Crisis"

    def test_next_lesson_skips_completed(self):
        _, lesson = catalog.next_lesson(Pillar.finance, 1, frozenset({"step1-lesson1", "step1-lesson2"}))
        assert lesson.id == "step1-lesson3"

    def test_next_lesson_stage_finished(self):
        stage = catalog.get_stage(Pillar.nutrition, 1)
        done = frozenset(lesson.id for lesson in stage.lessons)
        assert catalog.next_lesson(Pillar.nutrition, 1, done) is None

    def test_next_lesson_ignores_other_pillar_ids(self):
        # Physical and mental share the "foundation1-lesson1" id
        _, lesson = catalog.next_lesson(Pillar.physical, 1, frozenset())
        assert lesson.title == "What is BMI?"


class TestThresholds:
    def test_names_unique(self):
        names = [t.name for t in THRESHOLDS]
        assert len(names) == len(set(names))

    def test_list_is_copy(self):
        listed = list_thresholds()
        listed.clear()
        assert list_thresholds()

    def test_screen_time_limit_listed(self):
        by_name = {t.name: t for t in list_thresholds()}
        assert by_name["SCREEN_TIME_LIMIT_MINUTES"].value == 180

    def test_insight_constants_listed(self):
        by_name = {t.name: t for t in list_thresholds()}
        assert by_name["WATER_INSIGHT_HOUR"].value == 15
        assert by_name["STARTER_FUND_CRITICAL"].value == 500
