"""Workshop catalog operations and cascade delete."""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from learnhub.core.exceptions import NotFoundError, StoreFailure
from learnhub.database import tables
from learnhub.modules.workshops.schemas import (
    Difficulty, WorkshopCreate, WorkshopSchedule, WorkshopUpdate
)
from learnhub.modules.workshops.service import WorkshopService


def _create_payload(**overrides):
    data = {
        "title": "Resume Clinic",
        "description": "Bring your resume and leave with a sharper one.",
        "schedule": {"start_date": "2024-05-01T10:00:00Z", "is_open": True},
        "skills_addressed": ["writing", " writing ", "editing", ""],
        "difficulty": "intermediate",
    }
    data.update(overrides)
    return WorkshopCreate(**data)


class TestWorkshopSchemas:
    def test_skills_are_cleaned_in_order(self):
        assert _create_payload().skills_addressed == ["writing", "editing"]

    def test_short_title_rejected(self):
        with pytest.raises(ValidationError):
            _create_payload(title="Hey")

    def test_short_description_rejected(self):
        with pytest.raises(ValidationError):
            _create_payload(description="Too short")

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            WorkshopSchedule(
                start_date=datetime(2024, 5, 2, tzinfo=timezone.utc),
                end_date=datetime(2024, 5, 1, tzinfo=timezone.utc),
            )

    def test_unknown_difficulty_rejected(self):
        with pytest.raises(ValidationError):
            _create_payload(difficulty="expert")


class TestWorkshopService:
    def test_create_and_get(self, store):
        service = WorkshopService(store)
        created = service.create_workshop(_create_payload(), "recruiter-1")

        fetched = service.get_workshop_by_id(created.id)
        assert fetched.creator_id == "recruiter-1"
        assert fetched.difficulty == Difficulty.INTERMEDIATE
        assert fetched.schedule.is_open is True
        assert fetched.schedule.end_date is None
        assert fetched.created_at is not None

    def test_get_unknown(self, store):
        with pytest.raises(NotFoundError):
            WorkshopService(store).get_workshop_by_id("missing")

    def test_list_by_creator_newest_first(self, store, make_workshop):
        make_workshop(title="Older", created_at="2024-01-01T00:00:00+00:00")
        make_workshop(title="Newer", created_at="2024-02-01T00:00:00+00:00")
        make_workshop(creator_id="recruiter-2", title="Someone else's")

        titles = [w.title for w in WorkshopService(store).list_workshops_by_creator("recruiter-1")]
        assert titles == ["Newer", "Older"]

    def test_list_open_excludes_closed(self, store, make_workshop):
        make_workshop(title="Open one")
        make_workshop(title="Closed one", is_open=False)
        titles = [w.title for w in WorkshopService(store).list_open_workshops()]
        assert titles == ["Open one"]

    def test_partial_update(self, store, make_workshop):
        workshop = make_workshop()
        updated = WorkshopService(store).update_workshop(
            workshop["id"],
            WorkshopUpdate(schedule={"start_date": "2024-03-01T09:00:00Z", "is_open": False})
        )
        assert updated.schedule.is_open is False
        assert updated.title == workshop["title"]
        assert updated.updated_at is not None

    def test_update_unknown(self, store):
        with pytest.raises(NotFoundError):
            WorkshopService(store).update_workshop("missing", WorkshopUpdate(title="A new title"))


class TestDeleteWorkshop:
    def test_cascade_removes_children(self, store, make_workshop, make_lesson):
        workshop = make_workshop()
        keep = make_workshop(title="Unrelated workshop")
        lessons = [make_lesson(workshop["id"], order) for order in (1, 2, 3)]
        other_lesson = make_lesson(keep["id"], 1)
        store.seed(tables.REFLECTIONS, id="r1", lesson_id=lessons[0]["id"], learner_id="learner-1")
        store.seed(tables.PROGRESS, id="p1", lesson_id=lessons[0]["id"], reflection_id="r1", learner_id="learner-1")
        store.seed(tables.REGISTRATIONS, id="reg1", workshop_id=workshop["id"], learner_id="learner-1")

        assert WorkshopService(store).delete_workshop(workshop["id"]) is True

        assert store.list(tables.LESSONS, {"workshop_id": workshop["id"]}) == []
        assert store.get(tables.WORKSHOPS, workshop["id"]) is None
        assert store.get(tables.REFLECTIONS, "r1") is None
        assert store.get(tables.PROGRESS, "p1") is None
        assert store.get(tables.REGISTRATIONS, "reg1") is None
        assert store.get(tables.LESSONS, other_lesson["id"]) is not None
        assert store.get(tables.WORKSHOPS, keep["id"]) is not None

    def test_workshop_without_lessons(self, store, make_workshop):
        workshop = make_workshop()
        WorkshopService(store).delete_workshop(workshop["id"])
        assert store.get(tables.WORKSHOPS, workshop["id"]) is None

    def test_failed_lesson_delete_keeps_workshop(self, store, make_workshop, make_lesson):
        workshop = make_workshop()
        make_lesson(workshop["id"], 1)
        make_lesson(workshop["id"], 2)
        store.fail_on("delete", tables.LESSONS)

        with pytest.raises(StoreFailure):
            WorkshopService(store).delete_workshop(workshop["id"])

        assert store.get(tables.WORKSHOPS, workshop["id"]) is not None

    def test_delete_unknown(self, store):
        with pytest.raises(NotFoundError):
            WorkshopService(store).delete_workshop("missing")
