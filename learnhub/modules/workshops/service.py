from concurrent.futures import ThreadPoolExecutor
from fastapi import HTTPException
from learnhub.config.settings import settings
from learnhub.core.exceptions import NotFoundError, StoreFailure
from learnhub.database import tables
from learnhub.database.document_store import DocumentStore
from learnhub.modules.lessons.service import LessonService
from learnhub.modules.workshops.schemas import WorkshopCreate, WorkshopUpdate, WorkshopResponse
from typing import List
import logging

logger = logging.getLogger(__name__)


class WorkshopService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def create_workshop(self, workshop_data: WorkshopCreate, creator_id: str) -> WorkshopResponse:
        """Create a new workshop owned by creator_id"""
        try:
            insert_data = {
                "title": workshop_data.title,
                "description": workshop_data.description,
                "creator_id": creator_id,
                "schedule": workshop_data.schedule.model_dump(mode="json"),
                "skills_addressed": workshop_data.skills_addressed,
                "difficulty": workshop_data.difficulty.value,
            }
            record = self.store.insert(tables.WORKSHOPS, insert_data)
            logger.info(f"Workshop {record['id']} created by {creator_id}")
            return WorkshopResponse(**record)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating workshop: {e}")
            raise StoreFailure("create workshop") from e

    def get_workshop_by_id(self, workshop_id: str) -> WorkshopResponse:
        """Get workshop by ID"""
        try:
            record = self.store.get(tables.WORKSHOPS, workshop_id)
        except Exception as e:
            raise StoreFailure("load workshop") from e
        if not record:
            raise NotFoundError("Workshop")
        return WorkshopResponse(**record)

    def list_workshops(self) -> List[WorkshopResponse]:
        """All workshops, newest first"""
        try:
            records = self.store.list(tables.WORKSHOPS, order_by="created_at", desc=True)
            return [WorkshopResponse(**record) for record in records]
        except Exception as e:
            raise StoreFailure("load workshops") from e

    def list_workshops_by_creator(self, creator_id: str) -> List[WorkshopResponse]:
        """Workshops created by one recruiter, newest first"""
        try:
            records = self.store.list(
                tables.WORKSHOPS, {"creator_id": creator_id}, order_by="created_at", desc=True
            )
            return [WorkshopResponse(**record) for record in records]
        except Exception as e:
            raise StoreFailure("load workshops") from e

    def list_open_workshops(self) -> List[WorkshopResponse]:
        # is_open lives inside the schedule document, so it is filtered here
        return [w for w in self.list_workshops() if w.schedule.is_open]

    def update_workshop(self, workshop_id: str, workshop_data: WorkshopUpdate) -> WorkshopResponse:
        """Update workshop; only fields present in the request are written"""
        try:
            update_data = workshop_data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
            if not update_data:
                return self.get_workshop_by_id(workshop_id)
            if workshop_data.schedule is not None:
                # schedule is one document; write it whole
                update_data["schedule"] = workshop_data.schedule.model_dump(mode="json")
            record = self.store.update(tables.WORKSHOPS, workshop_id, update_data)
            if not record:
                raise NotFoundError("Workshop")
            return WorkshopResponse(**record)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating workshop {workshop_id}: {e}")
            raise StoreFailure("update workshop") from e

    def delete_workshop(self, workshop_id: str) -> bool:
        """
        Delete a workshop and everything hanging off it.

        Lessons (each with its reflections and progress) are deleted in parallel,
        then registrations, then the workshop itself. Nothing is rolled back if a
        delete fails part way; the remaining steps are skipped.
        """
        self.get_workshop_by_id(workshop_id)
        lesson_service = LessonService(self.store)
        try:
            lesson_ids = [record["id"] for record in self.store.list(tables.LESSONS, {"workshop_id": workshop_id})]
            if lesson_ids:
                with ThreadPoolExecutor(max_workers=max(1, settings.delete_concurrency)) as pool:
                    list(pool.map(lesson_service.purge_lesson, lesson_ids))

            for registration in self.store.list(tables.REGISTRATIONS, {"workshop_id": workshop_id}):
                self.store.delete(tables.REGISTRATIONS, registration["id"])

            deleted = self.store.delete(tables.WORKSHOPS, workshop_id)
            logger.info(f"Workshop {workshop_id} deleted with {len(lesson_ids)} lessons")
            return deleted
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting workshop {workshop_id}: {e}")
            raise StoreFailure("delete workshop") from e
