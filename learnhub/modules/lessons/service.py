from fastapi import HTTPException
from learnhub.core.exceptions import NotFoundError, StoreFailure
from learnhub.database import tables
from learnhub.database.document_store import DocumentStore
from learnhub.modules.lessons.schemas import LessonCreate, LessonUpdate, LessonResponse, MoveDirection
from typing import List
import logging

logger = logging.getLogger(__name__)


class LessonService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def _list_records(self, workshop_id: str) -> List[dict]:
        return self.store.list(tables.LESSONS, {"workshop_id": workshop_id}, order_by="order")

    def create_lesson(self, workshop_id: str, lesson_data: LessonCreate) -> LessonResponse:
        """Append a lesson to the end of the workshop's order."""
        try:
            siblings = self._list_records(workshop_id)
            next_order = max((s.get("order") or 0 for s in siblings), default=0) + 1
            insert_data = {
                "workshop_id": workshop_id,
                "title": lesson_data.title,
                "content": lesson_data.content,
                "content_uri": lesson_data.content_uri,
                "requires_reflection": lesson_data.requires_reflection,
                "estimated_duration": lesson_data.estimated_duration,
                "order": next_order,
            }
            record = self.store.insert(tables.LESSONS, insert_data)
            return LessonResponse(**record)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating lesson in workshop {workshop_id}: {e}")
            raise StoreFailure("create lesson") from e

    def get_lesson_by_id(self, lesson_id: str) -> LessonResponse:
        """Get lesson by ID"""
        try:
            record = self.store.get(tables.LESSONS, lesson_id)
        except Exception as e:
            raise StoreFailure("load lesson") from e
        if not record:
            raise NotFoundError("Lesson")
        return LessonResponse(**record)

    def list_lessons_by_workshop(self, workshop_id: str) -> List[LessonResponse]:
        """Lessons of a workshop, ascending by order"""
        try:
            return [LessonResponse(**record) for record in self._list_records(workshop_id)]
        except Exception as e:
            raise StoreFailure("load lessons") from e

    def update_lesson(self, lesson_id: str, lesson_data: LessonUpdate) -> LessonResponse:
        """Update lesson fields; order is only changed by move/delete"""
        try:
            update_data = lesson_data.model_dump(exclude_unset=True)
            if not update_data:
                return self.get_lesson_by_id(lesson_id)
            record = self.store.update(tables.LESSONS, lesson_id, update_data)
            if not record:
                raise NotFoundError("Lesson")
            return LessonResponse(**record)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating lesson {lesson_id}: {e}")
            raise StoreFailure("update lesson") from e

    def move_lesson(self, lesson_id: str, direction: MoveDirection) -> List[LessonResponse]:
        """
        Swap a lesson with its neighbour in the requested direction.

        Moving the first lesson up or the last lesson down is a no-op. Otherwise
        exactly two lessons are written, each taking its new 1-based position as
        its order. The two updates are independent: if the second fails the
        first stays applied. Returns the workshop's lessons in their new order.
        """
        lesson = self.get_lesson_by_id(lesson_id)
        try:
            lessons = [LessonResponse(**record) for record in self._list_records(lesson.workshop_id)]
            index = next(i for i, item in enumerate(lessons) if item.id == lesson_id)
            swap_index = index - 1 if direction == MoveDirection.UP else index + 1
            if swap_index < 0 or swap_index >= len(lessons):
                logger.info(f"Lesson {lesson_id} already at the {direction.value} boundary; nothing to move")
                return lessons

            lessons[index], lessons[swap_index] = lessons[swap_index], lessons[index]
            for position in (index, swap_index):
                lessons[position].order = position + 1
                self.store.update(tables.LESSONS, lessons[position].id, {"order": position + 1})
            logger.info(f"Moved lesson {lesson_id} {direction.value} to position {swap_index + 1}")
            return lessons
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error moving lesson {lesson_id} {direction.value}: {e}")
            raise StoreFailure("reorder lessons") from e

    def renumber_lessons(self, workshop_id: str) -> int:
        """Close gaps so orders read 1..N again. Returns how many lessons were rewritten."""
        updated = 0
        for position, record in enumerate(self._list_records(workshop_id), start=1):
            if record.get("order") != position:
                self.store.update(tables.LESSONS, record["id"], {"order": position})
                updated += 1
        if updated:
            logger.info(f"Renumbered {updated} lessons in workshop {workshop_id}")
        return updated

    def purge_lesson(self, lesson_id: str) -> bool:
        """Delete the reflections and progress records of a lesson, then the lesson itself"""
        for table in (tables.REFLECTIONS, tables.PROGRESS):
            for record in self.store.list(table, {"lesson_id": lesson_id}):
                self.store.delete(table, record["id"])
        return self.store.delete(tables.LESSONS, lesson_id)

    def delete_lesson(self, lesson_id: str) -> bool:
        """Delete a lesson with its reflections/progress and renumber the remaining lessons"""
        lesson = self.get_lesson_by_id(lesson_id)
        try:
            deleted = self.purge_lesson(lesson_id)
            self.renumber_lessons(lesson.workshop_id)
            return deleted
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting lesson {lesson_id}: {e}")
            raise StoreFailure("delete lesson") from e
