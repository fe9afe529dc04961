from fastapi import HTTPException
from learnhub.core.exceptions import NotFoundError, StoreFailure, ValidationFailure
from learnhub.database import tables
from learnhub.database.document_store import DocumentStore
from learnhub.modules.lessons.service import LessonService
from learnhub.modules.progress.schemas import ReflectionStatus, ProgressResponse
from learnhub.modules.progress.service import ProgressService
from learnhub.modules.reflections.schemas import (
    MIN_REFLECTION_LENGTH, ReviewDecision, ReflectionResponse, ReflectionSubmission
)
from typing import List, Union
import logging

logger = logging.getLogger(__name__)


class ReflectionService:
    def __init__(self, store: DocumentStore):
        self.store = store
        self.progress = ProgressService(store)

    def submit_reflection(
        self, lesson_id: str, learner_id: str, content: str, learner_name: str
    ) -> ReflectionSubmission:
        """
        Store a learner's reflection and open its pending progress record.

        The two inserts are independent. If the progress insert fails the
        reflection stays without one; review_reflection creates it later.
        """
        if content is None or len(content.strip()) < MIN_REFLECTION_LENGTH:
            raise ValidationFailure(f"Reflection must be at least {MIN_REFLECTION_LENGTH} characters")

        lesson = LessonService(self.store).get_lesson_by_id(lesson_id)
        if not lesson.requires_reflection:
            raise ValidationFailure("This lesson does not take reflections")

        try:
            record = self.store.insert(
                tables.REFLECTIONS,
                {
                    "lesson_id": lesson_id,
                    "learner_id": learner_id,
                    "learner_name": learner_name,
                    "content": content,
                    "reviewed": False,
                },
                timestamp_fields=("submitted_at",)
            )
            reflection = ReflectionResponse(**record)
            logger.info(f"Reflection {reflection.id} submitted by {learner_id} for lesson {lesson_id}")

            progress = self.progress.create_pending(lesson_id, learner_id, reflection.id)
            return ReflectionSubmission(reflection=reflection, progress=progress)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error submitting reflection for lesson {lesson_id} by {learner_id}: {e}")
            raise StoreFailure("submit reflection") from e

    def get_reflection_by_id(self, reflection_id: str) -> ReflectionResponse:
        try:
            record = self.store.get(tables.REFLECTIONS, reflection_id)
        except Exception as e:
            raise StoreFailure("load reflection") from e
        if not record:
            raise NotFoundError("Reflection")
        return ReflectionResponse(**record)

    def list_reflections_by_lesson(self, lesson_id: str) -> List[ReflectionResponse]:
        try:
            records = self.store.list(
                tables.REFLECTIONS, {"lesson_id": lesson_id}, order_by="submitted_at", desc=True
            )
            return [ReflectionResponse(**record) for record in records]
        except Exception as e:
            raise StoreFailure("load reflections") from e

    def list_reflections_by_learner(self, learner_id: str) -> List[ReflectionResponse]:
        try:
            records = self.store.list(
                tables.REFLECTIONS, {"learner_id": learner_id}, order_by="submitted_at", desc=True
            )
            return [ReflectionResponse(**record) for record in records]
        except Exception as e:
            raise StoreFailure("load reflections") from e

    def review_reflection(
        self, reflection_id: str, decision: Union[ReviewDecision, str], reviewer_id: str
    ) -> ProgressResponse:
        """
        Approve (+50) or reject (-30) a reflection.

        The reflection is flagged reviewed, then its progress record takes the
        decision's status and points, replacing whatever an earlier review set.
        No lock is taken: concurrent reviews of one reflection end with the
        last write.
        """
        try:
            decision = ReviewDecision(decision)
        except ValueError:
            raise ValidationFailure(f"Invalid review decision: {decision}")

        reflection = self.get_reflection_by_id(reflection_id)
        try:
            self.store.update(tables.REFLECTIONS, reflection_id, {"reviewed": True}, timestamp_fields=())
            progress = self.progress.record_review(
                lesson_id=reflection.lesson_id,
                learner_id=reflection.learner_id,
                reflection_id=reflection_id,
                status=ReflectionStatus(decision.value),
                reviewer_id=reviewer_id,
            )
            logger.info(
                f"Reflection {reflection_id} {decision.value} by {reviewer_id} "
                f"({progress.points:+d} points for {reflection.learner_id})"
            )
            return progress
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error reviewing reflection {reflection_id}: {e}")
            raise StoreFailure("review reflection") from e
