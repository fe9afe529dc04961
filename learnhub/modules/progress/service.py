from collections import defaultdict
from learnhub.core.exceptions import StoreFailure
from learnhub.database import tables
from learnhub.database.document_store import DocumentStore
from learnhub.modules.progress.schemas import ReflectionStatus, ProgressResponse, LeaderboardEntry
from typing import List
import logging

logger = logging.getLogger(__name__)

POINTS_BY_STATUS = {
    ReflectionStatus.PENDING: 0,
    ReflectionStatus.APPROVED: 50,
    ReflectionStatus.REJECTED: -30,
}


class ProgressService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def create_pending(self, lesson_id: str, learner_id: str, reflection_id: str) -> ProgressResponse:
        """Open the 0-point pending record that accompanies a new reflection"""
        record = self.store.insert(
            tables.PROGRESS,
            {
                "lesson_id": lesson_id,
                "learner_id": learner_id,
                "reflection_id": reflection_id,
                "reflection_status": ReflectionStatus.PENDING.value,
                "points": POINTS_BY_STATUS[ReflectionStatus.PENDING],
                "reviewed_by": "",
                "reviewed_at": None,
            },
            timestamp_fields=("created_at",)
        )
        return ProgressResponse(**record)

    def record_review(
        self,
        lesson_id: str,
        learner_id: str,
        reflection_id: str,
        status: ReflectionStatus,
        reviewer_id: str
    ) -> ProgressResponse:
        """
        Set the review outcome on the reflection's progress record.

        An existing record is overwritten in place, so a re-review replaces the
        earlier points instead of adding to them. When the pending record was
        never written, a fresh one is created with the outcome.
        """
        outcome = {
            "reflection_status": status.value,
            "points": POINTS_BY_STATUS[status],
            "reviewed_by": reviewer_id,
        }
        existing = self.store.list(tables.PROGRESS, {"reflection_id": reflection_id})
        if not existing:
            logger.warning(f"No progress record for reflection {reflection_id}; creating one")
            record = self.store.insert(
                tables.PROGRESS,
                {
                    "lesson_id": lesson_id,
                    "learner_id": learner_id,
                    "reflection_id": reflection_id,
                    **outcome,
                },
                timestamp_fields=("created_at", "reviewed_at")
            )
            return ProgressResponse(**record)

        record = self.store.update(
            tables.PROGRESS, existing[0]["id"], outcome, timestamp_fields=("reviewed_at",)
        )
        if not record:
            # Deleted between lookup and update
            raise StoreFailure("record review")
        return ProgressResponse(**record)

    def list_progress_by_learner(self, learner_id: str) -> List[ProgressResponse]:
        try:
            records = self.store.list(
                tables.PROGRESS, {"learner_id": learner_id}, order_by="created_at", desc=True
            )
            return [ProgressResponse(**record) for record in records]
        except Exception as e:
            raise StoreFailure("load progress") from e

    def get_total_points(self, learner_id: str) -> int:
        """Sum of points over every progress record of the learner, pending ones included"""
        try:
            records = self.store.list(tables.PROGRESS, {"learner_id": learner_id})
        except Exception as e:
            raise StoreFailure("load points") from e
        return sum(record.get("points") or 0 for record in records)

    def get_leaderboard(self, limit: int = 10) -> List[LeaderboardEntry]:
        """Per-learner totals over all progress records, highest first"""
        try:
            records = self.store.list(tables.PROGRESS)
        except Exception as e:
            raise StoreFailure("load leaderboard") from e
        totals = defaultdict(int)
        counts = defaultdict(int)
        for record in records:
            totals[record["learner_id"]] += record.get("points") or 0
            counts[record["learner_id"]] += 1
        ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
        return [
            LeaderboardEntry(learner_id=learner_id, total_points=total, reflections=counts[learner_id])
            for learner_id, total in ranked[:limit]
        ]
