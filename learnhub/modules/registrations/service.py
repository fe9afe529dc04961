import uuid
from fastapi import HTTPException
from learnhub.core.exceptions import DuplicateRecordError, StoreFailure, ValidationFailure
from learnhub.database import tables
from learnhub.database.document_store import DocumentStore
from learnhub.modules.registrations.schemas import RegistrationResponse, RegistrationResult
from learnhub.modules.workshops.service import WorkshopService
from typing import List
import logging

logger = logging.getLogger(__name__)

REGISTRATION_NAMESPACE = uuid.UUID("6f1c2a4e-8d0b-5c3e-9a77-2b5d4e1f0c91")


def registration_key(workshop_id: str, learner_id: str) -> str:
    """Deterministic registration id, so concurrent inserts for one pair collide on the primary key"""
    return str(uuid.uuid5(REGISTRATION_NAMESPACE, f"{workshop_id}:{learner_id}"))


class RegistrationService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def _find(self, workshop_id: str, learner_id: str) -> List[dict]:
        return self.store.list(
            tables.REGISTRATIONS, {"workshop_id": workshop_id, "learner_id": learner_id}
        )

    def register_for_workshop(self, workshop_id: str, learner_id: str, learner_name: str) -> RegistrationResult:
        """
        Register a learner for a workshop, at most once.

        An existing registration is returned with already_registered=True and
        nothing is written. Otherwise the workshop must exist and be open.
        """
        try:
            existing = self._find(workshop_id, learner_id)
            if existing:
                logger.info(f"Learner {learner_id} already registered for workshop {workshop_id}")
                return RegistrationResult(id=existing[0]["id"], already_registered=True)

            workshop = WorkshopService(self.store).get_workshop_by_id(workshop_id)
            if not workshop.schedule.is_open:
                raise ValidationFailure("Workshop is not open for registration")

            key = registration_key(workshop_id, learner_id)
            try:
                record = self.store.insert(
                    tables.REGISTRATIONS,
                    {
                        "id": key,
                        "workshop_id": workshop_id,
                        "learner_id": learner_id,
                        "learner_name": learner_name,
                    },
                    timestamp_fields=("registered_at",)
                )
            except DuplicateRecordError:
                logger.info(f"Concurrent registration for workshop {workshop_id} by {learner_id} already landed")
                return RegistrationResult(id=key, already_registered=True)

            logger.info(f"Learner {learner_id} registered for workshop {workshop_id}")
            return RegistrationResult(id=record["id"], already_registered=False)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error registering {learner_id} for workshop {workshop_id}: {e}")
            raise StoreFailure("register for workshop") from e

    def is_registered(self, workshop_id: str, learner_id: str) -> bool:
        try:
            return bool(self._find(workshop_id, learner_id))
        except Exception as e:
            raise StoreFailure("check registration") from e

    def list_registrations_by_learner(self, learner_id: str) -> List[RegistrationResponse]:
        try:
            records = self.store.list(
                tables.REGISTRATIONS, {"learner_id": learner_id}, order_by="registered_at", desc=True
            )
            return [RegistrationResponse(**record) for record in records]
        except Exception as e:
            raise StoreFailure("load registrations") from e

    def list_registrations_by_workshop(self, workshop_id: str) -> List[RegistrationResponse]:
        try:
            records = self.store.list(
                tables.REGISTRATIONS, {"workshop_id": workshop_id}, order_by="registered_at"
            )
            return [RegistrationResponse(**record) for record in records]
        except Exception as e:
            raise StoreFailure("load registrations") from e
