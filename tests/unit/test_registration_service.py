"""Registration is idempotent per (workshop, learner)."""
import pytest

from learnhub.core.exceptions import DuplicateRecordError, NotFoundError, StoreFailure, ValidationFailure
from learnhub.database import tables
from learnhub.modules.registrations.service import RegistrationService, registration_key


class TestRegisterForWorkshop:
    def test_first_registration_inserts(self, store, make_workshop):
        workshop = make_workshop()
        result = RegistrationService(store).register_for_workshop(workshop["id"], "learner-1", "Lee")

        assert result.already_registered is False
        assert result.id == registration_key(workshop["id"], "learner-1")
        record = store.get(tables.REGISTRATIONS, result.id)
        assert record["learner_name"] == "Lee"
        assert record["registered_at"] is not None

    def test_second_registration_returns_same_id_without_insert(self, store, make_workshop):
        workshop = make_workshop()
        service = RegistrationService(store)

        first = service.register_for_workshop(workshop["id"], "learner-1", "Lee")
        second = service.register_for_workshop(workshop["id"], "learner-1", "Lee")

        assert second.id == first.id
        assert second.already_registered is True
        assert store.count("insert", tables.REGISTRATIONS) == 1

    def test_legacy_registration_is_found_by_lookup(self, store, make_workshop):
        workshop = make_workshop()
        store.seed(tables.REGISTRATIONS, id="legacy-id", workshop_id=workshop["id"],
                   learner_id="learner-1", learner_name="Lee")

        result = RegistrationService(store).register_for_workshop(workshop["id"], "learner-1", "Lee")

        assert result.id == "legacy-id"
        assert result.already_registered is True

    def test_concurrent_insert_collision_counts_as_registered(self, store, make_workshop, monkeypatch):
        workshop = make_workshop()

        def collide(*args, **kwargs):
            raise DuplicateRecordError("insert", tables.REGISTRATIONS)

        monkeypatch.setattr(store, "insert", collide)
        result = RegistrationService(store).register_for_workshop(workshop["id"], "learner-1", "Lee")

        assert result.already_registered is True
        assert result.id == registration_key(workshop["id"], "learner-1")

    def test_same_learner_other_workshop(self, store, make_workshop):
        first = make_workshop(title="Workshop One")
        second = make_workshop(title="Workshop Two")
        service = RegistrationService(store)

        a = service.register_for_workshop(first["id"], "learner-1", "Lee")
        b = service.register_for_workshop(second["id"], "learner-1", "Lee")

        assert a.id != b.id
        assert not b.already_registered
        assert len(service.list_registrations_by_learner("learner-1")) == 2

    def test_closed_workshop(self, store, make_workshop):
        workshop = make_workshop(is_open=False)
        with pytest.raises(ValidationFailure):
            RegistrationService(store).register_for_workshop(workshop["id"], "learner-1", "Lee")
        assert store.count("insert", tables.REGISTRATIONS) == 0

    def test_unknown_workshop(self, store):
        with pytest.raises(NotFoundError):
            RegistrationService(store).register_for_workshop("missing", "learner-1", "Lee")

    def test_store_failure(self, store, make_workshop):
        workshop = make_workshop()
        store.fail_on("list", tables.REGISTRATIONS)
        with pytest.raises(StoreFailure) as exc_info:
            RegistrationService(store).register_for_workshop(workshop["id"], "learner-1", "Lee")
        assert exc_info.value.detail == "Failed to register for workshop. Please try again."


def test_registration_key_is_stable():
    assert registration_key("w1", "l1") == registration_key("w1", "l1")
    assert registration_key("w1", "l1") != registration_key("w1", "l2")
    assert registration_key("w1", "l1") != registration_key("l1", "w1")
