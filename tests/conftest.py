"""Pytest configuration and shared fixtures."""
import os
import threading
import uuid
from datetime import datetime, timedelta, timezone

import pytest

# Settings are read at import time; keep the suite off any real Supabase project
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("RATE_LIMIT", "10000/minute")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from learnhub.core.exceptions import DocumentStoreError, DuplicateRecordError
from learnhub.database import tables
from learnhub.database.document_store import DocumentStore
from learnhub.modules.users.schemas import UserProfile, UserRole


class InMemoryDocumentStore(DocumentStore):
    """DocumentStore double keeping tables as dicts of records.

    Timestamps come from a fake clock that advances one second per stamp, so
    ordering by created_at/submitted_at is deterministic. ``fail_on`` makes
    the n-th matching call (0-based, counted from when it is armed) raise.
    """

    def __init__(self):
        super().__init__(client=None)
        self.tables = {}
        self.calls = []
        self._failures = {}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._lock = threading.Lock()

    def fail_on(self, operation, table, after=0):
        self._failures[(operation, table)] = after

    def _record_call(self, operation, table):
        self.calls.append((operation, table))
        key = (operation, table)
        if key in self._failures:
            if self._failures[key] == 0:
                del self._failures[key]
                raise DocumentStoreError(operation, table, RuntimeError("injected failure"))
            self._failures[key] -= 1

    def count(self, operation, table):
        return sum(1 for call in self.calls if call == (operation, table))

    def _stamp(self, data, timestamp_fields):
        payload = dict(data)
        for field in timestamp_fields:
            self._clock += timedelta(seconds=1)
            payload[field] = self._clock.isoformat()
        return payload

    def _table(self, table):
        return self.tables.setdefault(table, {})

    def seed(self, table, **fields):
        record = dict(fields)
        record.setdefault("id", str(uuid.uuid4()))
        self._table(table)[record["id"]] = record
        return dict(record)

    def get(self, table, record_id):
        with self._lock:
            self._record_call("get", table)
            record = self._table(table).get(record_id)
            return dict(record) if record else None

    def list(self, table, filters=None, order_by=None, desc=False):
        with self._lock:
            self._record_call("list", table)
            records = [
                dict(r) for r in self._table(table).values()
                if all(r.get(field) == value for field, value in (filters or {}).items())
            ]
        if order_by:
            records.sort(key=lambda r: (r.get(order_by) is None, r.get(order_by)), reverse=desc)
        return records

    def insert(self, table, data, timestamp_fields=("created_at", "updated_at")):
        with self._lock:
            self._record_call("insert", table)
            record = self._stamp(data, timestamp_fields)
            record.setdefault("id", str(uuid.uuid4()))
            if record["id"] in self._table(table):
                raise DuplicateRecordError("insert", table)
            self._table(table)[record["id"]] = record
            return dict(record)

    def update(self, table, record_id, data, timestamp_fields=("updated_at",)):
        with self._lock:
            self._record_call("update", table)
            record = self._table(table).get(record_id)
            if record is None:
                return None
            record.update(self._stamp(data, timestamp_fields))
            return dict(record)

    def delete(self, table, record_id):
        with self._lock:
            self._record_call("delete", table)
            return self._table(table).pop(record_id, None) is not None


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def recruiter(store):
    store.seed(tables.USERS, id="recruiter-1", name="Rita Recruiter", email="rita@example.com",
               role="recruiter", plan_type="free")
    return UserProfile(id="recruiter-1", name="Rita Recruiter", email="rita@example.com",
                       role=UserRole.RECRUITER, plan_type="free")


@pytest.fixture
def other_recruiter():
    return UserProfile(id="recruiter-2", name="Omar Other", email="omar@example.com",
                       role=UserRole.RECRUITER)


@pytest.fixture
def learner(store):
    store.seed(tables.USERS, id="learner-1", name="Lee Learner", email="lee@example.com",
               role="job_seeker", plan_type="free")
    return UserProfile(id="learner-1", name="Lee Learner", email="lee@example.com",
                       role=UserRole.JOB_SEEKER, plan_type="free")


@pytest.fixture
def make_workshop(store):
    def _make(creator_id="recruiter-1", title="Intro to Interviews", is_open=True, **overrides):
        fields = {
            "title": title,
            "description": "Practice behavioural interview questions together.",
            "creator_id": creator_id,
            "schedule": {"start_date": "2024-03-01T09:00:00+00:00", "end_date": None, "is_open": is_open},
            "skills_addressed": ["communication"],
            "difficulty": "beginner",
            "created_at": "2024-01-01T00:00:00+00:00",
        }
        fields.update(overrides)
        return store.seed(tables.WORKSHOPS, **fields)
    return _make


@pytest.fixture
def make_lesson(store):
    def _make(workshop_id, order, title=None, requires_reflection=True, **overrides):
        fields = {
            "workshop_id": workshop_id,
            "title": title or f"Lesson {order}",
            "content": "Read the material and think about how it applies to you.",
            "content_uri": None,
            "requires_reflection": requires_reflection,
            "order": order,
            "estimated_duration": 15,
        }
        fields.update(overrides)
        return store.seed(tables.LESSONS, **fields)
    return _make
