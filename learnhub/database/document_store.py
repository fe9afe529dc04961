"""
Generic CRUD access to Supabase tables.

Services never touch the query builder directly; they go through
DocumentStore, which exposes get-by-id, equality-filtered listing with a
single order-by field, insert and partial update with server-side
timestamps, and delete-by-id. Records travel as plain dicts with an "id".
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
import logging

from fastapi import Depends
from supabase import Client

from learnhub.config.settings import settings
from learnhub.core.exceptions import DocumentStoreError, DuplicateRecordError
from learnhub.database.supabase_client import get_supabase

logger = logging.getLogger(__name__)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class DocumentStore:
    def __init__(self, client: Client, page_size: int = 1000):
        self.client = client
        self.page_size = page_size

    def _stamp(self, data: Dict[str, Any], timestamp_fields: Iterable[str]) -> Dict[str, Any]:
        payload = dict(data)
        now = utc_now()
        for field in timestamp_fields:
            payload[field] = now
        return payload

    def get(self, table: str, record_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one record by id; None when it does not exist."""
        try:
            result = self.client.table(table)\
                .select("*")\
                .eq("id", record_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching {table}/{record_id}: {e}")
            raise DocumentStoreError("get", table, e) from e
        # maybe_single() yields no response object at all on some SDK versions
        if result is None or not result.data:
            return None
        return result.data

    def list(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        desc: bool = False
    ) -> List[Dict[str, Any]]:
        """
        List records matching every equality filter, optionally ordered by one field.

        PostgREST caps each response at its max-rows setting, so records are
        fetched page by page until a short page comes back. Pages are ordered
        by id after order_by so that no record is skipped or repeated.
        """
        records: List[Dict[str, Any]] = []
        start = 0
        while True:
            try:
                query = self.client.table(table).select("*")
                for field, value in (filters or {}).items():
                    query = query.eq(field, value)
                if order_by:
                    query = query.order(order_by, desc=desc)
                if order_by != "id":
                    query = query.order("id")
                result = query.range(start, start + self.page_size - 1).execute()
            except Exception as e:
                logger.error(f"Error listing {table} with filters {filters}: {e}")
                raise DocumentStoreError("list", table, e) from e
            page = result.data or []
            records.extend(page)
            if len(page) < self.page_size:
                return records
            start += self.page_size

    def insert(
        self,
        table: str,
        data: Dict[str, Any],
        timestamp_fields: Iterable[str] = ("created_at", "updated_at")
    ) -> Dict[str, Any]:
        """Insert a record, stamping timestamp_fields, and return it as stored."""
        payload = self._stamp(data, timestamp_fields)
        try:
            result = self.client.table(table).insert(payload).execute()
        except Exception as e:
            if getattr(e, "code", None) == UNIQUE_VIOLATION:
                logger.info(f"Duplicate key inserting into {table}: {e}")
                raise DuplicateRecordError("insert", table, e) from e
            logger.error(f"Error inserting into {table}: {e}")
            raise DocumentStoreError("insert", table, e) from e
        if not result.data:
            logger.error(f"Insert into {table} returned no rows")
            raise DocumentStoreError("insert", table)
        return result.data[0]

    def update(
        self,
        table: str,
        record_id: str,
        data: Dict[str, Any],
        timestamp_fields: Iterable[str] = ("updated_at",)
    ) -> Optional[Dict[str, Any]]:
        """Partially update a record; None when no record has that id."""
        payload = self._stamp(data, timestamp_fields)
        try:
            result = self.client.table(table)\
                .update(payload)\
                .eq("id", record_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating {table}/{record_id}: {e}")
            raise DocumentStoreError("update", table, e) from e
        if not result.data:
            return None
        return result.data[0]

    def delete(self, table: str, record_id: str) -> bool:
        try:
            result = self.client.table(table)\
                .delete()\
                .eq("id", record_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting {table}/{record_id}: {e}")
            raise DocumentStoreError("delete", table, e) from e
        return bool(result.data)


def get_document_store(supabase: Client = Depends(get_supabase)) -> DocumentStore:
    return DocumentStore(supabase, page_size=settings.store_page_size)
