"""Persistence store adapter over Supabase tables.

Every collection is a table with a ``user_id`` column; all calls are
scoped to one user. Client errors propagate to the caller unchanged.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Depends
from supabase import Client

from apps.api.core.auth import get_user_client

COLLECTIONS = ("transactions", "debts", "budgets", "categories", "income")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupabaseStore:
    """CRUD over the per-user collections."""

    def __init__(self, client: Client):
        self.client = client

    def _table(self, collection: str):
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection '{collection}'")
        return self.client.table(collection)

    def create(self, collection: str, user_id: str, record: dict) -> str:
        row = {**record, "user_id": user_id, "created_at": _now()}
        response = self._table(collection).insert(row).execute()
        return str(response.data[0]["id"])

    def list_records(
        self, collection: str, user_id: str, order_by: Optional[str] = None
    ) -> list[dict[str, Any]]:
        query = self._table(collection).select("*").eq("user_id", user_id)
        if order_by:
            query = query.order(order_by, desc=True)
        return query.execute().data or []

    def update(self, collection: str, user_id: str, record_id: str, changes: dict) -> None:
        data = {**changes, "updated_at": _now()}
        (
            self._table(collection)
            .update(data)
            .eq("id", record_id)
            .eq("user_id", user_id)
            .execute()
        )

    def delete(self, collection: str, user_id: str, record_id: str) -> None:
        self._table(collection).delete().eq("id", record_id).eq("user_id", user_id).execute()

    def save_transactions(self, user_id: str, records: list[dict]) -> list[str]:
        """Insert a batch of transaction records, returning the new ids."""
        if not records:
            return []
        created_at = _now()
        rows = [{**r, "user_id": user_id, "created_at": created_at} for r in records]
        response = self._table("transactions").insert(rows).execute()
        return [str(row["id"]) for row in response.data]

    def list_transactions(self, user_id: str) -> list[dict[str, Any]]:
        """All of the user's transactions, newest first."""
        return self.list_records("transactions", user_id, order_by="date")


def get_store(client: Client = Depends(get_user_client)) -> SupabaseStore:
    return SupabaseStore(client)
