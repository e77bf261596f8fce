"""RecordStore implementation backed by Supabase (PostgREST)."""

import logging

from postgrest.exceptions import APIError
from supabase import AsyncClient

from matrix_todo.errors import StoreError
from matrix_todo.store.base import InsertResult
from matrix_todo.store.client import get_supabase_client

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
_UNIQUE_VIOLATION = "23505"


class SupabaseStore:
    """Thin adapter from the RecordStore contract to supabase-py query builders.

    Every PostgREST failure is re-raised as StoreError, except unique
    violations on ``insert_if_absent`` which become a conflict result.
    """

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    async def find_one(self, collection: str, **filters: object) -> dict | None:
        query = self._client.table(collection).select("*")
        for column, value in filters.items():
            query = query.eq(column, value)
        try:
            response = await query.limit(1).execute()
        except APIError as exc:
            raise StoreError(f"find_one on {collection} failed: {exc.message}") from exc
        return response.data[0] if response.data else None

    async def find_many(self, collection: str, **filters: object) -> list[dict]:
        query = self._client.table(collection).select("*")
        for column, value in filters.items():
            query = query.eq(column, value)
        try:
            response = await query.execute()
        except APIError as exc:
            raise StoreError(f"find_many on {collection} failed: {exc.message}") from exc
        return list(response.data or [])

    async def insert_if_absent(self, collection: str, row: dict) -> InsertResult:
        try:
            response = await self._client.table(collection).insert(row).execute()
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                logger.info("Insert into %s hit a uniqueness constraint", collection)
                return InsertResult(conflict=True)
            raise StoreError(f"insert into {collection} failed: {exc.message}") from exc
        return InsertResult(row=response.data[0] if response.data else None)

    async def create_returning(self, collection: str, row: dict) -> dict:
        try:
            response = await self._client.table(collection).insert(row).execute()
        except APIError as exc:
            raise StoreError(f"insert into {collection} failed: {exc.message}") from exc
        if not response.data:
            raise StoreError(f"insert into {collection} returned no row")
        return response.data[0]

    async def update(
        self, collection: str, record_id: str, values: dict, **expected: object
    ) -> dict | None:
        query = self._client.table(collection).update(values).eq("id", record_id)
        for column, value in expected.items():
            query = query.is_(column, "null") if value is None else query.eq(column, value)
        try:
            response = await query.execute()
        except APIError as exc:
            raise StoreError(f"update of {collection}/{record_id} failed: {exc.message}") from exc
        return response.data[0] if response.data else None

    async def upsert(self, collection: str, row: dict, on_conflict: str) -> dict:
        try:
            response = await (
                self._client.table(collection).upsert(row, on_conflict=on_conflict).execute()
            )
        except APIError as exc:
            raise StoreError(f"upsert into {collection} failed: {exc.message}") from exc
        if not response.data:
            raise StoreError(f"upsert into {collection} returned no row")
        return response.data[0]


async def get_store() -> SupabaseStore:
    """FastAPI dependency returning a store bound to the shared Supabase client."""
    return SupabaseStore(await get_supabase_client())
