"""
Supabase-backed repository.

Used when STORAGE_BACKEND=supabase. Tables are expected to have an
integer identity "id" column.
"""

from typing import Any, Optional
import structlog
from supabase import Client

from exceptions import DatabaseError
from repositories.base import Repository

logger = structlog.get_logger(__name__)


class SupabaseRepository(Repository):
    """CRUD over one Supabase table."""

    def __init__(self, client: Client, table: str):
        self.db = client
        self.table = table

    def list_all(self) -> list[dict[str, Any]]:
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("id")
                .execute()
            )
            return result.data

        except Exception as e:
            logger.error("supabase_select_failed", table=self.table, error=str(e))
            raise DatabaseError("select", str(e))

    def get(self, record_id: int) -> Optional[dict[str, Any]]:
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", record_id)
                .execute()
            )

            if not result.data:
                return None

            return result.data[0]

        except Exception as e:
            logger.error(
                "supabase_get_failed",
                table=self.table,
                id=record_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        try:
            insert_data = {k: v for k, v in data.items() if k != "id"}
            result = (
                self.db.table(self.table)
                .insert(insert_data)
                .execute()
            )
            return result.data[0]

        except Exception as e:
            logger.error("supabase_insert_failed", table=self.table, error=str(e))
            raise DatabaseError("insert", str(e))

    def update(self, record_id: int, data: dict[str, Any]) -> Optional[dict[str, Any]]:
        try:
            update_data = {k: v for k, v in data.items() if k != "id"}
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", record_id)
                .execute()
            )

            if not result.data:
                return None

            return result.data[0]

        except Exception as e:
            logger.error(
                "supabase_update_failed",
                table=self.table,
                id=record_id,
                error=str(e)
            )
            raise DatabaseError("update", str(e))

    def delete(self, record_id: int) -> bool:
        try:
            result = (
                self.db.table(self.table)
                .delete()
                .eq("id", record_id)
                .execute()
            )
            return bool(result.data)

        except Exception as e:
            logger.error(
                "supabase_delete_failed",
                table=self.table,
                id=record_id,
                error=str(e)
            )
            raise DatabaseError("delete", str(e))

    def count(self) -> int:
        try:
            result = self.db.table(self.table).select("id", count="exact").execute()
            return result.count or 0
        except Exception as e:
            logger.error("supabase_count_failed", table=self.table, error=str(e))
            raise DatabaseError("count", str(e))
