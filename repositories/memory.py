"""
In-memory repository.

Default storage backend. Data lives as long as the process.
"""

import copy
from typing import Any, Iterable, Optional
import structlog

from repositories.base import Repository

logger = structlog.get_logger(__name__)


class InMemoryRepository(Repository):
    """
    Dict rows kept in insertion order.

    Rows are copied in and out so callers never share state with the store.
    """

    def __init__(self, table: str, rows: Optional[Iterable[dict[str, Any]]] = None):
        self.table = table
        self._rows: dict[int, dict[str, Any]] = {}
        for row in rows or []:
            self._rows[int(row["id"])] = copy.deepcopy(row)

    def _next_id(self) -> int:
        return max(self._rows, default=0) + 1

    def list_all(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(row) for _, row in sorted(self._rows.items())]

    def get(self, record_id: int) -> Optional[dict[str, Any]]:
        row = self._rows.get(record_id)
        return copy.deepcopy(row) if row is not None else None

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        row = copy.deepcopy(data)
        row["id"] = self._next_id()
        self._rows[row["id"]] = row

        logger.debug("memory_row_created", table=self.table, id=row["id"])
        return copy.deepcopy(row)

    def update(self, record_id: int, data: dict[str, Any]) -> Optional[dict[str, Any]]:
        row = self._rows.get(record_id)
        if row is None:
            return None

        row.update(copy.deepcopy(data))
        row["id"] = record_id
        return copy.deepcopy(row)

    def delete(self, record_id: int) -> bool:
        return self._rows.pop(record_id, None) is not None

    def count(self) -> int:
        return len(self._rows)
