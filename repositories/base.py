"""
Repository interface for stored records.

Services hold a repository instead of reaching for a global store, so the
same service runs against memory (default, tests) or Supabase.
Rows are plain JSON-compatible dicts with an integer "id".
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class Repository(ABC):
    """CRUD over one table of dict rows."""

    table: str

    @abstractmethod
    def list_all(self) -> list[dict[str, Any]]:
        """All rows ordered by id."""

    @abstractmethod
    def get(self, record_id: int) -> Optional[dict[str, Any]]:
        """Row by id, or None."""

    @abstractmethod
    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a row; the repository assigns the id."""

    @abstractmethod
    def update(self, record_id: int, data: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Merge data into a row; None if the row does not exist."""

    @abstractmethod
    def delete(self, record_id: int) -> bool:
        """Remove a row; False if it did not exist."""

    def count(self) -> int:
        return len(self.list_all())
