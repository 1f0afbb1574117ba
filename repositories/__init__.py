"""
Storage repositories.

get_repository(table) returns the process-wide repository for a table,
backed by memory or Supabase according to STORAGE_BACKEND.
"""

from typing import Optional
import structlog

from config import settings, get_supabase_client
from repositories.base import Repository
from repositories.memory import InMemoryRepository
from repositories.supabase import SupabaseRepository
from repositories.seed import SEED_BUSINESSES, SEED_ITEMS

logger = structlog.get_logger(__name__)

BUSINESSES_TABLE = "negocios"
ITEMS_TABLE = "items"

_SEEDS = {
    BUSINESSES_TABLE: SEED_BUSINESSES,
    ITEMS_TABLE: SEED_ITEMS,
}

_repositories: dict[str, Repository] = {}


def get_repository(table: str, backend: Optional[str] = None) -> Repository:
    """
    Get or create the repository for a table.

    Args:
        table: Table name (negocios, items)
        backend: Override STORAGE_BACKEND (memory, supabase)

    Returns:
        Repository shared by every service in the process
    """
    if table in _repositories:
        return _repositories[table]

    backend = backend or settings.storage_backend
    if backend == "supabase":
        repository: Repository = SupabaseRepository(get_supabase_client(), table)
    else:
        repository = InMemoryRepository(table, _SEEDS.get(table, []))

    logger.info("repository_created", table=table, backend=backend)
    _repositories[table] = repository
    return repository


def reset_repositories() -> None:
    """Drop cached repositories (memory data is reseeded on next access)."""
    _repositories.clear()


__all__ = [
    "Repository",
    "InMemoryRepository",
    "SupabaseRepository",
    "get_repository",
    "reset_repositories",
    "BUSINESSES_TABLE",
    "ITEMS_TABLE",
]
