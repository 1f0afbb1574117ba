"""
Best-effort local key/value storage.

Small JSON file standing in for the browser's localStorage. Holds the
webhook registry and the jobs database configuration.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union
import structlog

from config.settings import settings

logger = structlog.get_logger(__name__)


class LocalStorage:
    """
    JSON-file backed key/value store.

    Values are loaded lazily on first access and written back on every
    change. A missing or unreadable file is treated as empty; a failed
    write is logged and the value stays in memory.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._data: Optional[dict[str, Any]] = None

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data

        self._data = {}
        if not self.path.exists():
            return self._data

        try:
            content = json.loads(self.path.read_text(encoding="utf-8"))
            if isinstance(content, dict):
                self._data = content
            else:
                logger.warning("local_storage_invalid_root", path=str(self.path))
        except (OSError, ValueError) as e:
            logger.warning(
                "local_storage_read_failed",
                path=str(self.path),
                error=str(e)
            )

        return self._data

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(self._data, ensure_ascii=False, indent=2),
                encoding="utf-8"
            )
        except OSError as e:
            logger.error(
                "local_storage_write_failed",
                path=str(self.path),
                error=str(e)
            )

    def get_item(self, key: str, default: Any = None) -> Any:
        """Get a stored value, or default if missing."""
        return self._load().get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value."""
        self._load()[key] = value
        self._save()

    def remove_item(self, key: str) -> None:
        """Remove a value if present."""
        data = self._load()
        if key in data:
            del data[key]
            self._save()


@lru_cache()
def get_local_storage() -> LocalStorage:
    """Get the process-wide LocalStorage at the configured path."""
    return LocalStorage(settings.local_storage_path)
