"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    get_supabase_client: Supabase client (STORAGE_BACKEND=supabase)
    check_connection: Health check function
    get_local_storage: JSON-file key/value store
"""

from config.settings import settings, get_settings, Settings
from config.database import (
    get_supabase_client,
    check_connection,
    reset_connection,
    DatabaseConnectionError,
)
from config.local_storage import LocalStorage, get_local_storage

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Database
    "get_supabase_client",
    "check_connection",
    "reset_connection",
    "DatabaseConnectionError",

    # Local storage
    "LocalStorage",
    "get_local_storage",
]
