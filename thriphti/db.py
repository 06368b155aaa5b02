"""
Supabase database integration module.

The site's records are served by the REST backend; this wrapper only covers
what the utility endpoints need from Supabase directly:
- Caching RSS feed validation results
- Checking that the backend is reachable

Tables used:
- rss_feed_validation_cache: One row per validated feed URL
- stores: Read (one row) by the connection check
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from supabase import create_client, Client

from .config import get_supabase_config

logger = logging.getLogger(__name__)


class Database:
    """
    Supabase database client wrapper.

    Args:
        client: Optional pre-built Supabase client. When omitted one is
            created from the configured URL and service key.
    """

    def __init__(self, client: Optional[Client] = None):
        """Initialize Supabase client."""
        if client is None:
            config = get_supabase_config()
            if not config.is_configured:
                raise ValueError("Supabase URL and key must be set in environment variables")
            client = create_client(config.url, config.key)
        self._client: Client = client

    @property
    def client(self) -> Client:
        """Get the Supabase client."""
        return self._client

    # =========================================================================
    # RSS VALIDATION CACHE
    # =========================================================================

    def get_cached_validation(self, url: str, max_age: timedelta) -> Optional[dict]:
        """
        Get a cached validation result for a feed URL.

        Args:
            url: The feed URL
            max_age: Ignore rows validated longer ago than this

        Returns:
            The result in response shape (isValid, title, ...), or None
        """
        cutoff = datetime.now(timezone.utc) - max_age
        result = (
            self._client.table("rss_feed_validation_cache")
            .select("*")
            .eq("url", url)
            .gte("last_validated", cutoff.isoformat())
            .execute()
        )
        if not result.data:
            return None

        row = result.data[0]
        logger.info(f"Using cached validation for {url}")
        return {
            "isValid": row.get("is_valid", False),
            "title": row.get("title"),
            "description": row.get("description"),
            "items": row.get("feed_items") or [],
            "itemCount": row.get("item_count", 0),
            "error": row.get("error_message"),
        }

    def cache_validation(self, url: str, result: dict) -> None:
        """Insert or update the cached validation result for a feed URL."""
        data = {
            "url": url,
            "is_valid": result.get("isValid", False),
            "title": result.get("title"),
            "description": result.get("description"),
            "item_count": result.get("itemCount") or 0,
            "error_message": result.get("error"),
            "feed_items": result.get("items") or [],
            "last_validated": datetime.now(timezone.utc).isoformat(),
        }
        self._client.table("rss_feed_validation_cache").upsert(data).execute()
        logger.debug(f"Cached validation for {url}")

    # =========================================================================
    # HEALTH
    # =========================================================================

    def check_connection(self) -> bool:
        """Run a one-row query to see whether Supabase answers."""
        try:
            self._client.table("stores").select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.error(f"Supabase connection check failed: {e}")
            return False


def is_configured() -> bool:
    """Whether Supabase credentials are present in the environment."""
    return get_supabase_config().is_configured


# Global database instance (lazy loaded)
_db: Optional[Database] = None


def get_db() -> Database:
    """Get database instance (singleton)."""
    global _db
    if _db is None:
        _db = Database()
    return _db
