"""
Thriphti - Thrift, garage sale and flea market discovery.

Python side of the Thriphti site: typed access to the events/stores REST
backend, the client-side state it feeds, and the admin utility endpoints.

Modules:
- config: Configuration and environment variables
- models: Event, Store and Article records
- api: Async REST client
- selection: Bulk selection state for list views
- store: Application state container
- loader: Pushes fetched listings into the store
- db: Supabase integration (validation cache, health)
- functions: Flask utility endpoints
"""

__version__ = "0.1.0"

# Convenient imports
from .models import (
    Article,
    Event,
    EventCategory,
    Store,
    StoreHours,
)
from .api import FetchError, ThriphtiApiClient
from .selection import BulkSelection
from .store import AppState, AppStore
from .loader import load_listings

__all__ = [
    # Models
    "Article",
    "Event",
    "EventCategory",
    "Store",
    "StoreHours",
    # API
    "FetchError",
    "ThriphtiApiClient",
    # State
    "BulkSelection",
    "AppState",
    "AppStore",
    "load_listings",
]
