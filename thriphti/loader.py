"""
Loads listings from the REST backend into the application store.
"""

import asyncio
import logging

from .api import ThriphtiApiClient
from .store import AppStore

logger = logging.getLogger(__name__)


async def load_listings(
    client: ThriphtiApiClient,
    store: AppStore,
    featured_only: bool = False,
) -> None:
    """
    Fetch events and stores concurrently and push them into the store.

    Args:
        client: API client to read from
        store: Store whose events/stores slices get replaced
        featured_only: Load only featured records (homepage carousels)

    Raises:
        FetchError: If either request fails. The other request is cancelled
            and the store is left untouched.
    """
    if featured_only:
        calls = (client.events.get_featured(), client.stores.get_featured())
    else:
        calls = (client.events.get_all(), client.stores.get_all())

    tasks = [asyncio.ensure_future(call) for call in calls]
    try:
        events, stores = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Wait for the cancelled request so nothing outlives this call
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    store.set_events(events)
    store.set_stores(stores)
    logger.info(f"Loaded {len(events)} events and {len(stores)} stores")
