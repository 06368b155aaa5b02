"""
Application state container for Thriphti.

Holds the currently loaded events and stores plus the city filter the user
picked. Each slice is replaced wholesale by its setter; nothing is merged
and no slice is derived from another (events are not filtered by
selected_city - use events_in_city() for that).

One AppStore is built per application instance and passed to whatever
needs it, instead of living in a module-level global:

    with AppStore() as store:
        store.subscribe(on_change)
        store.set_selected_city("Austin")
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

from .config import get_app_config
from .models import Event, Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppState:
    """Immutable snapshot of the store."""
    events: tuple[Event, ...] = ()
    stores: tuple[Store, ...] = ()
    selected_city: str = "Dallas"


Listener = Callable[[AppState, AppState], None]


class AppStore:
    """
    Reactive in-memory state: events, stores and selected_city.

    Listeners registered with subscribe() are called with
    (state, previous_state) after every setter.
    """

    def __init__(self, selected_city: Optional[str] = None):
        city = selected_city if selected_city is not None else get_app_config().default_city
        self._state = AppState(selected_city=city)
        self._listeners: list[Listener] = []
        self._closed = False

    def __enter__(self) -> "AppStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # =========================================================================
    # READS
    # =========================================================================

    @property
    def events(self) -> list[Event]:
        return list(self._state.events)

    @property
    def stores(self) -> list[Store]:
        return list(self._state.stores)

    @property
    def selected_city(self) -> str:
        return self._state.selected_city

    def get_state(self) -> AppState:
        return self._state

    def events_in_city(self, city: Optional[str] = None) -> list[Event]:
        """Events whose location mentions the city (selected_city by default)."""
        needle = (city or self._state.selected_city).casefold()
        return [event for event in self._state.events if needle in event.location.casefold()]

    def stores_in_city(self, city: Optional[str] = None) -> list[Store]:
        """Stores located in the city (selected_city by default)."""
        needle = (city or self._state.selected_city).casefold()
        return [store for store in self._state.stores if store.city.casefold() == needle]

    # =========================================================================
    # ACTIONS
    # =========================================================================

    def set_events(self, events: Sequence[Event]) -> None:
        self._set(events=tuple(events))

    def set_stores(self, stores: Sequence[Store]) -> None:
        self._set(stores=tuple(stores))

    def set_selected_city(self, city: str) -> None:
        self._set(selected_city=city)

    def _set(self, **changes) -> None:
        if self._closed:
            raise RuntimeError("AppStore is closed")

        previous = self._state
        self._state = replace(previous, **changes)
        logger.debug(f"State updated: {', '.join(changes)}")

        for listener in list(self._listeners):
            listener(self._state, previous)

    # =========================================================================
    # SUBSCRIPTIONS & LIFECYCLE
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            A callable that removes the listener (safe to call twice)
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Drop all listeners; further setter calls raise RuntimeError."""
        self._listeners.clear()
        self._closed = True
