"""
Bulk selection state for list views.

BulkSelection tracks which items of a list are checked in a bulk-action UI
("select all events to export"). It is generic over the item type; the only
thing it needs from an item is its id, via get_item_id.

The selection set is independent of the item list: replacing items keeps
the selected ids, including ids of items that are no longer listed. Those
stale ids never count towards selected_count or is_all_selected, and are
dropped by clear_selection().
"""

import logging
from typing import Callable, Generic, Iterable, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BulkSelection(Generic[T]):
    """
    Selection-state manager over a list of identifiable items.

    Args:
        items: The items currently shown
        get_item_id: Extracts the string id of an item
    """

    def __init__(self, items: Sequence[T], get_item_id: Callable[[T], str]):
        self._items: list[T] = list(items)
        self._get_item_id = get_item_id
        self._selected_ids: frozenset[str] = frozenset()

    @property
    def items(self) -> list[T]:
        return list(self._items)

    @items.setter
    def items(self, items: Sequence[T]) -> None:
        self._items = list(items)

    @property
    def selected_ids(self) -> frozenset[str]:
        """Every selected id, including ids not in the current items."""
        return self._selected_ids

    def _item_ids(self) -> list[str]:
        return [self._get_item_id(item) for item in self._items]

    def _replace(self, selected: Iterable[str]) -> None:
        # Each mutation swaps in a new set in one assignment
        self._selected_ids = frozenset(selected)

    # =========================================================================
    # DERIVED STATE
    # =========================================================================

    def is_selected(self, item_id: str) -> bool:
        return item_id in self._selected_ids

    @property
    def selected_count(self) -> int:
        """Number of current items whose id is selected."""
        return sum(1 for item_id in self._item_ids() if item_id in self._selected_ids)

    @property
    def is_all_selected(self) -> bool:
        """True when every current item is selected. Never true for an empty list."""
        if not self._items:
            return False
        return all(item_id in self._selected_ids for item_id in self._item_ids())

    @property
    def is_indeterminate(self) -> bool:
        """Some but not all current items are selected (tri-state checkbox)."""
        count = self.selected_count
        return 0 < count < len(self._items)

    def get_selected_items(self) -> list[T]:
        """Selected items, in the order of items."""
        return [item for item in self._items if self._get_item_id(item) in self._selected_ids]

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def toggle_item(self, item_id: str) -> None:
        """Flip one id. The id does not have to belong to items."""
        self._replace(self._selected_ids ^ {item_id})

    def toggle_all(self) -> None:
        """
        Select every current item, or deselect them all if they already are.

        Ids outside the current items are left alone in both directions.
        """
        item_ids = set(self._item_ids())
        if self.is_all_selected:
            self._replace(self._selected_ids - item_ids)
        else:
            self._replace(self._selected_ids | item_ids)
        logger.debug(f"toggle_all: {len(self._selected_ids)} ids selected")

    def clear_selection(self) -> None:
        self._replace(())
