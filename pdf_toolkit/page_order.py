"""Interactive page ordering for the reorganize workflow.

:class:`PageOrderManager` keeps the desired output arrangement of a loaded
document as a list of original page indices. Positions in that list are
called *slots*; ``order[slot]`` is the page currently shown at that slot.

Per-page attributes such as rotation are keyed by the original page index,
never by slot, so moving a page around never detaches it from its
attributes. Slots are only a projection used when rendering or exporting.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union

from .exceptions import PageIndexError, ValidationError
from .ranges import PageIndex
from .utils import get_logger

LOGGER = get_logger("pdf_toolkit.page_order")

ROTATION = "rotation"
_NEUTRAL_ATTRIBUTES: Dict[str, Any] = {ROTATION: 0}


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


class PageOrderManager:
    """Caller-owned page order for one document editing session.

    A manager starts *empty* unless ``page_count`` is given; :meth:`initialize`
    loads a document's page count and makes it editable. Every public
    mutation replaces the order in a single assignment.
    """

    def __init__(self, page_count: Optional[int] = None) -> None:
        self._page_count: Optional[int] = None
        self._order: Optional[List[PageIndex]] = None
        self._attributes: Dict[str, Dict[PageIndex, Any]] = {}
        if page_count is not None:
            self.initialize(page_count)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def initialize(self, page_count: int) -> None:
        """Load a document with ``page_count`` pages in natural order."""

        if page_count < 0:
            raise ValidationError(f"Page count must be >= 0, got {page_count}.")
        self._page_count = page_count
        self._order = list(range(page_count))
        self._attributes = {
            key: {page: value for page in range(page_count)}
            for key, value in _NEUTRAL_ATTRIBUTES.items()
        }
        LOGGER.debug("Initialized page order with %d page(s)", page_count)

    @property
    def is_loaded(self) -> bool:
        return self._order is not None

    @property
    def page_count(self) -> int:
        """Page count of the loaded document (not the current order length)."""

        self._require_loaded()
        return self._page_count  # type: ignore[return-value]

    @property
    def order(self) -> List[PageIndex]:
        """A copy of the current order."""

        return list(self._require_loaded())

    def __len__(self) -> int:
        return len(self._order or [])

    def __iter__(self) -> Iterator[PageIndex]:
        return iter(self.order)

    def __repr__(self) -> str:
        if self._order is None:
            return "PageOrderManager(<empty>)"
        return f"PageOrderManager(order={self._order!r})"

    def page_at(self, slot: int) -> PageIndex:
        """Original page index shown at ``slot``."""

        order = self._require_loaded()
        self._check_slot(slot, order)
        return order[slot]

    def slot_of(self, page_index: PageIndex) -> Optional[int]:
        """Return the slot currently holding ``page_index`` or ``None`` if removed."""

        order = self._require_loaded()
        try:
            return order.index(page_index)
        except ValueError:
            return None

    def removed_pages(self) -> List[PageIndex]:
        """Original pages no longer present in the order, ascending."""

        order = self._require_loaded()
        present = set(order)
        return [page for page in range(self.page_count) if page not in present]

    @property
    def is_modified(self) -> bool:
        return self._require_loaded() != list(range(self.page_count))

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def move_slot(self, from_slot: int, to_slot: int) -> None:
        """Remove the page at ``from_slot`` and reinsert it at ``to_slot``."""

        order = self._require_loaded()
        self._check_slot(from_slot, order)
        self._check_slot(to_slot, order)
        if from_slot == to_slot:
            return

        new_order = list(order)
        page = new_order.pop(from_slot)
        new_order.insert(to_slot, page)
        self._order = new_order
        LOGGER.debug("Moved page %d from slot %d to slot %d", page, from_slot, to_slot)

    def swap_adjacent(self, slot: int, direction: Union[Direction, str]) -> None:
        """Swap the page at ``slot`` with its neighbour; no-op at the edges."""

        order = self._require_loaded()
        self._check_slot(slot, order)
        step = -1 if Direction(direction) is Direction.UP else 1
        target = slot + step
        if target < 0 or target >= len(order):
            return

        new_order = list(order)
        new_order[slot], new_order[target] = new_order[target], new_order[slot]
        self._order = new_order

    def move_up(self, slot: int) -> None:
        self.swap_adjacent(slot, Direction.UP)

    def move_down(self, slot: int) -> None:
        self.swap_adjacent(slot, Direction.DOWN)

    def sort_ascending(self) -> None:
        self._order = sorted(self._require_loaded())

    def sort_descending(self) -> None:
        self._order = sorted(self._require_loaded(), reverse=True)

    def remove_slot(self, slot: int) -> PageIndex:
        """Delete the page at ``slot`` and return its original index.

        The page's attributes are kept; only :meth:`reset` brings it back.
        """

        order = self._require_loaded()
        self._check_slot(slot, order)
        new_order = list(order)
        page = new_order.pop(slot)
        self._order = new_order
        LOGGER.debug("Removed page %d from slot %d", page, slot)
        return page

    def reset(self) -> None:
        """Restore the natural order; attribute values are left untouched."""

        self._require_loaded()
        self._order = list(range(self.page_count))

    # ------------------------------------------------------------------
    # Identity-keyed attributes
    # ------------------------------------------------------------------
    def attribute_for(
        self,
        page_index: PageIndex,
        *,
        key: str = ROTATION,
        default: Any = None,
    ) -> Any:
        self._check_page(page_index)
        return self._attributes.get(key, {}).get(page_index, default)

    def set_attribute(self, page_index: PageIndex, value: Any, *, key: str = ROTATION) -> None:
        self._check_page(page_index)
        values = dict(self._attributes.get(key, {}))
        values[page_index] = value
        self._attributes[key] = values

    def attributes(self, key: str = ROTATION) -> Dict[PageIndex, Any]:
        """A copy of the identity-keyed values stored under ``key``."""

        self._require_loaded()
        return dict(self._attributes.get(key, {}))

    def attributes_by_slot(self, key: str = ROTATION, default: Any = None) -> List[Any]:
        """Project ``key`` onto the current slots for rendering."""

        return [
            self._attributes.get(key, {}).get(page, default)
            for page in self._require_loaded()
        ]

    def rotation_for(self, page_index: PageIndex) -> int:
        return int(self.attribute_for(page_index, key=ROTATION, default=0))

    def rotate_page(self, page_index: PageIndex, degrees: int = 90) -> int:
        """Turn ``page_index`` clockwise by ``degrees`` and return the new rotation."""

        if degrees % 90:
            raise ValidationError(f"Rotation must be a multiple of 90 degrees, got {degrees}.")
        rotation = (self.rotation_for(page_index) + degrees) % 360
        self.set_attribute(page_index, rotation, key=ROTATION)
        return rotation

    # ------------------------------------------------------------------
    # Handoff
    # ------------------------------------------------------------------
    def materialize(self) -> List[PageIndex]:
        """Snapshot the order for document assembly.

        Raises:
            ValidationError: If every page has been removed.
        """

        order = self._require_loaded()
        if not order:
            raise ValidationError(
                f"All {self.page_count} page(s) have been removed. Cannot save an empty PDF."
            )
        return list(order)

    # ------------------------------------------------------------------
    def _require_loaded(self) -> List[PageIndex]:
        if self._order is None:
            raise ValidationError("No document loaded. Initialize the page order first.")
        return self._order

    @staticmethod
    def _check_slot(slot: int, order: List[PageIndex]) -> None:
        if not 0 <= slot < len(order):
            raise PageIndexError(
                f"Slot {slot} is out of bounds: the page order has {len(order)} slot(s)."
            )

    def _check_page(self, page_index: PageIndex) -> None:
        if not 0 <= page_index < self.page_count:
            raise PageIndexError(
                f"Page index {page_index} is out of bounds: the document has "
                f"{self.page_count} page(s)."
            )


__all__ = ["Direction", "PageOrderManager", "ROTATION"]
