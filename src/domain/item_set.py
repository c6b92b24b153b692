# src/domain/item_set.py

import threading
from typing import Dict, Iterable, List, Optional

from .highlights import Highlight, highlight_from_record
from .models import DocumentRecord, HighlightRecord


class Item:
    """
    One document with its highlights.

    Invariant: no two highlights held by an item intersect. Overlaps are
    resolved on insertion by joining them into a single wider highlight.
    """

    def __init__(
        self,
        item_id: str,
        name: str,
        resource: str,
        thumbnail: Optional[str] = None,
    ):
        self._id = item_id
        self._name = name
        self._resource = resource
        self._thumbnail = thumbnail
        self._highlights: List[Highlight] = []
        # Reentrant: retain_all() re-inserts through add().
        self._lock = threading.RLock()

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "Item":
        return cls(record.id, record.name, record.resource, record.thumbnail)

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def resource(self) -> str:
        return self._resource

    @property
    def thumbnail(self) -> Optional[str]:
        return self._thumbnail

    def size(self) -> int:
        return len(self._highlights)

    def __len__(self) -> int:
        return self.size()

    def get_highlights(self) -> List[Highlight]:
        """Snapshot of the current highlights, safe to iterate while others mutate."""
        with self._lock:
            return list(self._highlights)

    def add_record(self, record: HighlightRecord) -> None:
        self.add(highlight_from_record(record))

    def add(self, highlight: Highlight) -> None:
        """
        Insert a highlight, absorbing every highlight it intersects.

        Each round collects the intersecting highlights first and only then
        removes them, so the list is never mutated while being scanned.
        Rounds repeat because a widened rectangle may reach highlights the
        original one did not touch.
        """
        if highlight.item_id != self._id:
            raise ValueError(
                f"Highlight of item '{highlight.item_id}' cannot be added to '{self._id}'"
            )
        with self._lock:
            merged = highlight
            while True:
                overlapping = [
                    index
                    for index, old in enumerate(self._highlights)
                    if old.intersects(merged)
                ]
                if not overlapping:
                    break
                for index in overlapping:
                    merged = merged.join(self._highlights[index])
                absorbed = set(overlapping)
                self._highlights = [
                    old
                    for index, old in enumerate(self._highlights)
                    if index not in absorbed
                ]
            self._highlights.append(merged)

    def join(self, that: "Item") -> None:
        """Union at highlight level."""
        for highlight in that.get_highlights():
            self.add(highlight)

    def retain_all(self, that: "Item") -> None:
        """
        Intersection at highlight level: keep only the highlights overlapping
        at least one highlight of `that`, each widened over all of them.
        """
        counterparts = that.get_highlights()
        with self._lock:
            held = self._highlights
            self._highlights = []
            for highlight in held:
                found = False
                for counterpart in counterparts:
                    if counterpart.intersects(highlight):
                        highlight = highlight.join(counterpart)
                        found = True
                if found:
                    self.add(highlight)

    def resource_locator(self, highlight: Highlight) -> str:
        if highlight.item_id != self._id:
            raise ValueError(
                f"Highlight of item '{highlight.item_id}' does not belong to '{self._id}'"
            )
        return highlight.resource_locator(self._resource)

    def copy(self) -> "Item":
        clone = Item(self._id, self._name, self._resource, self._thumbnail)
        clone._highlights = self.get_highlights()
        return clone

    def __eq__(self, that) -> bool:
        return isinstance(that, Item) and self._id == that._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Item(id='{self._id}', name='{self._name}', highlights={self.size()})"


class ItemSet:
    """
    Set of items containing highlights.

    Generalizes union (add_all) and intersection (retain_all) to both levels:
    items are matched by id, highlights by overlap, and overlapping
    highlights are merged rather than kept side by side.
    """

    def __init__(self):
        self._items: Dict[str, Item] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_documents(
        cls,
        documents: Iterable[DocumentRecord],
        highlights: Iterable[HighlightRecord] = (),
    ) -> "ItemSet":
        item_set = cls()
        for document in documents:
            item_set._items[document.id] = Item.from_record(document)
        for record in highlights:
            item_set.add_record(record)
        return item_set

    def add_record(self, record: HighlightRecord) -> None:
        """
        Route a raw highlight to its item, creating the item when the
        document listing did not include it.
        """
        highlight = highlight_from_record(record)
        with self._lock:
            item = self._items.get(record.parent_item_id)
            if item is None:
                item = self._item_for(record)
                self._items[item.id] = item
        item.add(highlight)

    @staticmethod
    def _item_for(record: HighlightRecord) -> Item:
        if record.parent is not None:
            return Item.from_record(record.parent)
        return Item(record.parent_item_id, record.parent_item_id, "")

    def add_all(self, that: "ItemSet") -> None:
        for item in that.get_items():
            with self._lock:
                old = self._items.get(item.id)
                if old is None:
                    self._items[item.id] = item.copy()
                    continue
            old.join(item)

    def retain_all(self, that: "ItemSet") -> None:
        with self._lock:
            entries = list(self._items.items())
        for item_id, item in entries:
            that_item = that.get(item_id)
            if that_item is None:
                with self._lock:
                    del self._items[item_id]
            else:
                item.retain_all(that_item)

    def get(self, item_id: str) -> Optional[Item]:
        with self._lock:
            return self._items.get(item_id)

    def __contains__(self, item_id: str) -> bool:
        with self._lock:
            return item_id in self._items

    def __len__(self) -> int:
        return self.count_items()

    def count_items(self) -> int:
        return len(self._items)

    def count_highlights(self) -> int:
        return sum(item.size() for item in self.get_items())

    def get_items(self) -> List[Item]:
        with self._lock:
            return list(self._items.values())

    def get_highlights(self) -> List[Highlight]:
        return [
            highlight
            for item in self.get_items()
            for highlight in item.get_highlights()
        ]

    def resource_locator(self, highlight: Highlight) -> str:
        item = self.get(highlight.item_id)
        if item is None:
            raise KeyError(f"No item '{highlight.item_id}' in this set")
        return item.resource_locator(highlight)

    def copy(self) -> "ItemSet":
        clone = ItemSet()
        clone.add_all(self)
        return clone

    def __repr__(self) -> str:
        return (
            f"ItemSet(items={self.count_items()}, "
            f"highlights={self.count_highlights()})"
        )
