# src/domain/highlights.py

import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Tuple
from urllib.parse import urlsplit, urlunsplit

from .errors import MalformedLocator, UnsupportedHighlightShape
from .models import HighlightRecord, Rectangle


class Highlight(ABC):
    """
    Localized annotation on one item, either stored in the source or
    computed from joins.

    Highlights are immutable values: join() returns the merged highlight and
    the owning Item swaps it in. The parent is referenced by id only.
    """

    item_id: str

    @abstractmethod
    def intersects(self, that: "Highlight") -> bool: ...

    @abstractmethod
    def join(self, that: "Highlight") -> "Highlight": ...

    @abstractmethod
    def fragment(self) -> str: ...

    def resource_locator(self, resource: str) -> str:
        """Parent resource locator qualified with this highlight's fragment."""
        try:
            parts = urlsplit(resource)
        except ValueError as error:
            raise MalformedLocator(resource, str(error)) from error
        if not parts.scheme:
            raise MalformedLocator(resource, "no scheme")
        if not (parts.netloc or parts.path):
            raise MalformedLocator(resource, "no location")
        return urlunsplit(parts._replace(fragment=self.fragment()))

    def _check_joinable(self, that: "Highlight") -> None:
        if type(that) is not type(self):
            raise TypeError(
                f"Cannot join {type(self).__name__} with {type(that).__name__}"
            )


@dataclass(frozen=True)
class SpanHighlight(Highlight):
    """Half-open character range [begin, end) with the text it covers."""
    item_id: str
    begin: int
    end: int
    texts: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.begin > self.end:
            raise ValueError(f"Span begins after its end: [{self.begin}, {self.end})")
        # Ordered set: first occurrence wins.
        object.__setattr__(self, "texts", tuple(dict.fromkeys(self.texts)))

    @property
    def text(self) -> str:
        return " ".join(self.texts).replace("\n", " ")

    def fragment(self) -> str:
        # RFC 5147
        return f"char={self.begin},{self.end}"

    def intersects(self, that: Highlight) -> bool:
        if not (isinstance(that, SpanHighlight) and that.item_id == self.item_id):
            return False
        # Half-open ranges: containment either way is covered, touching is not.
        return self.begin < that.end and that.begin < self.end

    def join(self, that: Highlight) -> "SpanHighlight":
        self._check_joinable(that)
        texts = self.texts + tuple(t for t in that.texts if t not in self.texts)
        return replace(
            self,
            begin=min(self.begin, that.begin),
            end=max(self.end, that.end),
            texts=texts,
        )


@dataclass(frozen=True)
class RegionHighlight(Highlight):
    """Rectangular area of a picture."""
    item_id: str
    rectangle: Rectangle

    def fragment(self) -> str:
        # W3C Media Fragments URI
        r = self.rectangle
        return f"xywh={r.x},{r.y},{r.width},{r.height}"

    def intersects(self, that: Highlight) -> bool:
        return (
            isinstance(that, RegionHighlight)
            and that.item_id == self.item_id
            and self.rectangle.intersects(that.rectangle)
        )

    def join(self, that: Highlight) -> "RegionHighlight":
        self._check_joinable(that)
        return replace(self, rectangle=self.rectangle.union(that.rectangle))


def highlight_from_record(record: HighlightRecord) -> Highlight:
    """
    Build the highlight variant matching the record's coordinate count.
    Raises UnsupportedHighlightShape for any other count.
    """
    coordinates = [_whole_number(c) for c in record.coordinates]
    if len(coordinates) == 2:
        return SpanHighlight(
            item_id=record.parent_item_id,
            begin=coordinates[0],
            end=coordinates[1],
            texts=tuple(record.text or ()),
        )
    if len(coordinates) == 4:
        return RegionHighlight(
            item_id=record.parent_item_id,
            rectangle=Rectangle.from_corners(*coordinates),
        )
    raise UnsupportedHighlightShape(len(coordinates))


def _whole_number(value) -> int:
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    raise ValueError(f"Highlight coordinate is not a whole number: {value!r}")
