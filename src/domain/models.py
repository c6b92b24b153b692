# src/domain/models.py

from dataclasses import dataclass, field
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class DocumentRecord:
    """
    Plain document record as delivered by a corpus or topic source.
    """
    id: str
    name: str
    resource: str
    thumbnail: Optional[str] = None


@dataclass(frozen=True)
class HighlightRecord:
    """
    Raw highlight as delivered by a topic source.

    coordinates: [begin, end] for text, [x1, y1, x2, y2] for pictures.
    parent:      metadata of the owning document, when the source knows it.
    """
    parent_item_id: str
    coordinates: Sequence[int]
    text: List[str] = field(default_factory=list)
    parent: Optional[DocumentRecord] = None


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle on integer picture coordinates."""
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rectangle size must not be negative: {self.width}x{self.height}"
            )

    @classmethod
    def from_corners(cls, x1: int, y1: int, x2: int, y2: int) -> "Rectangle":
        return cls(
            x=min(x1, x2),
            y=min(y1, y2),
            width=abs(x2 - x1),
            height=abs(y2 - y1),
        )

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def intersects(self, that: "Rectangle") -> bool:
        """
        Positive-area overlap only: shared edges or corners do not count,
        and an empty rectangle never intersects anything.
        """
        if self.is_empty() or that.is_empty():
            return False
        return (
            self.x < that.right and that.x < self.right
            and self.y < that.bottom and that.y < self.bottom
        )

    def union(self, that: "Rectangle") -> "Rectangle":
        """Smallest rectangle containing both."""
        x = min(self.x, that.x)
        y = min(self.y, that.y)
        return Rectangle(
            x=x,
            y=y,
            width=max(self.right, that.right) - x,
            height=max(self.bottom, that.bottom) - y,
        )
