"""
Value types for sizes and rectangles in surface space.
"""
from attrs import define, field


@define(frozen=True)
class Size:
    """Integer or fractional (width, height) pair."""

    width: float = field()
    height: float = field()

    def __iter__(self):
        return iter((self.width, self.height))


@define(frozen=True)
class Rect:
    """
    Axis-aligned rectangle given by its top-left corner and size.

    Containment is inclusive on all four edges::

        rect = Rect(10, 10, 20, 20)
        rect.contains(30, 30)  # True
        rect.contains(31, 30)  # False
    """

    left: float = field(default=0.0)
    top: float = field(default=0.0)
    width: float = field(default=0.0)
    height: float = field(default=0.0)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def topleft(self) -> tuple[float, float]:
        return (self.left, self.top)

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.width / 2.0, self.top + self.height / 2.0)

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def to_local(self, x: float, y: float) -> tuple[float, float]:
        """Convert a point to coordinates relative to the top-left corner."""
        return (x - self.left, y - self.top)
