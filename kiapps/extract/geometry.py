from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


ZERO_RECTANGLE = Rectangle(0.0, 0.0, 0.0, 0.0)


def intersect(r1: Rectangle, r2: Rectangle) -> Rectangle:
    """Overlapping part of two rectangles (zero rectangle if they are disjoint)."""
    x1 = max(r1.x, r2.x)
    y1 = max(r1.y, r2.y)
    x2 = min(r1.right, r2.right)
    y2 = min(r1.bottom, r2.bottom)
    if x2 >= x1 and y2 >= y1:
        return Rectangle(x1, y1, x2 - x1, y2 - y1)
    return ZERO_RECTANGLE


def area(r: Rectangle) -> float:
    return r.width * r.height


def overlap_percentage(element: Rectangle, region: Rectangle) -> float:
    """
    Share of the element's own area that lies inside region, as 0..100.
    A quarter of the element inside the region gives 25.
    """
    element_area = area(element)
    if element_area == 0:
        return 0.0
    return area(intersect(region, element)) * 100.0 / element_area
