"""Result types produced by detection and segmentation stages."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle with its top-left corner at (x, y)."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def area(self) -> int:
        return self.width * self.height

    def bounded_to(self, other: "Rectangle") -> "Rectangle":
        """Intersection with another rectangle; zero-sized if they do not overlap."""
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.x + self.width, other.x + other.width)
        bottom = min(self.y + self.height, other.y + other.height)
        return Rectangle(left, top, max(right - left, 0), max(bottom - top, 0))


@dataclass
class Detection:
    """One detected object."""

    category: int
    name: str
    confidence: float
    box: Rectangle

    def __str__(self) -> str:
        box = self.box
        return (
            f"{self.name}[{self.category}] ({self.confidence:.2g}) @ "
            f"{box.x},{box.y} {box.width}x{box.height}"
        )


@dataclass
class Segmentation:
    """A per-pixel category map with its labels."""

    width: int
    height: int
    labels: list[str] = field(default_factory=list)
    segmentation: bytes = b""