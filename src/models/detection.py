"""
Detection models for post-processed object detection results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple


@dataclass(frozen=True)
class Rect:
    """
    Box bounds in source-image pixel coordinates.

    No ordering is enforced: after scaling, a box may be degenerate
    (right <= left or bottom <= top) and is then reported with area <= 0.

    Attributes:
        left: Left edge x coordinate.
        top: Top edge y coordinate.
        right: Right edge x coordinate.
        bottom: Bottom edge y coordinate.
    """
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def area(self) -> float:
        return self.width * self.height

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return as (left, top, right, bottom) tuple."""
        return (self.left, self.top, self.right, self.bottom)

    def as_int_tuple(self) -> Tuple[int, int, int, int]:
        """Return as integer (left, top, right, bottom) tuple."""
        return (int(self.left), int(self.top), int(self.right), int(self.bottom))

    @classmethod
    def from_tuple(cls, t: Sequence[float]) -> "Rect":
        """Create from (left, top, right, bottom) sequence."""
        return cls(left=float(t[0]), top=float(t[1]), right=float(t[2]), bottom=float(t[3]))

    @classmethod
    def from_center(
        cls,
        x: float,
        y: float,
        w: float,
        h: float,
        scale_x: float = 1.0,
        scale_y: float = 1.0,
    ) -> "Rect":
        """
        Create from center-form geometry, scaled into source-image space.

        Args:
            x: Center x in model-input pixels.
            y: Center y in model-input pixels.
            w: Width in model-input pixels.
            h: Height in model-input pixels.
            scale_x: Source width / model input size.
            scale_y: Source height / model input size.
        """
        return cls(
            left=scale_x * (x - w / 2),
            top=scale_y * (y - h / 2),
            right=scale_x * (x + w / 2),
            bottom=scale_y * (y + h / 2),
        )


@dataclass(frozen=True)
class BoundingBox:
    """
    A labeled detection ready for rendering.

    Attributes:
        label: Class name from the class-name table.
        score: Objectness of the row that produced this box.
        rect: Bounds in source-image pixel coordinates.
    """
    label: str
    score: float
    rect: Rect

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the {label, score, rect: [l, t, r, b]} output record."""
        return {
            "label": self.label,
            "score": self.score,
            "rect": list(self.rect.as_tuple()),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BoundingBox":
        return cls(
            label=str(d["label"]),
            score=float(d["score"]),
            rect=Rect.from_tuple(d["rect"]),
        )

