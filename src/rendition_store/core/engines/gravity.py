"""
Crop gravity inference from detected face geometry.
"""

import math
from collections.abc import Sequence

from rendition_store.core.models.rendition import FaceBoundingBox, GravityAnchor

# (x, y) -> anchor; x runs west to east, y runs north to south.
GRAVITY_TABLE: dict[tuple[float, float], GravityAnchor] = {
    (0.0, 0.0): GravityAnchor.NORTH_WEST,
    (0.0, 0.5): GravityAnchor.WEST,
    (0.0, 1.0): GravityAnchor.SOUTH_WEST,
    (0.5, 0.0): GravityAnchor.NORTH,
    (0.5, 0.5): GravityAnchor.CENTER,
    (0.5, 1.0): GravityAnchor.SOUTH,
    (1.0, 0.0): GravityAnchor.NORTH_EAST,
    (1.0, 0.5): GravityAnchor.EAST,
    (1.0, 1.0): GravityAnchor.SOUTH_EAST,
}


class GravityEngine:
    """
    Maps the largest detected face to one of nine compass anchors.

    The face centre (ignoring negative offsets) is clamped into the image,
    snapped to the nearest half and looked up in a 3x3 table.
    """

    @staticmethod
    def largest_face(boxes: Sequence[FaceBoundingBox]) -> FaceBoundingBox | None:
        """
        Pick the face with the greatest ``width * height``.

        The first box wins a tie; an empty sequence yields None.
        """
        if not boxes:
            return None
        return max(boxes, key=lambda box: box.area)

    @staticmethod
    def nearest_half(value: float) -> float:
        """
        Round to the nearest multiple of 0.5, halves away from zero.

        Example:
            nearest_half(0.25) → 0.5
            nearest_half(0.74) → 0.5
            nearest_half(0.75) → 1.0
        """
        doubled = value * 2
        return math.copysign(math.floor(abs(doubled) + 0.5), doubled) / 2.0

    @staticmethod
    def _clamp(value: float) -> float:
        return min(max(value, 0.0), 1.0)

    @classmethod
    def coordinates(cls, box: FaceBoundingBox) -> tuple[float, float]:
        """Snapped (x, y) of the face centre, each one of 0.0, 0.5 or 1.0."""
        x = box.width / 2 + max(box.left, 0.0)
        y = box.height / 2 + max(box.top, 0.0)
        return cls.nearest_half(cls._clamp(x)), cls.nearest_half(cls._clamp(y))

    @classmethod
    def anchor_for(cls, box: FaceBoundingBox) -> GravityAnchor:
        # -0.0 and 0.0 hash alike, so the lookup is total after clamping.
        return GRAVITY_TABLE[cls.coordinates(box)]

    @classmethod
    def infer(cls, boxes: Sequence[FaceBoundingBox]) -> GravityAnchor:
        """
        Gravity for a set of detected faces.

        Args:
            boxes: Face bounding boxes, possibly empty

        Returns:
            The anchor of the largest face, or ``Center`` when there is none
        """
        box = cls.largest_face(boxes)
        if box is None:
            return GravityAnchor.CENTER
        return cls.anchor_for(box)
