"""
Greedy non-maximum suppression over decoded boxes.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from models.detection import BoundingBox, Rect

DEFAULT_IOU_THRESHOLD = 0.3
DEFAULT_LIMIT = 15

SORT_ASCENDING = "ascending"
SORT_DESCENDING = "descending"
SORT_ORDERS = (SORT_ASCENDING, SORT_DESCENDING)


def iou(rect_a: Rect, rect_b: Rect) -> float:
    """
    Calculate Intersection over Union (IoU) between two rects.

    A rect with zero or negative area overlaps nothing, not even an
    identical degenerate rect.

    Returns:
        IoU value between 0 and 1
    """
    area_a = (rect_a.right - rect_a.left) * (rect_a.bottom - rect_a.top)
    if area_a <= 0.0:
        return 0.0

    area_b = (rect_b.right - rect_b.left) * (rect_b.bottom - rect_b.top)
    if area_b <= 0.0:
        return 0.0

    left = max(rect_a.left, rect_b.left)
    top = max(rect_a.top, rect_b.top)
    right = min(rect_a.right, rect_b.right)
    bottom = min(rect_a.bottom, rect_b.bottom)

    intersection = max(bottom - top, 0.0) * max(right - left, 0.0)
    return intersection / (area_a + area_b - intersection)


def suppress(
    candidates: Sequence[BoundingBox],
    limit: int = DEFAULT_LIMIT,
    iou_threshold: float = DEFAULT_IOU_THRESHOLD,
    sort_order: str = SORT_ASCENDING,
) -> List[BoundingBox]:
    """
    Select one box out of each group of overlapping boxes.

    Boxes are sorted by score (stable) and visited in that order. Each
    still-active box is selected, then every later active box overlapping
    it by more than ``iou_threshold`` is deactivated. Selection stops as
    soon as ``limit`` boxes have been selected.

    The default ``ascending`` order visits the lowest-scoring boxes first,
    as the mobile demo app did. Use ``descending`` for the conventional
    best-box-wins behavior.

    Args:
        candidates: Decoded boxes. The sequence is not modified.
        limit: Hard cap on the number of boxes returned. <= 0 returns [].
        iou_threshold: Overlap above which a later box is suppressed.
        sort_order: "ascending" or "descending" by score.

    Returns:
        Selected boxes in selection order.
    """
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"sort_order must be one of: {', '.join(SORT_ORDERS)}")
    if limit <= 0 or not candidates:
        return []

    boxes = sorted(candidates, key=lambda b: b.score, reverse=sort_order == SORT_DESCENDING)

    selected: List[BoundingBox] = []
    active = [True] * len(boxes)
    num_active = len(boxes)

    done = False
    for i, box_a in enumerate(boxes):
        if done:
            break
        if not active[i]:
            continue

        selected.append(box_a)
        if len(selected) >= limit:
            break

        for j in range(i + 1, len(boxes)):
            if not active[j]:
                continue
            if iou(box_a.rect, boxes[j].rect) > iou_threshold:
                active[j] = False
                num_active -= 1
                if num_active <= 0:
                    done = True
                    break

    logging.debug(f"NMS kept {len(selected)}/{len(boxes)} boxes (limit={limit}, iou>{iou_threshold})")
    return selected
