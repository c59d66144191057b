"""
Draw detection boxes and labels on an image with OpenCV.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import cv2
import numpy as np

from models.detection import BoundingBox, Rect

COLOR_BOX = (0, 0, 255)       # Red
COLOR_TEXT = (255, 255, 255)  # White


def draw_boxes(
    frame: np.ndarray,
    boxes: Sequence[BoundingBox],
    color: Tuple[int, int, int] = COLOR_BOX,
    thickness: int = 3,
    font_scale: float = 0.5,
    scale: float = 1.0,
    show_score: bool = False,
) -> np.ndarray:
    """
    Draw bounding boxes and labels on a copy of the frame.

    Args:
        frame: Image to annotate (BGR). Not modified.
        boxes: Detections in the frame's pixel coordinates.
        color: Box and label background color (BGR).
        thickness: Box line thickness.
        font_scale: Label font scale.
        scale: Divisor applied to box coordinates, for drawing onto a
            downscaled copy of the source image.
        show_score: Append the score to each label.

    Returns:
        The annotated copy.
    """
    out = frame.copy()
    color = tuple(int(c) for c in color)
    font = cv2.FONT_HERSHEY_SIMPLEX
    text_thickness = 1

    for box in boxes:
        scaled = Rect.from_tuple([v / scale for v in box.rect.as_tuple()])
        left, top, right, bottom = scaled.as_int_tuple()

        cv2.rectangle(out, (left, top), (right, bottom), color, thickness)

        label = f"{box.label} {box.score:.2f}" if show_score else box.label
        (text_w, text_h), _ = cv2.getTextSize(label, font, font_scale, text_thickness)

        # Keep the label inside the image for boxes touching the top edge
        text_top = max(top - text_h - 6, 0)
        cv2.rectangle(out, (left, text_top), (left + text_w + 4, text_top + text_h + 6), color, -1)
        cv2.putText(out, label, (left + 2, text_top + text_h + 2), font, font_scale, COLOR_TEXT, text_thickness)

    return out
