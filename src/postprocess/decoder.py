"""
Decode raw YOLOv5 predictions into labeled bounding boxes.

Each row of the prediction tensor is laid out as:

    [cx, cy, w, h, objectness, class_0, ..., class_{nc-1}]

Geometry is in model-input pixels (not normalized). Rows whose objectness is
strictly greater than the confidence threshold become a BoundingBox in
source-image coordinates; row order is preserved.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from models.detection import BoundingBox, Rect
from postprocess.errors import InvalidInputError

DEFAULT_CONF_THRESHOLD = 0.3

# cx, cy, w, h, objectness
NUM_BOX_FIELDS = 5


def _validate(prediction: np.ndarray, class_names: Sequence[str]) -> int:
    if prediction.ndim != 2:
        raise InvalidInputError(
            f"Prediction must be 2-D [rows, 5 + num_classes], got shape {prediction.shape}"
        )
    num_classes = prediction.shape[1] - NUM_BOX_FIELDS
    if num_classes < 1:
        raise InvalidInputError(
            f"Prediction needs at least {NUM_BOX_FIELDS + 1} columns, got {prediction.shape[1]}"
        )
    if len(class_names) < num_classes:
        raise InvalidInputError(
            f"Class-name table has {len(class_names)} names but prediction has {num_classes} classes"
        )
    return num_classes


def _best_class(scores: np.ndarray) -> int:
    """Running maximum from index 0, replaced only on a strictly greater score."""
    best = scores[0]
    cls = 0
    for j in range(1, len(scores)):
        # Comparisons with NaN are false: a NaN never takes the lead, and a NaN at index 0 keeps it
        if scores[j] > best:
            best = scores[j]
            cls = j
    return cls


def decode(
    prediction: np.ndarray,
    scale_x: float,
    scale_y: float,
    class_names: Sequence[str],
    conf_threshold: float = DEFAULT_CONF_THRESHOLD,
) -> List[BoundingBox]:
    """
    Convert a raw prediction tensor into candidate boxes.

    Args:
        prediction: Array of shape [rows, 5 + num_classes].
        scale_x: Source image width / model input size.
        scale_y: Source image height / model input size.
        class_names: Table indexed by class id.
        conf_threshold: Rows with objectness <= this are dropped.

    Returns:
        One BoundingBox per kept row, in row order. The box score is the
        row's objectness, not the winning class score.

    Raises:
        InvalidInputError: If the tensor is not 2-D, has no class columns,
            or has more classes than the name table.
    """
    data = np.asarray(prediction, dtype=np.float64)
    _validate(data, class_names)

    if data.shape[0] == 0:
        return []

    keep = np.flatnonzero(data[:, 4] > conf_threshold)

    results: List[BoundingBox] = []
    for row_idx in keep:
        cls = _best_class(data[row_idx, NUM_BOX_FIELDS:])
        x, y, w, h, objectness = data[row_idx, :NUM_BOX_FIELDS]
        results.append(
            BoundingBox(
                label=class_names[cls],
                score=float(objectness),
                rect=Rect.from_center(
                    float(x), float(y), float(w), float(h),
                    scale_x=scale_x, scale_y=scale_y,
                ),
            )
        )

    logging.debug(f"Decoded {len(results)}/{data.shape[0]} rows above threshold {conf_threshold}")
    return results
