"""
Decode followed by NMS: raw model output to final boxes.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from models.detection import BoundingBox
from postprocess.decoder import DEFAULT_CONF_THRESHOLD, decode
from postprocess.errors import InvalidInputError
from postprocess.nms import DEFAULT_IOU_THRESHOLD, DEFAULT_LIMIT, SORT_ASCENDING, suppress


def outputs_to_nms_predictions(
    prediction: np.ndarray,
    scale_x: float,
    scale_y: float,
    class_names: Sequence[str],
    conf_threshold: float = DEFAULT_CONF_THRESHOLD,
    iou_threshold: float = DEFAULT_IOU_THRESHOLD,
    limit: int = DEFAULT_LIMIT,
    sort_order: str = SORT_ASCENDING,
) -> List[BoundingBox]:
    """
    Bounding boxes of detected objects with their label and score.

    Accepts either a single [rows, 5 + nc] prediction or the batched
    [1, rows, 5 + nc] tensor a YOLOv5 export returns; only the first
    batch item is used.
    """
    prediction = np.asarray(prediction)
    if prediction.ndim == 3:
        if prediction.shape[0] < 1:
            raise InvalidInputError("Batched prediction is empty")
        prediction = prediction[0]

    candidates = decode(prediction, scale_x, scale_y, class_names, conf_threshold=conf_threshold)
    return suppress(candidates, limit=limit, iou_threshold=iou_threshold, sort_order=sort_order)
