"""
Post-processing for YOLOv5 raw predictions.

- decoder: raw [rows, 5 + nc] tensor -> scaled, labeled boxes
- nms: IOU and greedy non-maximum suppression
- pipeline: decode followed by suppress
"""

from .errors import InvalidInputError
from .decoder import DEFAULT_CONF_THRESHOLD, decode
from .nms import DEFAULT_IOU_THRESHOLD, DEFAULT_LIMIT, SORT_ASCENDING, SORT_DESCENDING, iou, suppress
from .pipeline import outputs_to_nms_predictions

__all__ = [
    "InvalidInputError",
    "DEFAULT_CONF_THRESHOLD",
    "DEFAULT_IOU_THRESHOLD",
    "DEFAULT_LIMIT",
    "SORT_ASCENDING",
    "SORT_DESCENDING",
    "decode",
    "iou",
    "suppress",
    "outputs_to_nms_predictions",
]
