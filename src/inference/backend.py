"""
Inference backend interface.

Backends take the preprocessed [1, 3, S, S] input tensor and return the raw
prediction tensor ([1, rows, 5 + num_classes] for YOLOv5). Decoding and NMS
are done by the postprocess package, not by the backend.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np


class PredictionBackend(Protocol):
    def forward(self, tensor: np.ndarray) -> np.ndarray:
        ...
