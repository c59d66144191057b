"""
Object detector: preprocess -> model forward -> decode + NMS.

The detector owns no model-specific logic; any PredictionBackend producing
YOLOv5-layout output can be plugged in.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from inference.backend import PredictionBackend
from inference.preprocess import DEFAULT_INPUT_SIZE, prepare_input
from models.config import PostprocessConfig
from models.detection import BoundingBox
from models.frame import FrameData, scale_factors
from postprocess.pipeline import outputs_to_nms_predictions


@dataclass(frozen=True)
class DetectionTimings:
    """Durations of the last detect() call, in milliseconds."""
    pack_ms: float = 0.0
    inference_ms: float = 0.0
    unpack_ms: float = 0.0


class ObjectDetector:
    """
    Detect objects in full-resolution images.

    Example:
        backend = TorchScriptBackend(TorchScriptConfig("yolov5s.torchscript"))
        detector = ObjectDetector(backend, ClassNameTable.coco(), PostprocessConfig())
        boxes = detector.detect(cv2.imread("street.jpg"))
    """

    def __init__(
        self,
        backend: Optional[PredictionBackend],
        class_names: Sequence[str],
        postprocess: Optional[PostprocessConfig] = None,
        input_size: int = DEFAULT_INPUT_SIZE,
    ):
        self.backend = backend
        self.class_names = class_names
        self.postprocess = postprocess or PostprocessConfig()
        self.input_size = input_size
        self.last_timings = DetectionTimings()

    def detect(self, frame: np.ndarray) -> List[BoundingBox]:
        """
        Run the full detection cycle on one image.

        Returns:
            Boxes in the image's pixel coordinates, in selection order.
        """
        if self.backend is None:
            raise RuntimeError("No prediction backend configured; use detect_prediction()")

        frame_data = FrameData.from_numpy(frame)

        start = time.perf_counter()
        tensor = prepare_input(frame, self.input_size)
        pack_ms = (time.perf_counter() - start) * 1000

        start = time.perf_counter()
        output = self.backend.forward(tensor)
        inference_ms = (time.perf_counter() - start) * 1000

        start = time.perf_counter()
        results = self._postprocess(output, *frame_data.scale_factors(self.input_size))
        unpack_ms = (time.perf_counter() - start) * 1000

        self.last_timings = DetectionTimings(pack_ms=pack_ms, inference_ms=inference_ms, unpack_ms=unpack_ms)
        logging.debug(f"pack time {pack_ms:.3f} ms")
        logging.debug(f"inference time {inference_ms:.3f} ms")
        logging.debug(f"unpack time {unpack_ms:.3f} ms")

        return results

    def detect_prediction(self, prediction: np.ndarray, width: int, height: int) -> List[BoundingBox]:
        """
        Post-process a raw prediction for an image of the given size.

        Args:
            prediction: Raw model output, [rows, cols] or [1, rows, cols].
            width: Source image width in pixels.
            height: Source image height in pixels.
        """
        return self._postprocess(prediction, *scale_factors(width, height, self.input_size))

    def _postprocess(self, prediction: np.ndarray, scale_x: float, scale_y: float) -> List[BoundingBox]:
        cfg = self.postprocess
        return outputs_to_nms_predictions(
            prediction,
            scale_x=scale_x,
            scale_y=scale_y,
            class_names=self.class_names,
            conf_threshold=cfg.conf_threshold,
            iou_threshold=cfg.iou_threshold,
            limit=cfg.limit,
            sort_order=cfg.sort_order,
        )
