"""
Image preprocessing for YOLOv5 input.

Produces the [1, 3, S, S] float32 tensor the model expects:
RGB, values in [0, 1], channel-first, with a batch axis.
"""

from __future__ import annotations

import cv2
import numpy as np

DEFAULT_INPUT_SIZE = 640


def prepare_input(frame: np.ndarray, input_size: int = DEFAULT_INPUT_SIZE, bgr: bool = True) -> np.ndarray:
    """
    Convert an HxWx3 uint8 image into a model input tensor.

    Args:
        frame: Image array, BGR as returned by cv2 unless ``bgr`` is False.
        input_size: Side of the square model input.
        bgr: Whether the frame is BGR and must be swapped to RGB.

    Returns:
        Array of shape (1, 3, input_size, input_size), dtype float32.
    """
    if frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(f"Expected an HxWx3 image, got shape {frame.shape}")

    if bgr:
        frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    # The image is stretched, not letterboxed; box scaling undoes this per axis.
    resized = cv2.resize(frame, (input_size, input_size), interpolation=cv2.INTER_LINEAR)
    tensor = resized.astype(np.float32) / 255.0
    tensor = np.transpose(tensor, (2, 0, 1))
    return np.ascontiguousarray(tensor[np.newaxis, ...])
