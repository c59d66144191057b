"""
FrameData model for images handed to the detector.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


def scale_factors(width: int, height: int, input_size: int) -> Tuple[float, float]:
    """
    Ratios that map square model-input coordinates back to a source image.

    Returns:
        (width / input_size, height / input_size)
    """
    return (width / input_size, height / input_size)


@dataclass
class FrameData:
    """
    A source image and its size.

    Attributes:
        frame: The raw image data as a numpy array (BGR format).
        width: Image width in pixels.
        height: Image height in pixels.
        source: Identifier for the camera/file the image came from.
    """
    frame: np.ndarray
    width: int
    height: int
    source: Optional[str] = None

    @classmethod
    def from_numpy(cls, frame: np.ndarray, source: Optional[str] = None) -> "FrameData":
        """Create FrameData from an HxWxC array."""
        h, w = frame.shape[:2]
        return cls(frame=frame, width=w, height=h, source=source)

    @property
    def size(self) -> Tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)

    def scale_factors(self, input_size: int) -> Tuple[float, float]:
        return scale_factors(self.width, self.height, input_size)
