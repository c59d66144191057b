"""
Object detection: runs a prediction backend and post-processes its output.
"""

from .detector import DetectionTimings, ObjectDetector

__all__ = ["DetectionTimings", "ObjectDetector"]
