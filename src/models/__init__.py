"""
Typed models for the object detection demo.

Plain immutable records plus adapters to dicts.
"""

from .frame import FrameData
from .detection import BoundingBox, Rect
from .labels import COCO_CLASSES, ClassNameTable, load_class_names
from .config import (
    Config,
    ModelConfig,
    PostprocessConfig,
    LabelsConfig,
    AnnotateConfig,
)

__all__ = [
    # Frame
    "FrameData",
    # Detection
    "BoundingBox",
    "Rect",
    # Labels
    "COCO_CLASSES",
    "ClassNameTable",
    "load_class_names",
    # Config
    "Config",
    "ModelConfig",
    "PostprocessConfig",
    "LabelsConfig",
    "AnnotateConfig",
]
