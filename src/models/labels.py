"""
Class-name tables mapping model class ids to human-readable labels.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

import yaml


COCO_CLASSES: Tuple[str, ...] = (
    "person", "bicycle", "car", "motorcycle", "airplane", "bus", "train",
    "truck", "boat", "traffic light", "fire hydrant", "stop sign",
    "parking meter", "bench", "bird", "cat", "dog", "horse", "sheep", "cow",
    "elephant", "bear", "zebra", "giraffe", "backpack", "umbrella", "handbag",
    "tie", "suitcase", "frisbee", "skis", "snowboard", "sports ball", "kite",
    "baseball bat", "baseball glove", "skateboard", "surfboard",
    "tennis racket", "bottle", "wine glass", "cup", "fork", "knife", "spoon",
    "bowl", "banana", "apple", "sandwich", "orange", "broccoli", "carrot",
    "hot dog", "pizza", "donut", "cake", "chair", "couch", "potted plant",
    "bed", "dining table", "toilet", "tv", "laptop", "mouse", "remote",
    "keyboard", "cell phone", "microwave", "oven", "toaster", "sink",
    "refrigerator", "book", "clock", "vase", "scissors", "teddy bear",
    "hair drier", "toothbrush",
)


@dataclass(frozen=True)
class ClassNameTable:
    """
    Read-only, ordered list of class names indexed by class id.

    Tables are passed into the decoder explicitly, so tests can use
    synthetic class sets instead of the COCO names.
    """
    names: Tuple[str, ...]

    def __post_init__(self):
        if not self.names:
            raise ValueError("Class-name table must contain at least one name")

    def __len__(self) -> int:
        return len(self.names)

    def __getitem__(self, class_id: int) -> str:
        return self.names[class_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ClassNameTable":
        return cls(names=tuple(str(n) for n in names))

    @classmethod
    def coco(cls) -> "ClassNameTable":
        """The 80 COCO class names used by the stock YOLOv5 weights."""
        return cls(names=COCO_CLASSES)


def load_class_names(path: str) -> ClassNameTable:
    """
    Load a class-name table from disk.

    Supported formats, chosen by extension:
    - .json: a JSON list of names
    - .yaml / .yml: a YAML list, or a mapping with a ``names`` key
    - anything else: plain text, one name per line (blank lines ignored)
    """
    ext = os.path.splitext(path)[1].lower()
    with open(path, "r", encoding="utf-8") as f:
        if ext == ".json":
            data = json.load(f)
        elif ext in (".yaml", ".yml"):
            data = yaml.safe_load(f)
            if isinstance(data, dict) and "names" in data:
                data = data["names"]
        else:
            data = [line.strip() for line in f if line.strip()]

    if isinstance(data, dict):
        # {0: "person", 1: "bicycle", ...} as written by some exporters
        data = [data[k] for k in sorted(data, key=int)]
    if not isinstance(data, list):
        raise ValueError(f"Class-name file {path} does not contain a list of names")

    return ClassNameTable.from_names(data)
