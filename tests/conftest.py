"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models.detection import BoundingBox, Rect
from models.labels import ClassNameTable


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text(f"""
model:
  path: ""
  input_size: 640

postprocess:
  conf_threshold: 0.3
  iou_threshold: 0.3
  limit: 15
  sort_order: "ascending"

labels:
  path: null

log_path: "{(tmp_path / 'logs' / 'test.log').as_posix()}"
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "model": {
            "path": "",
            "input_size": 640,
        },
        "postprocess": {
            "conf_threshold": 0.3,
            "iou_threshold": 0.3,
            "limit": 15,
            "sort_order": "ascending",
        },
        "labels": {"path": None},
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }


@pytest.fixture
def two_classes():
    """Synthetic two-class table."""
    return ClassNameTable.from_names(["cat", "dog"])


@pytest.fixture
def coco():
    return ClassNameTable.coco()


@pytest.fixture
def single_row_prediction():
    """One row, two classes: center (100, 100), 50x50, objectness 0.9, class 1 wins."""
    return np.array([[100, 100, 50, 50, 0.9, 0.1, 0.8]], dtype=np.float64)


@pytest.fixture
def make_box():
    """Factory building a BoundingBox from an (l, t, r, b) tuple."""
    def _make(rect, score, label="obj"):
        return BoundingBox(label=label, score=score, rect=Rect.from_tuple(rect))
    return _make
