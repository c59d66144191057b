"""
Inference runtimes that turn an image tensor into a raw prediction tensor.
"""

from .backend import PredictionBackend
from .preprocess import DEFAULT_INPUT_SIZE, prepare_input

__all__ = ["PredictionBackend", "DEFAULT_INPUT_SIZE", "prepare_input"]
