"""
Frame annotation for detection results.
"""

from .overlay import draw_boxes

__all__ = ["draw_boxes"]
