"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ModelConfig:
    """Model / runtime configuration."""
    path: str = ""
    input_size: int = 640
    device: str = "cpu"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ModelConfig":
        """Adapter: Create from config dictionary."""
        return cls(
            path=d.get("path") or "",
            input_size=d.get("input_size", 640),
            device=d.get("device", "cpu"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "input_size": self.input_size,
            "device": self.device,
        }


@dataclass
class PostprocessConfig:
    """
    Decode + NMS configuration.

    sort_order "ascending" processes low-confidence boxes first (the
    mobile demo behavior); "descending" is conventional NMS.
    """
    conf_threshold: float = 0.3
    iou_threshold: float = 0.3
    limit: int = 15
    sort_order: str = "ascending"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PostprocessConfig":
        return cls(
            conf_threshold=d.get("conf_threshold", 0.3),
            iou_threshold=d.get("iou_threshold", 0.3),
            limit=d.get("limit", 15),
            sort_order=d.get("sort_order", "ascending"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conf_threshold": self.conf_threshold,
            "iou_threshold": self.iou_threshold,
            "limit": self.limit,
            "sort_order": self.sort_order,
        }


@dataclass
class LabelsConfig:
    """Class-name table source. No path means the built-in COCO names."""
    path: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LabelsConfig":
        return cls(path=d.get("path"))

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path}


@dataclass
class AnnotateConfig:
    """Overlay drawing options."""
    color: List[int] = field(default_factory=lambda: [0, 0, 255])
    thickness: int = 3
    font_scale: float = 0.5
    scale: float = 1.0
    show_score: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnnotateConfig":
        return cls(
            color=d.get("color", [0, 0, 255]),
            thickness=d.get("thickness", 3),
            font_scale=d.get("font_scale", 0.5),
            scale=d.get("scale", 1.0),
            show_score=d.get("show_score", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "color": self.color,
            "thickness": self.thickness,
            "font_scale": self.font_scale,
            "scale": self.scale,
            "show_score": self.show_score,
        }


@dataclass
class Config:
    """
    Complete application configuration.

    This is a typed representation of the YAML config structure.
    """
    model: ModelConfig = field(default_factory=ModelConfig)
    postprocess: PostprocessConfig = field(default_factory=PostprocessConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    annotate: AnnotateConfig = field(default_factory=AnnotateConfig)
    log_path: Optional[str] = "logs/detect.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            model=ModelConfig.from_dict(d.get("model") or {}),
            postprocess=PostprocessConfig.from_dict(d.get("postprocess") or {}),
            labels=LabelsConfig.from_dict(d.get("labels") or {}),
            annotate=AnnotateConfig.from_dict(d.get("annotate") or {}),
            log_path=d.get("log_path", "logs/detect.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary (for saving or passing to existing code)."""
        return {
            "model": self.model.to_dict(),
            "postprocess": self.postprocess.to_dict(),
            "labels": self.labels.to_dict(),
            "annotate": self.annotate.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
