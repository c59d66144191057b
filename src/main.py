"""
YOLOv5 object detection demo.

Runs post-processing (decode + NMS) on a raw prediction tensor, or the full
detection cycle on an image with a TorchScript model, and reports the boxes.

Usage:
    python src/main.py --prediction pred.npy --image-size 1280 720
    python src/main.py --prediction pred.npy --image street.jpg --output out.jpg
    python src/main.py --image street.jpg --model yolov5s.torchscript

Arguments:
    --config: Path to configuration file
    --prediction: Saved raw prediction tensor (.npy)
    --image: Source image (size for scaling, and annotation/inference input)
    --image-size: Source width and height when no image is given
    --model: TorchScript model (overrides model.path)
    --output: Write the annotated image here
    --json: Write the detections as a JSON list here
"""

import os
import sys
import argparse
import json
import logging
import yaml
import cv2
import numpy as np
from typing import Dict, Any, List, Optional, Sequence, Tuple

from annotate.overlay import draw_boxes
from detection.detector import ObjectDetector
from models.config import Config
from models.detection import BoundingBox
from models.frame import FrameData
from models.labels import ClassNameTable, load_class_names
from ops.logging import setup_logging
from postprocess.nms import SORT_ORDERS


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    """
    try:
        base_path = os.path.join(os.path.dirname(config_path), "default.yaml")
        base_cfg: Dict[str, Any] = {}
        if os.path.exists(base_path):
            with open(base_path, "r") as f:
                base_cfg = yaml.safe_load(f) or {}

        local_overrides_path = os.path.join(os.path.dirname(config_path), "config.yaml")
        local_cfg: Dict[str, Any] = {}
        if os.path.exists(local_overrides_path):
            with open(local_overrides_path, "r") as f:
                local_cfg = yaml.safe_load(f) or {}

        merged = _deep_merge(base_cfg, local_cfg)

        # Finally apply explicit config_path if it's not the local override file itself
        if os.path.exists(config_path) and os.path.abspath(config_path) != os.path.abspath(local_overrides_path):
            with open(config_path, "r") as f:
                explicit_cfg = yaml.safe_load(f) or {}
            merged = _deep_merge(merged, explicit_cfg)

        return merged
    except Exception as e:
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration file structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    # Required top-level sections
    required_sections = ['model', 'postprocess', 'log_path', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    # Validate model settings
    model = config.get('model') or {}
    input_size = model.get('input_size', 640)
    if not isinstance(input_size, int) or isinstance(input_size, bool) or input_size <= 0:
        return False, "model.input_size must be a positive integer"

    # Validate post-processing settings
    post = config.get('postprocess') or {}
    for key in ('conf_threshold', 'iou_threshold'):
        if key in post:
            value = post[key]
            if not _is_number(value) or not (0 <= value <= 1):
                return False, f"postprocess.{key} must be a number between 0 and 1"

    if 'limit' in post:
        limit = post['limit']
        if not isinstance(limit, int) or isinstance(limit, bool) or limit < 0:
            return False, "postprocess.limit must be a non-negative integer"

    sort_order = post.get('sort_order', 'ascending')
    if sort_order not in SORT_ORDERS:
        return False, f"postprocess.sort_order must be one of: {', '.join(SORT_ORDERS)}"

    labels = config.get('labels') or {}
    if labels.get('path') is not None and not isinstance(labels['path'], str):
        return False, "labels.path must be a string or null"

    annotate = config.get('annotate') or {}
    if 'scale' in annotate:
        if not _is_number(annotate['scale']) or annotate['scale'] <= 0:
            return False, "annotate.scale must be a positive number"

    if 'color' in annotate:
        color = annotate['color']
        if (
            not isinstance(color, list)
            or len(color) != 3
            or not all(isinstance(c, int) and not isinstance(c, bool) for c in color)
        ):
            return False, "annotate.color must be a list of three integers (BGR)"

    if 'thickness' in annotate:
        thickness = annotate['thickness']
        if not isinstance(thickness, int) or isinstance(thickness, bool) or thickness <= 0:
            return False, "annotate.thickness must be a positive integer"

    # Validate log settings
    valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if config['log_level'] not in valid_log_levels:
        return False, f"log_level must be one of: {', '.join(valid_log_levels)}"

    return True, None


def load_labels(cfg: Config) -> ClassNameTable:
    """Class-name table from labels.path, or the COCO names."""
    if cfg.labels.path:
        table = load_class_names(cfg.labels.path)
        logging.info(f"Loaded {len(table)} class names from {cfg.labels.path}")
        return table
    return ClassNameTable.coco()


def write_results(boxes: Sequence[BoundingBox], json_path: Optional[str]) -> None:
    """Print one JSON record per box, and optionally save the full list."""
    records = [b.to_dict() for b in boxes]
    for record in records:
        print(json.dumps(record))

    if json_path:
        out_dir = os.path.dirname(json_path)
        if out_dir and not os.path.exists(out_dir):
            os.makedirs(out_dir)
        with open(json_path, "w") as f:
            json.dump(records, f, indent=2)
        logging.info(f"Wrote {len(records)} detections to {json_path}")


def _read_image(path: str) -> np.ndarray:
    image = cv2.imread(path)
    if image is None:
        raise ValueError(f"Could not read image: {path}")
    return image


def run(args: argparse.Namespace, cfg: Config) -> List[BoundingBox]:
    """Run one detection cycle according to the parsed arguments."""
    class_names = load_labels(cfg)

    image = _read_image(args.image) if args.image else None

    if args.prediction:
        if image is not None:
            width, height = FrameData.from_numpy(image, source=args.image).size
        elif args.image_size:
            width, height = args.image_size
        else:
            raise ValueError("--prediction needs --image or --image-size for box scaling")

        prediction = np.load(args.prediction)
        logging.info(f"Loaded prediction {args.prediction} with shape {prediction.shape}")

        # Post-processing only; no backend needed
        detector = ObjectDetector(
            backend=None,
            class_names=class_names,
            postprocess=cfg.postprocess,
            input_size=cfg.model.input_size,
        )
        boxes = detector.detect_prediction(prediction, width, height)
    else:
        if image is None:
            raise ValueError("Either --prediction or --image is required")
        model_path = args.model or cfg.model.path
        if not model_path:
            raise ValueError("No model configured: pass --model or set model.path")

        from inference.torchscript_backend import TorchScriptBackend, TorchScriptConfig

        backend = TorchScriptBackend(TorchScriptConfig(model_path=model_path, device=cfg.model.device))
        detector = ObjectDetector(
            backend=backend,
            class_names=class_names,
            postprocess=cfg.postprocess,
            input_size=cfg.model.input_size,
        )
        boxes = detector.detect(image)
        t = detector.last_timings
        logging.info(
            f"pack {t.pack_ms:.3f} ms, inference {t.inference_ms:.3f} ms, unpack {t.unpack_ms:.3f} ms"
        )

    logging.info(f"Detected {len(boxes)} objects")

    if args.output:
        if image is None:
            raise ValueError("--output needs --image to draw on")
        a = cfg.annotate
        canvas = image
        if a.scale != 1.0:
            # Draw on a downscaled copy; draw_boxes divides box coords to match
            h, w = image.shape[:2]
            canvas = cv2.resize(image, (int(w / a.scale), int(h / a.scale)))
        annotated = draw_boxes(
            canvas,
            boxes,
            color=tuple(a.color),
            thickness=a.thickness,
            font_scale=a.font_scale,
            scale=a.scale,
            show_score=a.show_score,
        )
        if not cv2.imwrite(args.output, annotated):
            raise ValueError(f"Could not write image: {args.output}")
        logging.info(f"Annotated image written to {args.output}")

    return boxes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='YOLOv5 object detection demo')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--prediction', type=str, default=None,
                        help='Saved raw prediction tensor (.npy)')
    parser.add_argument('--image', type=str, default=None,
                        help='Source image')
    parser.add_argument('--image-size', type=int, nargs=2, metavar=('WIDTH', 'HEIGHT'), default=None,
                        help='Source image size when no image is given')
    parser.add_argument('--model', type=str, default=None,
                        help='TorchScript model path (overrides model.path)')
    parser.add_argument('--output', type=str, default=None,
                        help='Write the annotated image here')
    parser.add_argument('--json', type=str, default=None,
                        help='Write detections as a JSON list here')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application function."""
    args = build_parser().parse_args(argv)

    # Load configuration
    config = load_config(args.config)

    # Validate configuration
    is_valid, error_msg = validate_config(config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        return 1

    # Setup logging
    setup_logging(config['log_path'], config['log_level'])
    cfg = Config.from_dict(config)

    try:
        boxes = run(args, cfg)
        write_results(boxes, args.json)
    except Exception as e:
        logging.error(f"Detection failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
