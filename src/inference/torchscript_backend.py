"""
PyTorch TorchScript inference backend.

Uses PyTorch if installed. Export a YOLOv5 model with
`python export.py --weights yolov5s.pt --include torchscript` to get a
compatible file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .backend import PredictionBackend


@dataclass(frozen=True)
class TorchScriptConfig:
    model_path: str
    device: str = "cpu"


class TorchScriptBackend(PredictionBackend):
    def __init__(self, cfg: TorchScriptConfig):
        self.cfg = cfg
        try:
            import torch  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ImportError(
                "PyTorch is not installed. Install with `pip install torch` "
                "or pass a saved prediction tensor with --prediction."
            ) from e

        self._torch = torch
        self._model = torch.jit.load(cfg.model_path, map_location=cfg.device)
        self._model.eval()
        logging.info(f"Loaded TorchScript model {cfg.model_path} on {cfg.device}")

    def forward(self, tensor: np.ndarray) -> np.ndarray:
        inputs = self._torch.from_numpy(tensor).to(self.cfg.device)
        with self._torch.no_grad():
            output = self._model(inputs)

        # YOLOv5 exports return (prediction, ...) when not fused
        if isinstance(output, (tuple, list)):
            output = output[0]
        return output.cpu().numpy()
