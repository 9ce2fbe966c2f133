# src/trackprop/actions/stepping_logger.py
from __future__ import annotations
from typing import Any, List
import numpy as np

__all__ = ["StepTrace", "SteppingLogger"]


class StepTrace:
    """Per-step record written by SteppingLogger."""

    def __init__(self) -> None:
        self.position_list: List[np.ndarray] = []
        self.path_lengths: List[float] = []
        self.step_sizes: List[float] = []

    @property
    def positions(self) -> np.ndarray:
        """Positions after every step, shape (n, 3)."""
        if not self.position_list:
            return np.zeros((0, 3))
        return np.vstack(self.position_list)

    def __len__(self) -> int:
        return len(self.position_list)


class SteppingLogger:
    """Action recording position, accumulated path and step size after each step."""

    result_type = StepTrace

    def __call__(self, cache: Any, result: Any) -> None:
        trace = result.get(StepTrace)
        trace.position_list.append(np.array(cache.position, copy=True))
        trace.path_lengths.append(float(result.path_length))
        trace.step_sizes.append(float(cache.last_step))
