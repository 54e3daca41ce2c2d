from __future__ import annotations

import math

import numpy as np


def check_pair(array1: np.ndarray, array2: np.ndarray) -> None:
    if not isinstance(array1, np.ndarray) or not isinstance(array2, np.ndarray):
        raise ValueError("crossover operands must be numpy arrays")
    if array1.shape != array2.shape:
        raise ValueError(f"array shapes differ: {array1.shape} vs {array2.shape}")


def check_probability(name: str, value: float) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")
    return value


def check_stdev(value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{value} is not a valid standard deviation")
    return value
