"""Mutation operators for numpy arrays, applied in place."""

from __future__ import annotations

import numpy as np

from detevo.operators._checks import check_probability, check_stdev

__all__ = ["gaussian", "gaussian_with", "shuffle"]


def _check_float_array(arr: np.ndarray) -> None:
    if not isinstance(arr, np.ndarray) or not np.issubdtype(arr.dtype, np.floating):
        raise ValueError("gaussian mutation needs a floating-point numpy array")


def gaussian(arr: np.ndarray, indpb: float, stdev: float, rng: np.random.Generator) -> None:
    """Add N(0, stdev) noise to each element with probability ``indpb``.

    Raises:
        ValueError: for a non-float array, ``indpb`` outside [0, 1], or a
            negative or non-finite ``stdev``.
    """
    _check_float_array(arr)
    indpb = check_probability("indpb", indpb)
    stdev = check_stdev(stdev)

    mask = rng.random(arr.shape) < indpb
    arr[mask] += stdev * rng.standard_normal(int(mask.sum()))


def gaussian_with(
    arr: np.ndarray,
    probabilities: np.ndarray,
    stdevs: np.ndarray,
    rng: np.random.Generator,
) -> None:
    """Like :func:`gaussian` with a probability and deviation per element.

    A zero in ``stdevs`` pins the corresponding element.
    """
    _check_float_array(arr)
    probabilities = np.asarray(probabilities, dtype=np.float64)
    stdevs = np.asarray(stdevs, dtype=np.float64)
    if probabilities.shape != arr.shape or stdevs.shape != arr.shape:
        raise ValueError(
            f"probabilities {probabilities.shape} and stdevs {stdevs.shape} must match array shape {arr.shape}"
        )
    if np.any((probabilities < 0) | (probabilities > 1)):
        raise ValueError("probabilities must be within [0, 1]")
    if not np.all(np.isfinite(stdevs)) or np.any(stdevs < 0):
        raise ValueError("stdevs must be finite and non-negative")

    mask = rng.random(arr.shape) < probabilities
    arr[mask] += stdevs[mask] * rng.standard_normal(int(mask.sum()))


def shuffle(arr: np.ndarray, indpb: float, rng: np.random.Generator) -> None:
    """With probability ``indpb`` per element, swap it with a random element.

    Swaps happen in C order, one after the other.
    """
    if not isinstance(arr, np.ndarray):
        raise ValueError("shuffle needs a numpy array")
    indpb = check_probability("indpb", indpb)
    size = arr.size
    if size == 0:
        return

    rolls = rng.random(size) < indpb
    targets = rng.integers(0, size, size=size)
    flat = arr.flat
    for i in np.flatnonzero(rolls):
        j = int(targets[i])
        flat[i], flat[j] = flat[j], flat[i]
