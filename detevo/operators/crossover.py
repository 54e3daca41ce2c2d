"""Crossover operators for numpy arrays.

Every operator takes two arrays of the same shape and an explicit
:class:`numpy.random.Generator`, and recombines the arrays in place. Element
positions are counted in C order, whatever the array's shape or layout.
"""

from __future__ import annotations

import numpy as np

from detevo.operators._checks import check_pair, check_probability

__all__ = [
    "n_point",
    "one_point",
    "swap_each",
    "swap_n",
    "swap_one",
    "two_point",
    "uniform",
    "uniform_with_ratio",
]


def _swap_masked(array1: np.ndarray, array2: np.ndarray, mask: np.ndarray) -> None:
    held = array1[mask].copy()
    array1[mask] = array2[mask]
    array2[mask] = held


def _positions_mask(shape: tuple[int, ...], positions: np.ndarray) -> np.ndarray:
    flat = np.zeros(int(np.prod(shape, dtype=np.int64)), dtype=bool)
    flat[positions] = True
    return flat.reshape(shape)


def swap_one(array1: np.ndarray, array2: np.ndarray, rng: np.random.Generator) -> None:
    """Swap one randomly chosen element."""
    check_pair(array1, array2)
    if array1.size == 0:
        raise ValueError("cannot swap elements of empty arrays")
    target = rng.integers(0, array1.size)
    _swap_masked(array1, array2, _positions_mask(array1.shape, np.array([target])))


def swap_n(n_swaps: int, array1: np.ndarray, array2: np.ndarray, rng: np.random.Generator) -> None:
    """Swap ``n_swaps`` distinct randomly chosen elements.

    Raises:
        ValueError: if ``n_swaps`` is negative or exceeds the array size.
    """
    check_pair(array1, array2)
    if not 0 <= n_swaps <= array1.size:
        raise ValueError(f"n_swaps must be within [0, {array1.size}], got {n_swaps}")
    targets = rng.choice(array1.size, size=n_swaps, replace=False)
    _swap_masked(array1, array2, _positions_mask(array1.shape, targets))


def swap_each(indpb: float, array1: np.ndarray, array2: np.ndarray, rng: np.random.Generator) -> None:
    """Swap each element independently with probability ``indpb``."""
    check_pair(array1, array2)
    indpb = check_probability("indpb", indpb)
    _swap_masked(array1, array2, rng.random(array1.shape) < indpb)


def uniform(array1: np.ndarray, array2: np.ndarray, rng: np.random.Generator) -> None:
    """Uniform crossover (discrete recombination) with an even mixing ratio."""
    uniform_with_ratio(0.5, array1, array2, rng)


def uniform_with_ratio(
    mixing_ratio: float, array1: np.ndarray, array2: np.ndarray, rng: np.random.Generator
) -> None:
    """Uniform crossover with a custom mixing ratio.

    For every position each child independently takes the value of
    ``array2`` with probability ``mixing_ratio`` and of ``array1`` otherwise,
    so both children may end up with the same parent's value.
    """
    check_pair(array1, array2)
    mixing_ratio = check_probability("mixing_ratio", mixing_ratio)
    take_b_for_1 = rng.random(array1.shape) < mixing_ratio
    take_b_for_2 = rng.random(array1.shape) < mixing_ratio

    old1 = array1.copy()
    old2 = array2.copy()
    array1[...] = np.where(take_b_for_1, old2, old1)
    array2[...] = np.where(take_b_for_2, old2, old1)


def one_point(array1: np.ndarray, array2: np.ndarray, rng: np.random.Generator) -> None:
    """Swap every element after one random pivot; needs at least 2 elements."""
    n_point(1, array1, array2, rng)


def two_point(array1: np.ndarray, array2: np.ndarray, rng: np.random.Generator) -> None:
    """Swap the segment between two random pivots; needs at least 3 elements."""
    n_point(2, array1, array2, rng)


def n_point(n_pivots: int, array1: np.ndarray, array2: np.ndarray, rng: np.random.Generator) -> None:
    """*n*-point crossover.

    Chooses ``n_pivots`` distinct pivots in ``0 .. size - 2`` and swaps the
    elements lying between every odd and even pivot, counting from the start.

    Raises:
        ValueError: if ``n_pivots`` is not within ``[1, size - 1]``.
    """
    check_pair(array1, array2)
    size = array1.size
    if not 1 <= n_pivots < size:
        raise ValueError(f"n_pivots must be within [1, {size - 1}], got {n_pivots}")

    pivots = rng.choice(size - 1, size=n_pivots, replace=False)
    toggles = np.zeros(size, dtype=np.int64)
    toggles[pivots + 1] = 1
    mask = (np.cumsum(toggles) % 2 == 1).reshape(array1.shape)
    _swap_masked(array1, array2, mask)
