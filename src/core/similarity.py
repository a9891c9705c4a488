# src/core/similarity.py — v3
"""Cosine similarity between two embedding vectors.

Pure and deterministic. Vectors must come from the same embedding model;
comparing vectors of different length is treated as a programming error.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from donormatch.core.errors import DimensionMismatchError, InvalidInputError

logger = logging.getLogger(__name__)


def cosine_similarity(
    vec_a: Sequence[float] | np.ndarray | None,
    vec_b: Sequence[float] | np.ndarray | None,
) -> float:
    """Compute cosine similarity of two equal-length vectors.

    Args:
        vec_a: First vector.
        vec_b: Second vector.

    Returns:
        Similarity in [-1, 1]. Returns 0.0 when either vector has zero norm.

    Raises:
        InvalidInputError: If a vector is None or holds an undefined element.
        DimensionMismatchError: If the vectors differ in length.
    """
    if vec_a is None or vec_b is None:
        raise InvalidInputError("Invalid vectors: vectors cannot be None")

    if len(vec_a) != len(vec_b):
        raise DimensionMismatchError(len(vec_a), len(vec_b))

    a = _as_array(vec_a)
    b = _as_array(vec_b)

    denominator = float(np.linalg.norm(a)) * float(np.linalg.norm(b))
    if denominator == 0.0:
        return 0.0
    return float(np.dot(a, b) / denominator)


def _as_array(vec: Sequence[float] | np.ndarray) -> np.ndarray:
    """Convert to a float64 array, rejecting None/NaN elements."""
    if any(v is None for v in vec):
        index = next(i for i, v in enumerate(vec) if v is None)
        raise InvalidInputError(f"Undefined value at index {index}")
    arr = np.asarray(vec, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidInputError(f"Expected 1D vector, got {arr.ndim}D")
    nan_mask = np.isnan(arr)
    if nan_mask.any():
        raise InvalidInputError(f"Undefined value at index {int(np.argmax(nan_mask))}")
    return arr
