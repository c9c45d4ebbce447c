# src/ragline/vectors.py
"""Vector literal codec and distance helpers.

Vectors travel to the store as text literals of the form ``[v0,v1,...,vn]``.
Components are always written in fixed decimal notation with eight places;
the store's parser rejects exponent notation such as ``1.5e-05``.
"""

import math
import re
from collections.abc import Sequence

import numpy as np

from ragline.exceptions import ValidationError

LITERAL_PRECISION = 8

_COMPONENT = re.compile(r"^-?\d+(\.\d+)?$")


def to_vector_literal(vector: Sequence[float]) -> str:
    """Encode a vector as ``[x,y,...]`` in fixed decimal notation."""
    if not vector:
        raise ValidationError("Cannot encode an empty vector")
    if not all(math.isfinite(v) for v in vector):
        raise ValidationError("Cannot encode a vector with NaN or infinite components")
    return "[" + ",".join(f"{float(v):.{LITERAL_PRECISION}f}" for v in vector) + "]"


def parse_vector_literal(literal: str) -> list[float]:
    """Decode a vector literal produced by to_vector_literal.

    Raises:
        ValidationError: If the literal is malformed or uses exponent notation.
    """
    text = literal.strip()
    if not (text.startswith("[") and text.endswith("]")):
        raise ValidationError(f"Malformed vector literal: {literal[:40]!r}")

    parts = [p.strip() for p in text[1:-1].split(",")]
    if parts == [""]:
        raise ValidationError("Empty vector literal")
    for part in parts:
        if not _COMPONENT.match(part):
            raise ValidationError(f"Invalid vector component: {part!r}")
    return [float(p) for p in parts]


def cosine_distances(matrix: np.ndarray, query: np.ndarray) -> np.ndarray:
    """Cosine distance (1 - cosine similarity) of each row of matrix to query.

    Zero-norm rows or queries are treated as maximally dissimilar (distance 1).
    """
    row_norms = np.linalg.norm(matrix, axis=1)
    query_norm = np.linalg.norm(query)
    denom = row_norms * query_norm
    sims = np.divide(
        matrix @ query,
        denom,
        out=np.zeros(matrix.shape[0], dtype=float),
        where=denom != 0,
    )
    return 1.0 - sims
