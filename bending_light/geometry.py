"""
geometry.py - Planar vector helpers for ray segments and media

All points are numpy arrays of shape (2,) holding (x, y) in meters.
Polygons are (N, 2) arrays; a closing vertex equal to the first one is
allowed and ignored.

Project: Bending Light Optics Core
"""

import numpy as np
from typing import Sequence

from .errors import DegenerateGeometryError


def as_point(point: Sequence[float] | np.ndarray) -> np.ndarray:
    """
    Convert an (x, y) pair into a float64 array of shape (2,).

    Raises
    ------
    ValueError
        If the input does not hold exactly two coordinates
    """
    p = np.array(point, dtype=np.float64)
    if p.shape != (2,):
        raise ValueError(f"Expected a 2-D point, got shape {p.shape}")
    return p


def normalize(vector: np.ndarray) -> np.ndarray:
    """
    Normalize a vector to unit length.

    Parameters
    ----------
    vector : np.ndarray
        Input vector of any dimension

    Returns
    -------
    np.ndarray
        Unit vector in same direction

    Raises
    ------
    DegenerateGeometryError
        If vector has zero magnitude
    """
    magnitude = np.linalg.norm(vector)
    if magnitude == 0.0 or not np.isfinite(magnitude):
        raise DegenerateGeometryError(f"Cannot normalize vector {vector!r}")
    return vector / magnitude


def _open_ring(polygon: np.ndarray) -> np.ndarray:
    vertices = np.asarray(polygon, dtype=np.float64)
    if vertices.ndim != 2 or vertices.shape[1] != 2:
        raise ValueError(f"Expected an (N, 2) polygon, got shape {vertices.shape}")
    if len(vertices) > 1 and np.array_equal(vertices[0], vertices[-1]):
        vertices = vertices[:-1]
    return vertices


def polygon_contains(polygon: np.ndarray, point: Sequence[float] | np.ndarray) -> bool:
    """
    Even-odd point-in-polygon test.

    Parameters
    ----------
    polygon : np.ndarray
        (N, 2) vertices, open or closed
    point : array-like
        Query point (x, y)

    Returns
    -------
    bool
        True if the point lies inside the polygon
    """
    vertices = _open_ring(polygon)
    if len(vertices) < 3:
        return False
    x, y = as_point(point)

    xi, yi = vertices[:, 0], vertices[:, 1]
    xj, yj = np.roll(xi, 1), np.roll(yi, 1)

    # Edges that straddle the horizontal line through the point
    straddles = (yi > y) != (yj > y)
    with np.errstate(divide="ignore", invalid="ignore"):
        x_cross = xi + (y - yi) * (xj - xi) / (yj - yi)
    crossings = np.count_nonzero(straddles & (x < x_cross))
    return bool(crossings % 2 == 1)


def segment_distance(
    point: Sequence[float] | np.ndarray,
    start: np.ndarray,
    end: np.ndarray
) -> float:
    """
    Shortest distance from a point to the line segment start-end.

    A zero-length segment degrades to the distance to its single point.
    """
    p = as_point(point)
    d = end - start
    length_squared = float(np.dot(d, d))
    if length_squared == 0.0:
        return float(np.linalg.norm(p - start))
    t = np.clip(np.dot(p - start, d) / length_squared, 0.0, 1.0)
    closest = start + t * d
    return float(np.linalg.norm(p - closest))
