"""
Panel boundary geometry: polygon construction, containment and sampling.

All tests work on the horizontal projection of a point, i.e. its ``(x, z)``
components. Nested regions are the same polygon scaled about its centroid.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

import numpy as np

from . import constants
from .constants import DEBUG
from .data_classes import BoundaryPolygon, ConfigurationError
from .. import config


def _horizontal(points: np.ndarray) -> np.ndarray:
    """Return the (x, z) projection of 3D points, or 2D points unchanged."""
    pts = np.asarray(points, dtype=float)
    if pts.shape[-1] == 3:
        return pts[..., [0, 2]]
    if pts.shape[-1] == 2:
        return pts
    raise ValueError(f"Expected points with 2 or 3 components, got shape {pts.shape}")


def _edge_cross_products(vertices: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Cross product of every edge with (point - edge start), shape (n_points, n_edges)."""
    a = vertices
    b = np.roll(vertices, -1, axis=0)
    edge = b - a  # (m, 2)
    rel = points[:, np.newaxis, :] - a[np.newaxis, :, :]  # (n, m, 2)
    return edge[np.newaxis, :, 0] * rel[..., 1] - edge[np.newaxis, :, 1] * rel[..., 0]


def regular_polygon_vertices(
    n_sides: int,
    radius: float,
    rotation: float = 0.0,
) -> np.ndarray:
    """Vertices of a regular polygon centred on the origin, counter-clockwise.

    Parameters
    ----------
    n_sides : int
        Number of vertices.
    radius : float
        Circumradius (m).
    rotation : float
        Angle of the first vertex (rad).
    """
    angles = rotation + 2.0 * math.pi * np.arange(n_sides) / n_sides
    return np.column_stack([radius * np.cos(angles), radius * np.sin(angles)])


def build_boundary_polygon(vertices: Sequence[Sequence[float]]) -> BoundaryPolygon:
    """Validate a vertex list and precompute centroid, circumradius and apothem.

    Parameters
    ----------
    vertices : sequence of (x, z) pairs
        Convex polygon in winding order (either direction).

    Raises
    ------
    ConfigurationError
        For fewer than 3 vertices, non-finite coordinates, or a polygon whose
        consecutive edges do not all turn the same way.
    """
    verts = np.asarray(vertices, dtype=float)
    if verts.ndim != 2 or verts.shape[1] != 2:
        raise ConfigurationError(f"Polygon vertices must have shape (n, 2), got {verts.shape}")
    if verts.shape[0] < 3:
        raise ConfigurationError(f"Polygon needs at least 3 vertices, got {verts.shape[0]}")
    if not np.all(np.isfinite(verts)):
        raise ConfigurationError("Polygon vertices must be finite")

    centroid = verts.mean(axis=0)
    # Rounding residue of a symmetric polygon would shift atan2 at the centre
    span = float(np.max(np.abs(verts)))
    centroid[np.abs(centroid) < 1e-12 * span] = 0.0

    # Every edge must see the centroid on the same side
    crosses = _edge_cross_products(verts, centroid[np.newaxis, :])[0]
    if np.any(crosses == 0.0) or not (np.all(crosses > 0.0) or np.all(crosses < 0.0)):
        raise ConfigurationError("Polygon must be convex with consistent winding")

    a = verts
    b = np.roll(verts, -1, axis=0)
    edge_lengths = np.linalg.norm(b - a, axis=1)
    if np.any(edge_lengths == 0.0):
        raise ConfigurationError("Polygon has repeated consecutive vertices")

    circumradius = float(np.max(np.linalg.norm(verts - centroid, axis=1)))
    apothem = float(np.min(np.abs(crosses) / edge_lengths))

    return BoundaryPolygon(
        vertices=verts,
        centroid=centroid,
        circumradius=circumradius,
        apothem=apothem,
    )


def build_hex_panel(
    radius: float = config.HEX_RADIUS,
    rotation: float = config.HEX_ROTATION_RAD,
) -> BoundaryPolygon:
    """Default flat-top hexagonal panel footprint."""
    return build_boundary_polygon(regular_polygon_vertices(6, radius, rotation))


def scaled_vertices(polygon: BoundaryPolygon, scale: float) -> np.ndarray:
    """Polygon vertices scaled uniformly about the centroid."""
    return polygon.centroid + scale * (polygon.vertices - polygon.centroid)


def polygon_contains(
    polygon: BoundaryPolygon,
    points: np.ndarray,
    scale: float = 1.0,
) -> Union[bool, np.ndarray]:
    """Test whether points lie inside the polygon scaled by ``scale``.

    A point is inside when every non-zero edge cross product has the same
    sign. Zero cross products (point on an edge line) are skipped, so points
    exactly on an edge count as inside. A point that yields no non-zero cross
    product at all, which only happens for a polygon collapsed by
    ``scale <= 0``, is outside.

    Parameters
    ----------
    polygon : BoundaryPolygon
        Panel footprint.
    points : np.ndarray
        One point, shape (3,) or (2,), or many, shape (n, 3) or (n, 2).
    scale : float
        Uniform scale about the centroid.

    Returns
    -------
    bool or np.ndarray of bool
        Scalar for a single point, otherwise shape (n,).
    """
    pts = _horizontal(points)
    single = pts.ndim == 1
    pts = np.atleast_2d(pts)

    if scale <= 0.0:
        result = np.zeros(pts.shape[0], dtype=bool)
    else:
        crosses = _edge_cross_products(scaled_vertices(polygon, scale), pts)
        has_pos = np.any(crosses > 0.0, axis=1)
        has_neg = np.any(crosses < 0.0, axis=1)
        result = has_pos ^ has_neg

    if single:
        return bool(result[0])
    return result


def horizontal_distance(polygon: BoundaryPolygon, points: np.ndarray) -> np.ndarray:
    """Distance of points from the polygon centroid in the (x, z) plane."""
    pts = np.atleast_2d(_horizontal(points))
    return np.linalg.norm(pts - polygon.centroid, axis=1)


def sample_point_in_polygon(
    polygon: BoundaryPolygon,
    scale: float = 1.0,
    rng: Optional[np.random.Generator] = None,
    max_retries: int = config.SAMPLE_RETRY_CAP,
) -> np.ndarray:
    """Draw a uniform (x, z) point inside the scaled polygon by rejection.

    Candidates are drawn from the square of side ``2 * R * scale`` around
    the centroid (``R`` the circumradius). After ``max_retries`` rejected
    draws the centroid is returned instead and the miss is counted in
    :data:`~dust_simulation.core.constants.SAMPLING_STATS`.

    Returns
    -------
    np.ndarray, shape (2,)
    """
    if rng is None:
        rng = np.random.default_rng()

    stats = constants.SAMPLING_STATS
    stats['total_samples'] += 1

    half = polygon.circumradius * scale
    for _ in range(max_retries):
        stats['total_draws'] += 1
        candidate = polygon.centroid + rng.uniform(-half, half, size=2)
        if polygon_contains(polygon, candidate, scale):
            return candidate

    stats['retry_cap_hits'] += 1
    print(f"[warning] Spawn sampling hit the retry cap ({max_retries}) at scale {scale}; using centroid.")
    if DEBUG:
        print(f"[debug] Polygon vertices: {polygon.vertices.tolist()}")
    return polygon.centroid.copy()
