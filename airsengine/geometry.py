"""Vector, matrix, plane and quaternion helpers for the 3D engine.

Vectors are numpy arrays of three floats, matrices are 4x4 arrays that
transform row vectors (``v @ M``), planes are arrays ``(a, b, c, d)`` and
quaternions are arrays ``(x, y, z, w)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np

__all__ = [
    "Viewport",
    "PlaneHit",
    "get_angle",
    "radian_to_degree",
    "set_length",
    "inverse",
    "direction_from_matrix",
    "matrix_from_vectors",
    "mat_update",
    "length_ex",
    "transform_coord",
    "plane_from_points",
    "plane_intersect_line",
    "point_in_poly",
    "plane_reflect",
    "search_plane",
    "search_plane2",
    "quaternion_slerp",
    "matrix_from_quaternion",
    "project",
]

# Distances at or beyond this are treated as "no plane found".
_SEARCH_LIMIT = 99999.0
# Tolerance used when comparing the edge normals in point_in_poly.
_PARALLEL_EPSILON = 0.005


@dataclass(frozen=True)
class Viewport:
    """A rendering viewport in screen coordinates."""

    x: float = 0.0
    y: float = 0.0
    width: float = 640.0
    height: float = 480.0
    min_z: float = 0.0
    max_z: float = 1.0


@dataclass(frozen=True, eq=False)
class PlaneHit:
    """The face chosen by a plane search.

    ``cross`` is where the search vector meets the face, ``normal_cross``
    (only set by :func:`search_plane2`) is the foot of the perpendicular
    from the start point, and ``length`` is the distance that selected it.
    """

    plane: np.ndarray
    length: float
    cross: np.ndarray
    normal_cross: Optional[np.ndarray] = None


def _vec(value: Sequence[float], size: int = 3) -> np.ndarray:
    arr = np.asarray(value, dtype=float).reshape(-1)
    if arr.shape != (size,):
        raise ValueError(f"expected {size} components, got {arr.shape[0]}")
    return arr


def _mat(value) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {arr.shape}")
    return arr


def _normalize(vec: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(vec))
    if norm == 0.0:
        return np.zeros_like(vec)
    return vec / norm


def radian_to_degree(radian: float) -> float:
    """Convert an angle in radians to degrees."""
    return radian / 3.141592654 * 180.0


def get_angle(y: float, x: float) -> float:
    """Return the angle in degrees of the direction (x, y)."""
    return radian_to_degree(math.atan2(y, x))


def set_length(vec: Sequence[float], length: float) -> np.ndarray:
    """Return ``vec`` scaled to the given length (zero stays zero)."""
    return _normalize(_vec(vec)) * length


def inverse(vec: Sequence[float]) -> np.ndarray:
    """Return the vector pointing the opposite way."""
    return -_vec(vec)


def transform_coord(vec: Sequence[float], matrix) -> np.ndarray:
    """Transform a point by a matrix and project it back to w = 1."""
    row = np.append(_vec(vec), 1.0) @ _mat(matrix)
    w = row[3]
    if w == 0.0:
        return row[:3].copy()
    return row[:3] / w


def direction_from_matrix(matrix) -> np.ndarray:
    """Return the unit forward (+z) direction of a matrix, ignoring translation."""
    rotation = _mat(matrix).copy()
    rotation[3, :3] = 0.0
    return _normalize(transform_coord((0.0, 0.0, 1.0), rotation))


def _rotation_y(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array(
        [
            [c, 0.0, -s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def matrix_from_vectors(pos: Sequence[float], direction: Sequence[float]) -> np.ndarray:
    """Build a matrix from a position and a heading.

    Only the yaw of ``direction`` is used, and it is applied as
    ``-yaw / 2``; pitch and roll stay zero.
    """
    d = _vec(direction)
    yaw = math.atan2(d[0], d[2])
    matrix = _rotation_y(-yaw / 2.0)
    matrix[3, :3] = _vec(pos)
    return matrix


def mat_update(base, rotation) -> np.ndarray:
    """Return ``rotation`` with its translation replaced by that of ``base``."""
    result = _mat(rotation).copy()
    result[3, :3] = _mat(base)[3, :3]
    return result


def length_ex(vec: Sequence[float], x_enable: bool, y_enable: bool, z_enable: bool) -> float:
    """Length of the vector counting only the enabled axes."""
    v = _vec(vec)
    mask = np.array([x_enable, y_enable, z_enable], dtype=float)
    return float(np.linalg.norm(v * mask))


def plane_from_points(p1: Sequence[float], p2: Sequence[float], p3: Sequence[float]) -> np.ndarray:
    """Plane through three points, with a unit normal following their winding."""
    a, b, c = _vec(p1), _vec(p2), _vec(p3)
    normal = _normalize(np.cross(b - a, c - a))
    return np.append(normal, -float(np.dot(normal, a)))


def _plane_dot_coord(plane: np.ndarray, point: np.ndarray) -> float:
    return float(np.dot(plane[:3], point) + plane[3])


def plane_intersect_line(plane: Sequence[float], p1: Sequence[float], p2: Sequence[float]) -> Optional[np.ndarray]:
    """Point where the line through ``p1`` and ``p2`` meets the plane.

    Returns None when the line is parallel to the plane.
    """
    pl = _vec(plane, 4)
    a, b = _vec(p1), _vec(p2)
    direction = b - a
    dot = float(np.dot(pl[:3], direction))
    if dot == 0.0:
        return None
    t = (pl[3] + float(np.dot(pl[:3], a))) / dot
    return a - t * direction


def point_in_poly(v1: Sequence[float], v2: Sequence[float], v3: Sequence[float], point: Sequence[float]) -> bool:
    """Whether a point on the triangle's plane lies inside the triangle (edges included)."""
    a, b, c, p = _vec(v1), _vec(v2), _vec(v3), _vec(point)
    normals = [
        _normalize(np.cross(b - a, p - a)),
        _normalize(np.cross(c - b, p - b)),
        _normalize(np.cross(a - c, p - c)),
    ]
    first = normals[0]
    if all(np.all(np.abs(first - other) < _PARALLEL_EPSILON) for other in normals[1:]):
        return True
    return any(not np.any(n) for n in normals)


def plane_reflect(plane: Sequence[float], vec: Sequence[float]) -> np.ndarray:
    """Mirror-reflect a travelling vector off a plane."""
    normal = _vec(plane, 4)[:3]
    incoming = -_vec(vec)
    dot = float(np.dot(incoming, normal))
    return 2.0 * dot * normal - incoming


def _world_triangles(triangles: Iterable[Sequence[Sequence[float]]], matrix) -> Iterable[tuple]:
    m = _mat(matrix)
    for tri in triangles:
        verts = [transform_coord(v, m) for v in tri]
        if len(verts) != 3:
            raise ValueError("each triangle needs exactly three vertices")
        yield tuple(verts)


def _facing(plane: np.ndarray, pos: np.ndarray, vec: np.ndarray) -> bool:
    return _plane_dot_coord(plane, pos) > 0 and float(np.dot(plane[:3], -vec)) > 0


def search_plane(triangles, matrix, pos: Sequence[float], vec: Sequence[float]) -> Optional[PlaneHit]:
    """Find the nearest face hit by the ray from ``pos`` along ``vec``.

    Faces are taken in local coordinates and moved by ``matrix``. Only
    faces whose front side faces both the point and the ray count.
    Returns None when no face is hit.
    """
    p, v = _vec(pos), _vec(vec)
    best: Optional[PlaneHit] = None
    best_length = _SEARCH_LIMIT
    for a, b, c in _world_triangles(triangles, matrix):
        plane = plane_from_points(a, b, c)
        if not _facing(plane, p, v):
            continue
        cross = plane_intersect_line(plane, p + v, p)
        if cross is None or not point_in_poly(a, b, c, cross):
            continue
        length = float(np.linalg.norm(cross - p))
        if length < best_length:
            best_length = length
            best = PlaneHit(plane=plane, length=length, cross=cross)
    return best


def search_plane2(triangles, matrix, pos: Sequence[float], vec: Sequence[float]) -> Optional[PlaneHit]:
    """Find the face nearest to ``pos`` along its normal among faces the ray meets.

    The selection uses the perpendicular foot (``normal_cross``), which
    must lie inside the face; ``cross`` is where the ray meets that face.
    Returns None when no face qualifies.
    """
    p, v = _vec(pos), _vec(vec)
    best: Optional[PlaneHit] = None
    best_length = _SEARCH_LIMIT
    for a, b, c in _world_triangles(triangles, matrix):
        plane = plane_from_points(a, b, c)
        if not _facing(plane, p, v):
            continue
        cross = plane_intersect_line(plane, p + v, p)
        if cross is None:
            continue
        normal_cross = plane_intersect_line(plane, p - plane[:3], p)
        if normal_cross is None or not point_in_poly(a, b, c, normal_cross):
            continue
        length = float(np.linalg.norm(normal_cross - p))
        if length < best_length:
            best_length = length
            best = PlaneHit(plane=plane, length=length, cross=cross, normal_cross=normal_cross)
    return best


def quaternion_slerp(q1: Sequence[float], q2: Sequence[float], t: float) -> np.ndarray:
    """Spherical interpolation between two quaternions along the short arc."""
    a, b = _vec(q1, 4), _vec(q2, 4)
    dot = float(np.dot(a, b))
    sign = -1.0 if dot < 0 else 1.0
    weight_a, weight_b = 1.0 - t, t
    if 1.0 - abs(dot) > 0.001:
        theta = math.acos(min(1.0, abs(dot)))
        sin_theta = math.sin(theta)
        weight_a = math.sin(theta * weight_a) / sin_theta
        weight_b = math.sin(theta * weight_b) / sin_theta
    return weight_a * a + sign * weight_b * b


def matrix_from_quaternion(q: Sequence[float]) -> np.ndarray:
    """Rotation matrix of a quaternion ``(x, y, z, w)``; it is not normalised first."""
    x, y, z, w = _vec(q, 4)
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y + z * w), 2 * (x * z - y * w), 0.0],
            [2 * (x * y - z * w), 1 - 2 * (x * x + z * z), 2 * (y * z + x * w), 0.0],
            [2 * (x * z + y * w), 2 * (y * z - x * w), 1 - 2 * (x * x + y * y), 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def project(vec: Sequence[float], viewport: Viewport, projection, view) -> np.ndarray:
    """Project a world point to screen coordinates (x, y) and depth (z)."""
    clip = transform_coord(vec, _mat(view) @ _mat(projection))
    return np.array(
        [
            viewport.x + (1.0 + clip[0]) * viewport.width / 2.0,
            viewport.y + (1.0 - clip[1]) * viewport.height / 2.0,
            viewport.min_z + clip[2] * (viewport.max_z - viewport.min_z),
        ]
    )