"""A single mesh: vertices, triangular faces and the materials they use."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

__all__ = ["Material", "MeshObject"]


def _colour(value: Sequence[float]) -> Tuple[float, float, float, float]:
    parts = tuple(float(c) for c in value)
    if len(parts) != 4:
        raise ValueError(f"expected an (r, g, b, a) colour, got {len(parts)} components")
    return parts  # type: ignore[return-value]


@dataclass
class Material:
    """Surface colours of one mesh subset and the texture file it uses.

    The ambient colour follows the diffuse colour unless it is given.
    """

    diffuse: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    ambient: Optional[Tuple[float, float, float, float]] = None
    texture: Optional[str] = None

    def __post_init__(self) -> None:
        self.diffuse = _colour(self.diffuse)
        self.ambient = self.diffuse if self.ambient is None else _colour(self.ambient)

    @property
    def alpha(self) -> float:
        """The diffuse alpha, which decides the render pass."""
        return self.diffuse[3]


@dataclass
class MeshObject:
    """Vertices, faces and materials of one mesh.

    ``faces`` holds three vertex indices per triangle; ``face_materials``
    gives the subset (material index) of each face and defaults to 0.
    """

    vertices: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    faces: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=int))
    materials: List[Material] = field(default_factory=list)
    name: str = "MeshObject"
    face_materials: Optional[np.ndarray] = None
    length: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self.vertices = np.asarray(self.vertices, dtype=float).reshape(-1, 3)
        faces = np.asarray(self.faces, dtype=int)
        self.faces = faces.reshape(-1, 3) if faces.size else np.zeros((0, 3), dtype=int)
        if self.faces.size and (self.faces.min() < 0 or self.faces.max() >= len(self.vertices)):
            raise ValueError("face refers to a vertex that does not exist")
        if self.face_materials is None:
            self.face_materials = np.zeros(len(self.faces), dtype=int)
        else:
            self.face_materials = np.asarray(self.face_materials, dtype=int).reshape(-1)
            if len(self.face_materials) != len(self.faces):
                raise ValueError("face_materials needs one entry per face")
        self.materials = list(self.materials)
        self.compute_length()

    @property
    def face_count(self) -> int:
        """Number of triangular faces."""
        return len(self.faces)

    def compute_length(self) -> float:
        """Store and return the bounding-sphere radius about the origin."""
        if len(self.vertices) == 0:
            self.length = 0.0
        else:
            self.length = float(np.linalg.norm(self.vertices, axis=1).max())
        return self.length

    def triangles(self) -> Iterator[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
        """Yield each face as three vertex positions in local coordinates."""
        for a, b, c in self.faces:
            yield (self.vertices[a].copy(), self.vertices[b].copy(), self.vertices[c].copy())

    def render(self, no_alpha: bool = True, alpha: bool = True) -> List[Tuple[int, Material]]:
        """Return the subsets to draw, in order, as ``(index, material)``.

        Opaque subsets (alpha not below 1) come first when ``no_alpha`` is
        set, then subsets whose alpha is not exactly 1 when ``alpha`` is set.
        """
        calls: List[Tuple[int, Material]] = []
        if no_alpha:
            calls.extend((i, m) for i, m in enumerate(self.materials) if not m.alpha < 1.0)
        if alpha:
            calls.extend((i, m) for i, m in enumerate(self.materials) if m.alpha != 1.0)
        return calls