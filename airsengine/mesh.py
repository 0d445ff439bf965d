"""Hierarchical meshes: a tree of frames, each with a matrix and an optional mesh."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .mesh_object import MeshObject

__all__ = ["MeshFrame", "MeshData"]


def _matrix(value) -> np.ndarray:
    arr = np.array(value, dtype=float)
    if arr.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {arr.shape}")
    return arr


class MeshFrame:
    """One node of a mesh hierarchy.

    ``number`` is the frame's position in load order and indexes the
    motion matrices. Children are kept with the most recently added first.
    """

    def __init__(
        self,
        name: str = "MeshFrame",
        number: int = 0,
        matrix=None,
        mesh: Optional[MeshObject] = None,
    ) -> None:
        self.name = name
        self.number = number
        self.matrix = np.identity(4) if matrix is None else _matrix(matrix)
        self.mesh = mesh
        self.children: List[MeshFrame] = []

    def __repr__(self) -> str:
        return f"MeshFrame(name={self.name!r}, number={self.number})"

    def __iter__(self) -> Iterator["MeshFrame"]:
        """Iterate over this frame and its descendants in depth-first order."""
        yield self
        for child in self.children:
            yield from child

    def add_child(self, frame: "MeshFrame") -> "MeshFrame":
        """Attach ``frame`` as the first child and return it."""
        if frame is self or any(node is self for node in frame):
            raise ValueError("a frame cannot be its own descendant")
        self.children.insert(0, frame)
        return frame

    def find_frame(self, number: int) -> Optional["MeshFrame"]:
        """Return the frame with the given number in this subtree, or None."""
        return next((node for node in self if node.number == number), None)

    def walk(
        self,
        parent_matrix=None,
        motion: Optional[Sequence] = None,
    ) -> Iterator[Tuple["MeshFrame", np.ndarray]]:
        """Yield ``(frame, world_matrix)`` for this subtree in drawing order.

        Each world matrix is the frame's local matrix times its parent's.
        When ``motion`` is given, ``motion[frame.number]`` is used as the
        local matrix instead of the frame's own.
        """
        parent = np.identity(4) if parent_matrix is None else _matrix(parent_matrix)
        local = self.matrix if motion is None else _matrix(motion[self.number])
        world = local @ parent
        yield self, world
        for child in self.children:
            yield from child.walk(world, motion)


class MeshData:
    """A whole mesh hierarchy, numbering its frames as they are added."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.root: Optional[MeshFrame] = None
        self.frame_count = 0

    def __len__(self) -> int:
        return self.frame_count

    def add_frame(self, name: str, parent: Optional[MeshFrame] = None) -> MeshFrame:
        """Create the next numbered frame under ``parent`` and return it.

        A frame without a parent becomes the root of the hierarchy.
        """
        frame = MeshFrame(name=name, number=self.frame_count)
        if parent is None:
            self.root = frame
        else:
            parent.add_child(frame)
        self.frame_count += 1
        return frame

    def find_frame(self, number: int) -> Optional[MeshFrame]:
        """Return the frame with the given number, or None."""
        if self.root is None:
            return None
        return self.root.find_frame(number)

    def walk(self, motion: Optional[Sequence] = None) -> Iterator[Tuple[MeshFrame, np.ndarray]]:
        """Yield ``(frame, world_matrix)`` for every frame from the root."""
        if self.root is None:
            return
        yield from self.root.walk(None, motion)