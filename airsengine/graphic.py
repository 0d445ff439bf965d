"""Drawable 2D and 3D objects with separate update and render state.

Each object keeps a "base" state that the game logic changes every frame
and a "stock" state that rendering reads. :meth:`update` copies the base
state into the stock state, so logic and drawing can run at their own pace.
Rendering returns a list of :class:`DrawCall` records for a renderer to
carry out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

__all__ = [
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "Rect",
    "DrawCall",
    "GraphicObject2D",
    "GraphicObject3D",
    "ScrollBackground",
    "Sprite",
]

SCREEN_WIDTH = 640
SCREEN_HEIGHT = 480


@dataclass(frozen=True)
class Rect:
    """An integer rectangle given by its edges."""

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top


@dataclass(frozen=True, eq=False)
class DrawCall:
    """One textured quad to draw at ``position``.

    ``source`` is the part of the texture to use, or None for all of it.
    """

    texture: str
    position: Tuple[float, float]
    source: Optional[Rect] = None


def _vec2(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=float).reshape(-1)
    if arr.shape != (2,):
        raise ValueError(f"expected 2 components, got {arr.shape[0]}")
    return arr


class GraphicObject2D:
    """Base of 2D drawables: a position and a rectangle."""

    def __init__(self, position: Sequence[float] = (0.0, 0.0)) -> None:
        self.vec_base = _vec2(position)
        self.vec_stock = np.zeros(2)
        self.rect_base = Rect()
        self.rect_stock = Rect()

    def frame_move(self) -> None:
        """Advance the object by one logic frame."""

    def render(self) -> List[DrawCall]:
        """Return what to draw from the stock state."""
        return []

    def update(self) -> None:
        """Copy the logic state into the render state."""
        self.vec_stock = self.vec_base.copy()
        self.rect_stock = self.rect_base

    def set_rect(self, left: int, top: int, right: int, bottom: int) -> None:
        """Set the logic rectangle."""
        self.rect_base = Rect(left, top, right, bottom)


class GraphicObject3D:
    """Base of 3D drawables: a world matrix."""

    def __init__(self, matrix=None) -> None:
        self.mat_base = np.identity(4) if matrix is None else self._check(matrix)
        self.mat_stock = np.identity(4)

    @staticmethod
    def _check(matrix) -> np.ndarray:
        arr = np.array(matrix, dtype=float)
        if arr.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {arr.shape}")
        return arr

    def frame_move(self) -> None:
        """Advance the object by one logic frame."""

    def render(self) -> List[DrawCall]:
        """Return what to draw from the stock state."""
        return []

    def update(self) -> None:
        """Copy the logic matrix into the render matrix."""
        self.mat_stock = self.mat_base.copy()

    def position_base(self) -> np.ndarray:
        """Translation part of the logic matrix."""
        return self.mat_base[3, :3].copy()

    def position_stock(self) -> np.ndarray:
        """Translation part of the render matrix."""
        return self.mat_stock[3, :3].copy()


class ScrollBackground(GraphicObject2D):
    """A texture tiled over the screen that scrolls by a fixed step."""

    def __init__(
        self,
        texture: str,
        height: float,
        width: float,
        direction: Sequence[float] = (0.0, 0.0),
    ) -> None:
        if height <= 0 or width <= 0:
            raise ValueError("texture size must be positive")
        super().__init__((0.0, 0.0))
        self.texture = texture
        self.height = float(height)
        self.width = float(width)
        self.direction = _vec2(direction)

    def frame_move(self) -> None:
        """Move against the direction, wrapping after one texture size."""
        x, y = self.vec_base - self.direction
        if x < -self.width:
            x = 0.0
        if y < -self.height:
            y = 0.0
        self.vec_base = np.array([x, y])

    def tile_positions(self) -> Iterator[Tuple[float, float]]:
        """Top-left corners of the tiles needed to fill the screen."""
        x = float(self.vec_stock[0])
        while x < SCREEN_WIDTH:
            y = float(self.vec_stock[1])
            while y < SCREEN_HEIGHT:
                yield (x, y)
                y += self.height
            x += self.width

    def render(self) -> List[DrawCall]:
        return [DrawCall(self.texture, pos) for pos in self.tile_positions()]


class Sprite(GraphicObject2D):
    """A single textured sprite drawn from a part of its texture."""

    def __init__(self, texture: str, position: Sequence[float] = (0.0, 0.0)) -> None:
        super().__init__(position)
        self.texture = texture

    def render(self) -> List[DrawCall]:
        position = (float(self.vec_stock[0]), float(self.vec_stock[1]))
        return [DrawCall(self.texture, position, self.rect_stock)]