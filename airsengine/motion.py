"""Keyframe animation data: per-frame rotation and position keys."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

__all__ = ["KeyType", "RotateKey", "PositionKey", "MotionFrame", "MotionData"]


class KeyType(IntEnum):
    """Animation key kinds as numbered in the model file format."""

    ROTATION = 0
    SCALE = 1
    POSITION = 2


@dataclass(frozen=True, eq=False)
class RotateKey:
    """A rotation key: a time and a quaternion ``(x, y, z, w)``."""

    time: int
    quat: np.ndarray


@dataclass(frozen=True, eq=False)
class PositionKey:
    """A position key: a time and a translation vector."""

    time: int
    pos: np.ndarray


def _components(values: Sequence[float], size: int) -> np.ndarray:
    arr = np.asarray(values, dtype=float).reshape(-1)
    if arr.shape != (size,):
        raise ValueError(f"expected {size} key values, got {arr.shape[0]}")
    return arr


@dataclass
class MotionFrame:
    """The animation of one mesh frame."""

    name: str = ""
    rotate_keys: List[RotateKey] = field(default_factory=list)
    position_keys: List[PositionKey] = field(default_factory=list)

    def create_key(self, key_type: int, data: Iterable[Tuple[int, Sequence[float]]]) -> None:
        """Load one block of keys, replacing any keys of the same kind.

        ``data`` holds ``(time, values)`` pairs as they appear in the file:
        rotation values are ``(w, x, y, z)`` and are stored with x, y and z
        negated; position values are ``(x, y, z)``. Scale keys and unknown
        key types are ignored.
        """
        if key_type == KeyType.ROTATION:
            keys = []
            for time, values in data:
                w, x, y, z = _components(values, 4)
                keys.append(RotateKey(int(time), np.array([-x, -y, -z, w])))
            self.rotate_keys = keys
        elif key_type == KeyType.POSITION:
            self.position_keys = [
                PositionKey(int(time), _components(values, 3)) for time, values in data
            ]


@dataclass
class MotionData:
    """An animation: an ordered list of motion frames."""

    name: str = ""
    frames: List[MotionFrame] = field(default_factory=list)
    max_frame: int = 0

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[MotionFrame]:
        return iter(self.frames)

    @property
    def frame_count(self) -> int:
        """Number of motion frames."""
        return len(self.frames)

    def add_frame(self, frame: MotionFrame) -> MotionFrame:
        """Append a frame to the end of the list and return it."""
        self.frames.append(frame)
        return frame

    def compute_max_frame(self) -> int:
        """Find and store the latest final key time over all frames."""
        latest = 0
        for frame in self.frames:
            if frame.rotate_keys:
                latest = max(latest, frame.rotate_keys[-1].time)
            if frame.position_keys:
                latest = max(latest, frame.position_keys[-1].time)
        self.max_frame = latest
        return latest