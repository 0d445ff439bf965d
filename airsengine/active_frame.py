"""Sampling one frame's animation keys at a point in time."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np

from .geometry import quaternion_slerp
from .motion import MotionFrame

__all__ = ["NoKeysError", "supple_num", "ActiveFrame"]


class NoKeysError(ValueError):
    """Raised when a motion frame has no keys of the kind asked for."""


def supple_num(middle: int, maximum: int, minimum: int) -> float:
    """Where ``middle`` lies between ``minimum`` (0.0) and ``maximum`` (1.0)."""
    return float(middle - minimum) / float(maximum - minimum)


def _bracket(keys: Sequence[Any], time: int):
    """Return (exact, index) locating ``time`` among the keys.

    ``index`` is that of the first key later than ``time``, or the key
    count when there is none.
    """
    for key in keys:
        if key.time == time:
            return key, None
    index = next((i for i, key in enumerate(keys) if key.time > time), len(keys))
    return None, index


class ActiveFrame:
    """A mesh frame paired with its animation and the current sampled pose."""

    def __init__(self, mesh_frame: Any = None, motion_frame: Optional[MotionFrame] = None) -> None:
        self.mesh_frame = mesh_frame
        self.motion_frame = motion_frame if motion_frame is not None else MotionFrame()
        self.quat = np.array([0.0, 0.0, 0.0, 1.0])
        self.vec = np.zeros(3)

    def compute_quat(self, time: int) -> np.ndarray:
        """Sample the rotation at ``time``, store it in :attr:`quat` and return it."""
        keys = self.motion_frame.rotate_keys
        if not keys:
            raise NoKeysError("motion frame has no rotation keys")
        exact, i = _bracket(keys, time)
        if exact is not None:
            result = exact.quat
        elif i == len(keys):
            result = keys[i - 1].quat
        elif i == 0:
            result = keys[0].quat
        else:
            blend = supple_num(time, keys[i].time, keys[i - 1].time)
            result = quaternion_slerp(keys[i - 1].quat, keys[i].quat, blend)
        self.quat = np.array(result, dtype=float)
        return self.quat.copy()

    def compute_vec(self, time: int) -> np.ndarray:
        """Sample the position at ``time``, store it in :attr:`vec` and return it."""
        keys = self.motion_frame.position_keys
        if not keys:
            raise NoKeysError("motion frame has no position keys")
        exact, i = _bracket(keys, time)
        if exact is not None:
            result = exact.pos
        elif i == len(keys):
            result = keys[i - 1].pos
        elif i == 0:
            result = keys[0].pos
        else:
            blend = supple_num(time, keys[i].time, keys[i - 1].time)
            before, after = keys[i - 1].pos, keys[i].pos
            result = before + (after - before) * blend
        self.vec = np.array(result, dtype=float)
        return self.vec.copy()