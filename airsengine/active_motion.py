"""Playing and blending several animations over one mesh hierarchy."""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .active_frame import ActiveFrame, NoKeysError
from .geometry import matrix_from_quaternion
from .mesh import MeshData, MeshFrame
from .motion import MotionData

__all__ = ["MAX_FRAMES", "MAX_MOTIONS", "ActiveData", "ActiveMotion"]

MAX_FRAMES = 32
MAX_MOTIONS = 32
DEFAULT_CHANGE_SPEED = 0.1


class ActiveData:
    """One animation bound to a mesh, advancing through time frame by frame."""

    def __init__(self, mesh_data: MeshData, motion_data: MotionData) -> None:
        if mesh_data.frame_count != motion_data.frame_count:
            raise ValueError(
                f"mesh has {mesh_data.frame_count} frames but motion has "
                f"{motion_data.frame_count}"
            )
        if mesh_data.frame_count > MAX_FRAMES:
            raise ValueError(f"at most {MAX_FRAMES} frames are supported")
        self.mesh_data = mesh_data
        self.motion_data = motion_data
        self.max_time = motion_data.compute_max_frame()
        self.active_time = 0
        self.frames: List[ActiveFrame] = [
            ActiveFrame(mesh_data.find_frame(number), motion_frame)
            for number, motion_frame in enumerate(motion_data.frames)
        ]

    def __len__(self) -> int:
        return len(self.frames)

    def compute_motion(self) -> None:
        """Sample every frame at the current time.

        A frame lacking rotation or position keys keeps its previous value
        for that part.
        """
        for frame in self.frames:
            try:
                frame.compute_quat(self.active_time)
            except NoKeysError:
                pass
            try:
                frame.compute_vec(self.active_time)
            except NoKeysError:
                pass

    def run(self) -> int:
        """Advance one time step, wrapping to 0 after the last key time."""
        self.active_time += 1
        if self.active_time > self.max_time:
            self.active_time = 0
        return self.active_time


class ActiveMotion:
    """Blends the loaded animations of a mesh into per-frame motion matrices."""

    def __init__(self) -> None:
        self.mesh_data: Optional[MeshData] = None
        self.mesh_frame_count = 0
        self.motions: List[ActiveData] = []
        self.blends: List[float] = [0.0] * MAX_MOTIONS
        self.blends[0] = 1.0
        self.mat_motion: List[np.ndarray] = [np.identity(4) for _ in range(MAX_FRAMES)]
        self.mat_stock: List[np.ndarray] = [np.identity(4) for _ in range(MAX_FRAMES)]

    @property
    def motion_count(self) -> int:
        """Number of loaded animations."""
        return len(self.motions)

    def load_mesh(self, mesh_data: MeshData) -> None:
        """Set the mesh whose frames the animations drive."""
        if mesh_data.frame_count > MAX_FRAMES:
            raise ValueError(f"at most {MAX_FRAMES} frames are supported")
        self.mesh_data = mesh_data
        self.mesh_frame_count = mesh_data.frame_count

    def load_motion(self, motion_data: MotionData) -> ActiveData:
        """Bind an animation to the mesh and add it; return the bound data."""
        if self.mesh_data is None:
            raise ValueError("load a mesh before loading motions")
        if len(self.motions) >= MAX_MOTIONS:
            raise ValueError(f"at most {MAX_MOTIONS} motions are supported")
        data = ActiveData(self.mesh_data, motion_data)
        self.motions.append(data)
        return data

    def compute_matrix(self) -> None:
        """Blend each frame's sampled poses into its motion matrix."""
        for i in range(self.mesh_frame_count):
            quat = np.zeros(4)
            vec = np.zeros(3)
            for data, blend in zip(self.motions, self.blends):
                frame = data.frames[i]
                quat += frame.quat * blend
                vec += frame.vec * blend
            matrix = matrix_from_quaternion(quat)
            matrix[3, :3] += vec
            self.mat_motion[i] = matrix

    def compute_all_motion(self) -> None:
        """Sample every animation at its current time."""
        for data in self.motions:
            data.compute_motion()

    def _check_motion(self, num: int) -> None:
        if not 0 <= num < len(self.motions):
            raise IndexError(f"no motion number {num}")

    def _settle_blends(self) -> None:
        count = len(self.motions)
        total = sum(self.blends[:count])
        if total > 1.0:
            for i in range(count):
                self.blends[i] /= total
        else:
            self.blends[0] += 1.0 - total

    def _fade_all(self, speed: float) -> None:
        for i in range(len(self.motions)):
            self.blends[i] = max(self.blends[i] - speed, 0.0)

    def change_motion(self, num: int, speed: float = DEFAULT_CHANGE_SPEED) -> None:
        """Shift the blend one step towards motion ``num``."""
        self._check_motion(num)
        target = min(self.blends[num] + speed, 1.0)
        self._fade_all(speed)
        self.blends[num] = target
        self._settle_blends()

    def change_motion_pair(self, num1: int, num2: int, speed: float = DEFAULT_CHANGE_SPEED) -> None:
        """Shift the blend one step towards an even mix of two motions."""
        self._check_motion(num1)
        self._check_motion(num2)
        self.blends[num1] += speed
        target1 = min(self.blends[num1], 1.0)
        self.blends[num2] += speed
        target2 = min(self.blends[num2], 1.0)
        self._fade_all(speed)
        self.blends[num1] = target1
        self.blends[num2] = target2
        self._settle_blends()

    def play(self) -> None:
        """Advance every animation and recompute the blended matrices."""
        for data in self.motions:
            data.run()
        self.compute_all_motion()
        self.compute_matrix()

    def update(self) -> None:
        """Copy the motion matrices into the render matrices."""
        for i in range(self.mesh_frame_count):
            self.mat_stock[i] = self.mat_motion[i].copy()

    def render(self) -> List[Tuple[MeshFrame, np.ndarray]]:
        """Return each mesh frame with its world matrix from the render matrices."""
        if self.mesh_data is None:
            raise ValueError("no mesh loaded")
        return list(self.mesh_data.walk(self.mat_stock))

    def set_active_time(self, motion: int, time: int) -> None:
        """Set the current time of one animation."""
        self._check_motion(motion)
        self.motions[motion].active_time = time