import math

import numpy as np
import pytest

from airsengine.active_frame import ActiveFrame, NoKeysError, supple_num
from airsengine.geometry import quaternion_slerp
from airsengine.motion import MotionFrame, PositionKey, RotateKey


def _quarter_turn():
    s = math.sin(math.pi / 4)
    return np.array([0.0, s, 0.0, s])


@pytest.fixture
def frame():
    motion = MotionFrame(
        name="body",
        rotate_keys=[
            RotateKey(10, np.array([0.0, 0.0, 0.0, 1.0])),
            RotateKey(20, _quarter_turn()),
        ],
        position_keys=[
            PositionKey(10, np.array([0.0, 0.0, 0.0])),
            PositionKey(20, np.array([10.0, 4.0, -2.0])),
        ],
    )
    return ActiveFrame(motion_frame=motion)


def test_supple_num_ends_and_middle():
    assert supple_num(0, 10, 0) == 0.0
    assert supple_num(10, 10, 0) == 1.0
    assert supple_num(15, 20, 10) == 0.5


def test_initial_pose_is_identity():
    af = ActiveFrame()
    assert np.allclose(af.quat, (0, 0, 0, 1))
    assert np.allclose(af.vec, (0, 0, 0))


def test_exact_key(frame):
    assert np.allclose(frame.compute_quat(20), _quarter_turn())
    assert np.allclose(frame.compute_vec(20), (10, 4, -2))
    assert np.allclose(frame.vec, (10, 4, -2))


def test_before_first_key_uses_first(frame):
    assert np.allclose(frame.compute_quat(0), (0, 0, 0, 1))
    assert np.allclose(frame.compute_vec(0), (0, 0, 0))


def test_after_last_key_uses_last(frame):
    assert np.allclose(frame.compute_quat(99), _quarter_turn())
    assert np.allclose(frame.compute_vec(99), (10, 4, -2))


def test_between_keys_interpolates(frame):
    quat = frame.compute_quat(15)
    expected = quaternion_slerp((0, 0, 0, 1), _quarter_turn(), 0.5)
    assert np.allclose(quat, expected)
    assert np.allclose(frame.quat, expected)
    assert np.isclose(np.linalg.norm(quat), 1.0)
    assert np.allclose(frame.compute_vec(15), (5, 2, -1))


def test_interpolation_stays_between_ends(frame):
    for t in range(11, 20):
        v = frame.compute_vec(t)
        assert 0.0 < v[0] < 10.0
        assert np.allclose(v[1] / v[0], 0.4)


def test_missing_keys_raise():
    af = ActiveFrame(motion_frame=MotionFrame())
    with pytest.raises(NoKeysError):
        af.compute_quat(0)
    with pytest.raises(NoKeysError):
        af.compute_vec(0)


def test_keys_loaded_from_file_values():
    motion = MotionFrame()
    motion.create_key(0, [(0, (1.0, 0.0, 0.0, 0.0))])
    motion.create_key(2, [(0, (1.0, 2.0, 3.0))])
    af = ActiveFrame(motion_frame=motion)
    assert np.allclose(af.compute_quat(5), (0, 0, 0, 1))
    assert np.allclose(af.compute_vec(5), (1, 2, 3))