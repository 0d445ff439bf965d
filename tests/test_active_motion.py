import numpy as np
import pytest

from airsengine.active_motion import ActiveData, ActiveMotion
from airsengine.mesh import MeshData
from airsengine.motion import KeyType, MotionData, MotionFrame


def make_mesh():
    mesh = MeshData("body")
    root = mesh.add_frame("root")
    mesh.add_frame("arm", root)
    return mesh


def make_motion(end_pos=(10.0, 0.0, 0.0), with_pos=True):
    motion = MotionData("walk")
    for name in ("root", "arm"):
        frame = MotionFrame(name)
        frame.create_key(KeyType.ROTATION, [(0, (1.0, 0.0, 0.0, 0.0)), (10, (1.0, 0.0, 0.0, 0.0))])
        if with_pos:
            frame.create_key(KeyType.POSITION, [(0, (0.0, 0.0, 0.0)), (10, end_pos)])
        motion.add_frame(frame)
    return motion


def test_active_data_frame_count_mismatch():
    motion = make_motion()
    motion.add_frame(MotionFrame("extra"))
    with pytest.raises(ValueError):
        ActiveData(make_mesh(), motion)


def test_active_data_binds_frames_in_order():
    mesh = make_mesh()
    data = ActiveData(mesh, make_motion())
    assert len(data) == 2
    assert data.frames[0].mesh_frame is mesh.find_frame(0)
    assert data.frames[1].motion_frame.name == "arm"
    assert data.max_time == 10


def test_run_wraps_after_max_time():
    data = ActiveData(make_mesh(), make_motion())
    times = [data.run() for _ in range(11)]
    assert times[-2] == data.max_time
    assert times[-1] == 0


def test_compute_motion_samples_keys():
    data = ActiveData(make_mesh(), make_motion(end_pos=(4.0, 5.0, 6.0)))
    data.active_time = 10
    data.compute_motion()
    assert np.allclose(data.frames[1].vec, [4.0, 5.0, 6.0])
    assert np.allclose(data.frames[0].quat, [0.0, 0.0, 0.0, 1.0])


def test_compute_motion_keeps_value_without_keys():
    data = ActiveData(make_mesh(), make_motion(with_pos=False))
    data.compute_motion()
    assert np.allclose(data.frames[0].vec, np.zeros(3))


def test_load_motion_requires_mesh():
    with pytest.raises(ValueError):
        ActiveMotion().load_motion(make_motion())


def test_initial_blend_state():
    am = ActiveMotion()
    assert am.blends[0] == 1.0
    assert sum(am.blends) == 1.0


def test_change_motion_keeps_total_one():
    am = ActiveMotion()
    am.load_mesh(make_mesh())
    am.load_motion(make_motion())
    am.load_motion(make_motion())
    am.change_motion(1)
    assert sum(am.blends[:2]) == pytest.approx(1.0)
    assert am.blends[1] > 0.0
    assert am.blends[0] < 1.0


def test_change_motion_converges_to_target():
    am = ActiveMotion()
    am.load_mesh(make_mesh())
    for _ in range(3):
        am.load_motion(make_motion())
    for _ in range(30):
        am.change_motion(2)
    assert am.blends[2] == pytest.approx(1.0)
    assert am.blends[0] == pytest.approx(0.0)
    assert am.blends[1] == pytest.approx(0.0)


def test_change_motion_unknown_index():
    am = ActiveMotion()
    am.load_mesh(make_mesh())
    am.load_motion(make_motion())
    with pytest.raises(IndexError):
        am.change_motion(1)
    with pytest.raises(IndexError):
        am.change_motion_pair(0, 5)


def test_change_motion_pair_evens_out():
    am = ActiveMotion()
    am.load_mesh(make_mesh())
    for _ in range(3):
        am.load_motion(make_motion())
    for _ in range(100):
        am.change_motion_pair(1, 2)
    assert am.blends[1] == pytest.approx(am.blends[2])
    assert am.blends[0] == pytest.approx(0.0, abs=1e-9)
    assert sum(am.blends[:3]) == pytest.approx(1.0)


def test_compute_matrix_uses_sampled_pose():
    am = ActiveMotion()
    am.load_mesh(make_mesh())
    am.load_motion(make_motion(end_pos=(1.0, 2.0, 3.0)))
    am.set_active_time(0, 10)
    am.compute_all_motion()
    am.compute_matrix()
    matrix = am.mat_motion[0]
    assert np.allclose(matrix[3, :3], [1.0, 2.0, 3.0])
    assert np.allclose(matrix[:3, :3], np.identity(3))


def test_play_advances_time_and_update_copies():
    am = ActiveMotion()
    am.load_mesh(make_mesh())
    am.load_motion(make_motion())
    am.play()
    assert am.motions[0].active_time == 1
    assert np.allclose(am.mat_stock[1], np.identity(4))
    am.update()
    assert np.allclose(am.mat_stock[1], am.mat_motion[1])


def test_render_walks_mesh_with_stock_matrices():
    am = ActiveMotion()
    am.load_mesh(make_mesh())
    am.load_motion(make_motion(end_pos=(1.0, 2.0, 3.0)))
    am.set_active_time(0, 9)
    am.play()
    am.update()
    drawn = am.render()
    assert [frame.name for frame, _ in drawn] == ["root", "arm"]
    root_world = drawn[0][1]
    assert np.allclose(root_world, am.mat_stock[0])


def test_set_active_time_unknown_motion():
    am = ActiveMotion()
    am.load_mesh(make_mesh())
    with pytest.raises(IndexError):
        am.set_active_time(0, 3)