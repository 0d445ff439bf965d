import numpy as np
import pytest

from airsengine.geometry import search_plane
from airsengine.mesh_object import Material, MeshObject


def _square():
    vertices = [(-1, -1, 0), (1, -1, 0), (1, 1, 0), (-1, 1, 0)]
    faces = [(0, 2, 1), (0, 3, 2)]
    return MeshObject(vertices=vertices, faces=faces)


def test_length_is_farthest_vertex():
    mesh = MeshObject(vertices=[(1, 0, 0), (3, 4, 0), (0, 0, -2)], faces=[(0, 1, 2)])
    assert mesh.length == pytest.approx(5.0)


def test_length_empty_mesh_is_zero():
    assert MeshObject().compute_length() == 0.0


def test_length_recomputed_after_change():
    mesh = _square()
    before = mesh.length
    mesh.vertices = mesh.vertices * 2
    assert mesh.compute_length() == pytest.approx(before * 2)


def test_triangles_follow_face_indices():
    mesh = _square()
    tris = list(mesh.triangles())
    assert len(tris) == mesh.face_count
    for tri, face in zip(tris, mesh.faces):
        for vertex, index in zip(tri, face):
            assert np.allclose(vertex, mesh.vertices[index])


def test_triangles_are_copies():
    mesh = _square()
    first = next(mesh.triangles())
    first[0][:] = 100.0
    assert not np.allclose(mesh.vertices[0], 100.0)


def test_bad_face_index_rejected():
    with pytest.raises(ValueError):
        MeshObject(vertices=[(0, 0, 0)], faces=[(0, 1, 2)])


def test_face_materials_length_checked():
    with pytest.raises(ValueError):
        MeshObject(vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)], faces=[(0, 1, 2)], face_materials=[0, 1])


def test_face_materials_default_to_zero():
    mesh = _square()
    assert list(mesh.face_materials) == [0, 0]


def test_material_ambient_follows_diffuse():
    material = Material(diffuse=(0.2, 0.3, 0.4, 0.5))
    assert material.ambient == material.diffuse
    assert material.alpha == 0.5


def test_material_rejects_bad_colour():
    with pytest.raises(ValueError):
        Material(diffuse=(1.0, 1.0, 1.0))


def test_render_opaque_then_transparent():
    opaque = Material(diffuse=(1, 1, 1, 1))
    clear = Material(diffuse=(1, 1, 1, 0.5))
    mesh = MeshObject(materials=[clear, opaque])
    assert [i for i, _ in mesh.render()] == [1, 0]
    assert [i for i, _ in mesh.render(True, False)] == [1]
    assert [i for i, _ in mesh.render(False, True)] == [0]
    assert mesh.render(False, False) == []


def test_render_alpha_above_one_drawn_in_both_passes():
    mesh = MeshObject(materials=[Material(diffuse=(1, 1, 1, 1.5))])
    assert [i for i, _ in mesh.render()] == [0, 0]


def test_triangles_usable_for_plane_search():
    mesh = _square()
    hit = search_plane(mesh.triangles(), np.identity(4), (0.2, 0.3, 5.0), (0.0, 0.0, -1.0))
    assert hit is not None
    assert hit.cross[2] == pytest.approx(0.0)
    assert hit.length == pytest.approx(5.0)
    assert np.allclose(hit.cross[:2], (0.2, 0.3))