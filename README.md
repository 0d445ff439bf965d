# airsengine

The core of a small action-game engine, written in plain Python with numpy.

Vectors are numpy arrays of three floats. Matrices are 4×4 arrays that transform row vectors (`v @ M`). Planes are `(a, b, c, d)` and quaternions are `(x, y, z, w)`.

## Modules

- **`airsengine.geometry`** holds the vector, plane and quaternion helpers.
  - Vectors and angles: `get_angle`, `radian_to_degree`, `set_length`, `inverse` and `length_ex`.
  - Matrices: `transform_coord`, `direction_from_matrix`, `matrix_from_vectors` and `mat_update`.
    - `matrix_from_vectors` uses only the yaw of the direction, and applies it halved and negated.
  - Planes and triangles: `plane_from_points`, `plane_intersect_line`, `point_in_poly` and `plane_reflect`.
    - `plane_intersect_line` returns `None` for a parallel line.
  - Face searches: `search_plane` and `search_plane2` take an iterable of triangles, a matrix, a start point and a travel vector.
    - Each returns a `PlaneHit` (`plane`, `length`, `cross`, and `normal_cross` for `search_plane2`), or `None` when no face qualifies.
    - `search_plane` picks the face nearest along the ray.
    - `search_plane2` picks the face nearest along its normal.
  - Quaternions: `quaternion_slerp` and `matrix_from_quaternion`.
  - Projection: `project` maps a world point to screen coordinates through a `Viewport`.
- **`airsengine.motion`** holds keyframed animation data.
  - `RotateKey` and `PositionKey` are single keys.
  - `KeyType` numbers the key kinds.
  - `MotionFrame.create_key(key_type, data)` loads rotation or position keys from `(time, values)` pairs.
    - Rotation values are read as `(w, x, y, z)` and stored with x, y and z negated.
    - Scale keys are ignored.
  - `MotionData` holds an ordered list of frames.
    - `add_frame` adds a frame.
    - `compute_max_frame` stores and returns the latest final key time.
- **`airsengine.active_frame`** samples one frame's keys at a given time.
  - `ActiveFrame.compute_quat` slerps between the neighbouring rotation keys.
  - `ActiveFrame.compute_vec` interpolates linearly between the neighbouring position keys.
  - Both raise `NoKeysError` when the frame has no keys of that kind.
  - `supple_num` gives the blend factor between two key times.
- **`airsengine.mesh_object`** describes a single mesh.
  - `MeshObject` holds vertices, triangular faces and `Material`s.
  - `compute_length` gives the bounding-sphere radius.
  - `triangles` yields each face as three vertex positions.
  - `render` returns the material subsets to draw: the opaque ones first, then the translucent ones.
- **`airsengine.mesh`** describes the frame hierarchy.
  - `MeshFrame` and `MeshData` form a tree of frames, numbered in the order they are added.
  - `find_frame` looks up a frame by its number.
  - `walk` yields each frame with its world matrix. A list of per-frame motion matrices can be given to use in place of the frames' own matrices.
- **`airsengine.active_motion`** plays and blends motions.
  - `ActiveData` binds one `MotionData` to a `MeshData`. The two must have the same frame count, at most 32. `run` advances the time and wraps to 0 after the last key time.
  - `ActiveMotion` holds up to 32 motions.
    - Call `load_mesh`, then `load_motion`.
    - `change_motion` and `change_motion_pair` shift the blend weights towards one motion or an even mix of two. Both take a default speed of 0.1.
    - `play` advances all motions and computes the blended matrices.
    - `update` copies those matrices into the render state.
    - `render` walks the mesh with them.
    - `set_active_time` jumps one motion to a given time.
- **`airsengine.graphic`** holds the scene objects.
  - `GraphicObject2D` and `GraphicObject3D` keep a logic ("base") state and a render ("stock") state. `update` copies the first into the second.
  - `Sprite` draws one part of a texture at its position.
  - `ScrollBackground` scrolls a tiled texture and wraps it after one texture size. It fills a 640×480 screen.
  - `render` returns a list of `DrawCall` records.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

This example plays a simple two-frame walk motion on a mesh.

```python
from airsengine.mesh import MeshData
from airsengine.motion import MotionData, MotionFrame
from airsengine.active_motion import ActiveMotion

mesh = MeshData()
root = mesh.add_frame("body", None)
mesh.add_frame("arm", root)

walk = MotionData()
for name in ("body", "arm"):
    frame = MotionFrame(name)
    frame.create_key(2, [(0, (0.0, 0.0, 0.0)), (10, (0.0, 1.0, 0.0))])
    walk.add_frame(frame)

player = ActiveMotion()
player.load_mesh(mesh)
player.load_motion(walk)
player.play()
player.update()

for frame, world in player.render():
    print(frame.name, world[3, :3])
```

## What it does not do

The package does not open a window, and it does not draw pixels or read input.

Its `render` methods return plain records: draw calls, material subsets, or frames with their matrices. A renderer of your choice has to carry them out.

It does not read model or animation files either. You build meshes and motions in code, from vertices, faces and key lists that you load yourself.