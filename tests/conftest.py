from pathlib import Path

import numpy as np
import pytest

from triobj import DrawStream

#: A single triangle whose three corners all reference the first record of every pool.
TRIANGLE_OBJ = b"v 0.0 1.0 2.0\nvt 0.5 0.5\nvn 0.0 0.0 1.0\nf 1/1/1 1/1/1 1/1/1\n"

#: A unit quad in the XY plane split into two triangles, as exported by a typical modeling tool.
QUAD_OBJ = b"""# Blender 4.1
# www.blender.org
mtllib quad.mtl
o Quad
v 0.0 0.0 0.0
v 1.0 0.0 0.0
v 1.0 1.0 0.0
v 0.0 1.0 0.0
vn -0.0 -0.0 1.0
vt 0.0 0.0
vt 1.0 0.0
vt 1.0 1.0
vt 0.0 1.0
s 0
usemtl Material
f 1/1/1 2/2/1 3/3/1
f 1/1/1 3/3/1 4/4/1
"""


@pytest.fixture
def triangle_obj() -> bytes:
    """The contents of an OBJ file holding a single triangle."""
    return TRIANGLE_OBJ


@pytest.fixture
def quad_obj() -> bytes:
    """The contents of an OBJ file holding a quad split into two triangles."""
    return QUAD_OBJ


@pytest.fixture
def triangle_file(tmp_path: Path) -> Path:
    """An OBJ file holding a single triangle."""
    path = tmp_path / "triangle.obj"
    path.write_bytes(TRIANGLE_OBJ)

    return path


@pytest.fixture
def quad_file(tmp_path: Path) -> Path:
    """An OBJ file holding a quad split into two triangles."""
    path = tmp_path / "quad.obj"
    path.write_bytes(QUAD_OBJ)

    return path


@pytest.fixture
def empty_stream() -> DrawStream:
    """A draw stream with no faces."""
    return DrawStream(
        positions=np.empty((0, 3), dtype=np.float32),
        normals=np.empty((0, 3), dtype=np.float32),
        texture_coords=np.empty((0, 2), dtype=np.float32),
    )


@pytest.fixture
def simple_stream() -> DrawStream:
    """A draw stream with one triangle in the XY plane."""
    positions = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
        ],
        dtype=np.float32,
    )
    normals = np.array(
        [
            [0.0, 0.0, 1.0],
            [0.0, 0.0, 1.0],
            [0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )
    texture_coords = np.array(
        [
            [0.0, 0.0],
            [1.0, 0.0],
            [0.0, 1.0],
        ],
        dtype=np.float32,
    )

    return DrawStream(positions=positions, normals=normals, texture_coords=texture_coords)
