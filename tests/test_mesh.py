import numpy as np

from triobj.mesh import DrawStream, RawGeometry


class TestDrawStream:
    """Tests for the DrawStream class."""

    def test_num_vertices(self, simple_stream: DrawStream) -> None:
        """Return the corner count."""
        assert simple_stream.num_vertices == 3
        assert len(simple_stream.positions) == 3

    def test_num_faces(self, simple_stream: DrawStream) -> None:
        """Return the triangle count."""
        assert simple_stream.num_faces == 1

    def test_interleaved(self, simple_stream: DrawStream) -> None:
        """Interleave positions, normals and texture coordinates per vertex."""
        interleaved = simple_stream.interleaved()

        assert interleaved.shape == (3, 8)
        assert interleaved.dtype == np.float32
        np.testing.assert_allclose(interleaved[1], [1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 0.0])

    def test_triangles(self, simple_stream: DrawStream) -> None:
        """Group the positions per face."""
        triangles = simple_stream.triangles()

        assert triangles.shape == (1, 3, 3)
        np.testing.assert_allclose(triangles[0, 2], [0.0, 1.0, 0.0])

    def test_empty_stream(self, empty_stream: DrawStream) -> None:
        """Handle a stream with no faces."""
        assert empty_stream.num_vertices == 0
        assert empty_stream.num_faces == 0
        assert empty_stream.interleaved().shape == (0, 8)
        assert empty_stream.triangles().shape == (0, 3, 3)


class TestRawGeometry:
    """Tests for the RawGeometry class."""

    def test_counts(self) -> None:
        """Return corner and face counts."""
        raw = RawGeometry(
            positions=np.zeros((1, 3), dtype=np.float32),
            texture_coords=np.zeros((1, 2), dtype=np.float32),
            normals=np.zeros((1, 3), dtype=np.float32),
            vertex_indices=np.zeros(6, dtype=np.int64),
            texture_indices=np.zeros(6, dtype=np.int64),
            normal_indices=np.zeros(6, dtype=np.int64),
        )

        assert raw.num_corners == 6
        assert raw.num_faces == 2
