"""Expansion of indexed faces into a flat draw stream."""

from __future__ import annotations

__all__ = ["unfacet"]

import typing as t

import numpy as np

from triobj.exceptions import DanglingIndexError
from triobj.mesh import DrawStream

if t.TYPE_CHECKING:
    import numpy.typing as npt

    from triobj.mesh import RawGeometry


def _gather(
    pool: npt.NDArray[np.float32],
    indices: npt.NDArray[np.int64],
    attribute: str,
) -> npt.NDArray[np.float32]:
    """Copy the pool entry selected by each index, in index order.

    :param pool: The attribute pool of shape (N, K).
    :param indices: The 0-based indices of shape (C,).
    :param attribute: The attribute name, used in diagnostics.
    :return: The gathered entries of shape (C, K).
    :raises DanglingIndexError: If an index points past the end of the pool.
    """
    pool_size = int(pool.shape[0])
    dangling = np.flatnonzero(indices >= pool_size)
    if dangling.size > 0:
        corner = int(dangling[0])
        raise DanglingIndexError(attribute, int(indices[corner]) + 1, corner, pool_size)

    gathered = pool[indices.astype(np.intp)]
    gathered.flags.writeable = False

    return gathered


def unfacet(raw: RawGeometry) -> DrawStream:
    """Expand the face indices into per-corner copies of the attributes they reference.

    Vertices shared between faces are duplicated, so entry ``i`` of every output array belongs to the
    same corner and no index buffer is needed to draw the result.

    :param raw: The attribute pools and face indices produced by the parser.
    :return: The draw stream.
    :raises DanglingIndexError: If a face references a record that was never parsed.
    """
    positions = _gather(raw.positions, raw.vertex_indices, "position")
    texture_coords = _gather(raw.texture_coords, raw.texture_indices, "texture coordinate")
    normals = _gather(raw.normals, raw.normal_indices, "normal")

    return DrawStream(positions=positions, normals=normals, texture_coords=texture_coords)
