"""A loader for triangulated Wavefront OBJ files producing render-ready draw streams."""

__all__ = [
    "CapacityExceededError",
    "DanglingIndexError",
    "DrawStream",
    "ExportFormat",
    "InvalidIndexError",
    "LoadLimits",
    "MalformedTokenError",
    "NonTriangulatedFaceError",
    "OBJError",
    "OBJParseError",
    "OBJReadError",
    "TruncatedRecordError",
    "export_stream",
    "load_obj",
    "load_obj_with_limits",
]

__version__ = "0.1.0"

from triobj.exceptions import (
    CapacityExceededError,
    DanglingIndexError,
    InvalidIndexError,
    MalformedTokenError,
    NonTriangulatedFaceError,
    OBJError,
    OBJParseError,
    OBJReadError,
    TruncatedRecordError,
)
from triobj.export import ExportFormat, export_stream
from triobj.loader import LoadLimits, load_obj, load_obj_with_limits
from triobj.mesh import DrawStream
