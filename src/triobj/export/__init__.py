"""Export draw streams to common 3D file formats."""

__all__ = ["ExportFormat", "export_stream"]

from .export import ExportFormat, export_stream
