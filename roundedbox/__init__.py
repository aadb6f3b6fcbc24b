"""Triangle meshes for boxes with rounded edges and corners."""

__version__ = "0.10.0"
__all__ = ["indexer", "mesh"]