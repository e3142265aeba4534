"""Triangle mesh building blocks: 3D vectors, mesh file I/O, max-flow cuts and segmentation."""

__version__ = "0.1.0"
__all__ = ["point3d", "mesh_model", "maxflow", "segmenter"]