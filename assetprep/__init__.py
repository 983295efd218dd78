"""Convert PNG textures and OBJ meshes into GPU-ready binary assets with generated wrappers."""

__version__ = "0.1.0"