"""Game-engine core: geometry helpers, keyframed motion blending, mesh frame hierarchies and 2D/3D scene objects."""

__version__ = "0.1.0"