"""Pixel-art 2D game layer: asset packing, sprite rendering, audio and input on pygame."""

__version__ = "0.1.0"