"""Multi-scale box blur and difference filtering for binary PPM images, with a result checker."""

__version__ = "0.1.0"
__all__ = ["ppm", "blur", "pipeline", "checker"]