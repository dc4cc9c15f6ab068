"""A tile-based puzzle game about getting to bed well hydrated, with map validation and an XPM reader."""

__version__ = "0.1.0"
__all__ = ["colors", "display", "game", "mapfile", "messages", "xpm"]