"""Grid-based tower defence engine: levels, paths, waves, enemies, towers and bullets."""

__version__ = "0.1.0"
__all__ = ["__version__"]