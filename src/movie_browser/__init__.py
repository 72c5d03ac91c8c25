"""Search, browse, and inspect titles from the TMDB movie catalog."""

__version__ = "0.1.0"

__all__ = ["__version__"]
