"""Monthly box-office ranking service built on the TMDB API."""

__version__ = "1.0.0"
