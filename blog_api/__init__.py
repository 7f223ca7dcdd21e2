"""Blog platform HTTP API: posts, categories, comments and users."""

__version__ = "1.0.0"
