"""devfolio — content schema and site configuration for a developer portfolio."""

__version__ = "0.1.0"
