"""Version information for crd_browser."""

__version__ = "0.3.0"
