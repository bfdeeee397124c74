"""Command-line interface for crd_browser."""
