"""Service layer for crd_browser."""
