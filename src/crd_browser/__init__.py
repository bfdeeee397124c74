"""Resource catalog and object browser for Kubernetes-style REST backends."""

from crd_browser.__version__ import __version__

__all__ = ["__version__"]
