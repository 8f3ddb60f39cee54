# src/__init__.py — v1
"""smartrerank — query-relevance reranking service with result caching."""

from smartrerank.version import __version__

__all__ = ["__version__"]
