"""transcache: content-addressed cache for source transform results."""

from transcache.version import __version__

__all__ = ["__version__"]
