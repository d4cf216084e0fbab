"""FolioForge - animated portfolio builder."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("folioforge")
except PackageNotFoundError:
    __version__ = "unknown"
