"""pixelsmith - procedural pixel-art character sprites with idle, walk and attack cycles."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pixelsmith")
except PackageNotFoundError:
    __version__ = "unknown"
