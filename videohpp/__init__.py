"""videohpp - C++ wrapper generator for the Vulkan video std headers."""

from importlib import metadata

try:
    __version__ = metadata.version(__name__)
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"
